"""
Demo catalogs available to the console.

Each catalog module exposes build_catalog(); CATALOGS maps the name used on
the command line to that factory.
"""

from typing import Callable

from demo_console.catalogs import references, sugar, threads
from demo_console.catalogs.base import Catalog

CATALOGS: dict[str, Callable[[], Catalog]] = {
    "references": references.build_catalog,
    "threads": threads.build_catalog,
    "sugar": sugar.build_catalog,
}


def build_catalog(name: str) -> Catalog:
    """
    Build the catalog registered under name.

    Raises:
        KeyError: If no catalog has that name
    """
    try:
        factory = CATALOGS[name]
    except KeyError:
        raise KeyError(
            f"Unknown catalog '{name}'. Available: {', '.join(CATALOGS)}"
        ) from None
    return factory()


__all__ = ["CATALOGS", "Catalog", "build_catalog"]
