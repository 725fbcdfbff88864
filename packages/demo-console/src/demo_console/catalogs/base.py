"""Catalog type shared by all demo collections."""

from dataclasses import dataclass, field
from typing import Callable

from demo_console.registry import DemoRegistry


@dataclass
class Catalog:
    """
    A named set of demos shown together on one screen.

    Attributes:
        name: Identifier used on the command line (e.g. "threads")
        title: Heading shown above the menu
        registry: Frozen table of the catalog's demos
        greeting: Lines written to the log when the screen opens
        on_close: Optional hook releasing resources the demos own
    """

    name: str
    title: str
    registry: DemoRegistry
    greeting: tuple[str, ...] = field(default_factory=tuple)
    on_close: Callable[[], None] | None = None

    def close(self) -> None:
        """Run the close hook, if any. Safe to call more than once."""
        hook, self.on_close = self.on_close, None
        if hook is not None:
            hook()
