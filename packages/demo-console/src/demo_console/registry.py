"""
Demo registry for dispatch by symbolic id.

This module provides:
- DemoEntry: Immutable description of one runnable demo
- DemoRegistry: Table from demo id to entry, read-only once frozen

Adding a demo is a registration, not a new branch in a conditional:

    ```python
    registry = DemoRegistry()
    registry.register("double", "Double a number", lambda: echo("2 -> 4"))
    registry.freeze()

    handler = registry.resolve("double")
    ```
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Callable

from demo_console.exceptions import DuplicateIdError, UnknownDemoError

Handler = Callable[[], None]


@dataclass(frozen=True)
class DemoEntry:
    """
    One registered demo.

    Attributes:
        id: Symbolic identifier used by commands (unique per registry)
        display_name: Label shown in menus
        handler: Zero-argument routine that writes to the active log
    """

    id: str
    display_name: str
    handler: Handler


class DemoRegistry:
    """
    Mapping from demo id to DemoEntry.

    Entries keep their registration order, which is the order menus list
    them in. Resolution itself is a plain dict lookup.
    """

    def __init__(self) -> None:
        self._entries: dict[str, DemoEntry] = {}
        self._frozen = False

    @classmethod
    def from_entries(cls, entries: Iterable[DemoEntry]) -> "DemoRegistry":
        """
        Build a frozen registry from prepared entries.

        Raises:
            DuplicateIdError: If two entries share an id
        """
        registry = cls()
        for entry in entries:
            registry.register(entry.id, entry.display_name, entry.handler)
        registry.freeze()
        return registry

    def register(self, demo_id: str, display_name: str, handler: Handler) -> DemoEntry:
        """
        Register a demo handler under an id.

        Args:
            demo_id: Symbolic identifier for the demo
            display_name: Label shown in menus
            handler: Zero-argument routine to run

        Returns:
            The created DemoEntry

        Raises:
            DuplicateIdError: If demo_id is already registered
            RuntimeError: If the registry has been frozen
        """
        if self._frozen:
            raise RuntimeError("registry is frozen; demos are registered at startup")
        if demo_id in self._entries:
            raise DuplicateIdError(demo_id)
        entry = DemoEntry(id=demo_id, display_name=display_name, handler=handler)
        self._entries[demo_id] = entry
        return entry

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, demo_id: str) -> DemoEntry:
        """
        Look up the full entry for an id.

        Raises:
            UnknownDemoError: If no demo matches
        """
        try:
            return self._entries[demo_id]
        except KeyError:
            raise UnknownDemoError(demo_id) from None

    def resolve(self, demo_id: str) -> Handler:
        """
        Look up the handler for an id.

        Raises:
            UnknownDemoError: If no demo matches
        """
        return self.get(demo_id).handler

    def entries(self) -> list[DemoEntry]:
        """Return all entries in registration order."""
        return list(self._entries.values())

    def __contains__(self, demo_id: object) -> bool:
        return demo_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DemoEntry]:
        return iter(self.entries())
