"""
LogSink: the shared, append-only console log.

This module implements the text buffer every demo writes into and the
snapshot the presentation layer reads:
- LogLine: One immutable line with its sequence number
- RenderSnapshot: Immutable view of the whole buffer at one point in time
- LogSink: Ordered buffer whose mutations go through a Marshaler

Writers call append()/clear() from any thread. The sink splits the text on
the caller's side, then posts the mutation to its Marshaler, so the buffer is
only ever touched on the owning context and in arrival order. After each
mutation a fresh RenderSnapshot replaces the previous one and the listener
(if any) is notified.

Unlike a fixed-size ring buffer, the log grows until clear() is called.
"""

import asyncio
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Callable

from demo_console.marshal import InlineMarshaler, Marshaler

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> tuple[str, ...]:
    """
    Split text into log lines.

    Every line break starts a new line, so a trailing newline produces a
    trailing empty line and the empty string produces one empty line.

    Args:
        text: Text as written by a demo

    Returns:
        Tuple of line contents without line break characters
    """
    return tuple(_LINE_BREAK.split(text))


@dataclass(frozen=True)
class LogLine:
    """
    One line of console output.

    Attributes:
        sequence: Position in the log since the last clear, starting at 0
        content: Line text without a line break
    """

    sequence: int
    content: str


@dataclass(frozen=True)
class RenderSnapshot:
    """
    The whole log at one point in time.

    Attributes:
        lines: Lines in append order
        next_sequence: Sequence number the next appended line will get
    """

    lines: tuple[LogLine, ...] = ()
    next_sequence: int = 0

    @classmethod
    def empty(cls) -> "RenderSnapshot":
        return cls()

    @property
    def contents(self) -> list[str]:
        """Line texts in order."""
        return [line.content for line in self.lines]

    @property
    def text(self) -> str:
        """Lines joined with newlines, as displayed."""
        return "\n".join(self.contents)

    def tail(self, n: int) -> list[str]:
        """
        Get the last n line texts.

        Args:
            n: Number of lines to return

        Returns:
            Up to n line texts, newest last
        """
        if n <= 0:
            return []
        return self.contents[-n:]

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[LogLine]:
        return iter(self.lines)


SnapshotListener = Callable[[RenderSnapshot], None]


class LogSink:
    """
    Append-only log shared by all demo handlers of one screen.

    Mutations are posted through the marshaler and never block the caller.
    Reads of current_snapshot() return the last published snapshot.

    Example:
        sink = LogSink()
        sink.append("line 1")
        sink.append("line 2\\nline 3")
        print(sink.current_snapshot().text)  # "line 1\\nline 2\\nline 3"
    """

    def __init__(
        self,
        marshaler: Marshaler | None = None,
        listener: SnapshotListener | None = None,
    ) -> None:
        """
        Initialize an empty log.

        Args:
            marshaler: Serializing context for mutations (inline if None)
            listener: Optional callback invoked with each new snapshot
        """
        self._marshaler = marshaler if marshaler is not None else InlineMarshaler()
        self._listener = listener
        self._lines: list[LogLine] = []
        self._next_sequence = 0
        self._snapshot = RenderSnapshot.empty()

    @property
    def marshaler(self) -> Marshaler:
        return self._marshaler

    def set_listener(self, listener: SnapshotListener | None) -> None:
        """
        Set the snapshot-changed listener, replacing any previous one.

        The listener runs on the marshaler's context after each mutation.
        """
        self._listener = listener

    def append(self, text: str) -> None:
        """
        Append text to the log.

        The text is split into lines here and the lines are applied as one
        unit, so they are never interleaved with another append's lines.

        Args:
            text: Text to add; may contain line breaks
        """
        contents = split_lines(text)
        self._marshaler.post(lambda: self._apply_append(contents))

    def clear(self) -> None:
        """Empty the log and restart sequence numbers at 0."""
        self._marshaler.post(self._apply_clear)

    def current_snapshot(self) -> RenderSnapshot:
        """Return the latest published snapshot."""
        return self._snapshot

    async def flush(self) -> RenderSnapshot:
        """
        Wait until every mutation posted before this call has been applied.

        Returns:
            The snapshot once those mutations are visible
        """
        done = asyncio.get_running_loop().create_future()

        def _mark() -> None:
            if not done.done():
                done.get_loop().call_soon_threadsafe(done.set_result, None)

        self._marshaler.post(_mark)
        await done
        return self._snapshot

    def _apply_append(self, contents: tuple[str, ...]) -> None:
        for content in contents:
            self._lines.append(LogLine(sequence=self._next_sequence, content=content))
            self._next_sequence += 1
        self._publish()

    def _apply_clear(self) -> None:
        self._lines.clear()
        self._next_sequence = 0
        self._publish()

    def _publish(self) -> None:
        self._snapshot = RenderSnapshot(
            lines=tuple(self._lines),
            next_sequence=self._next_sequence,
        )
        if self._listener is not None:
            self._listener(self._snapshot)
