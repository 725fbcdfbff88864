"""
ScrollPresenter: a log viewport that stays pinned to the newest line.

The presenter is the LogSink's listener and a rich renderable. On every
snapshot it swaps in the new content and schedules a scroll to the end. The
scroll is deferred so it runs after the content update is committed:

- scroll_delay == 0: loop.call_soon (next loop iteration)
- scroll_delay > 0: loop.call_later(scroll_delay)
- no loop: immediately, on the notifying thread

Scrolling needs the wrapped extent of the text, which depends on the width
of the panel the log is drawn in. Each render records that width, and the
scroll measures the new content at the last known width.
"""

import asyncio
from enum import Enum

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

from demo_console.sink import LogSink, RenderSnapshot

PLACEHOLDER = "Log area - waiting for output..."


class PresenterState(Enum):
    """Whether a scroll to the end is waiting to run."""

    IDLE = "idle"
    UPDATE_PENDING = "update_pending"


class ScrollPresenter:
    """
    Scrollable view over a LogSink.

    Example:
        presenter = ScrollPresenter(sink, loop=asyncio.get_running_loop())
        layout["log"].update(Panel(presenter, title="Log"))
    """

    def __init__(
        self,
        sink: LogSink,
        height: int = 20,
        scroll_delay: float = 0.05,
        loop: asyncio.AbstractEventLoop | None = None,
        console: Console | None = None,
    ) -> None:
        """
        Initialize presenter and subscribe to the sink.

        Args:
            sink: Log to display
            height: Viewport rows used until the first render reports its size
            scroll_delay: Seconds to defer the scroll after an update
            loop: Event loop that owns the display (None scrolls inline)
            console: Console used to measure wrapped text
        """
        self._sink = sink
        self._loop = loop
        self.scroll_delay = scroll_delay
        self.height = height
        self.width: int | None = None
        self._console = console
        self._snapshot = sink.current_snapshot()
        self._offset = 0
        self._extent = len(self._snapshot)
        self._pending: asyncio.Handle | asyncio.TimerHandle | None = None
        self.state = PresenterState.IDLE
        sink.set_listener(self.on_snapshot)

    @property
    def snapshot(self) -> RenderSnapshot:
        """Snapshot currently displayed."""
        return self._snapshot

    @property
    def offset(self) -> int:
        """Index of the first visible wrapped line."""
        return self._offset

    @property
    def extent(self) -> int:
        """Number of wrapped lines in the current content."""
        return self._extent

    def on_snapshot(self, snapshot: RenderSnapshot) -> None:
        """
        Replace the displayed content and schedule a scroll to the end.

        Args:
            snapshot: Newly published log snapshot
        """
        self._snapshot = snapshot
        self.state = PresenterState.UPDATE_PENDING
        self._schedule_scroll()

    def _schedule_scroll(self) -> None:
        if self._loop is None:
            self.scroll_to_end()
            return
        # One pending scroll is enough; it measures the latest content.
        if self._pending is not None:
            return
        if self.scroll_delay > 0:
            self._pending = self._loop.call_later(self.scroll_delay, self.scroll_to_end)
        else:
            self._pending = self._loop.call_soon(self.scroll_to_end)

    def scroll_to_end(self) -> None:
        """Move the viewport so the last line sits at its bottom."""
        self._pending = None
        self._extent = self._measure()
        self._offset = max(0, self._extent - self.height)
        self.state = PresenterState.IDLE

    def scroll_by(self, delta: int) -> None:
        """
        Scroll manually by delta lines (negative is up).

        The next snapshot pins the view to the end again.
        """
        max_offset = max(0, self._extent - self.height)
        self._offset = min(max(0, self._offset + delta), max_offset)

    def cancel(self) -> None:
        """Drop a pending scroll, e.g. when the screen closes."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.state = PresenterState.IDLE

    def _wrapped(self, console: Console, width: int) -> list[Text]:
        if not self._snapshot.lines:
            return [Text(PLACEHOLDER, style="dim")]
        return list(Text(self._snapshot.text).wrap(console, width))

    def _measure(self) -> int:
        if self.width is None or self._console is None:
            return max(1, len(self._snapshot))
        return len(self._wrapped(self._console, self.width))

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        self._console = console
        self.width = options.max_width
        if options.height is not None:
            self.height = options.height

        lines = self._wrapped(console, self.width)
        self._extent = len(lines)
        offset = min(self._offset, max(0, self._extent - self.height))
        yield Text("\n").join(lines[offset : offset + self.height])
