"""
Output capture for demo handlers.

Handlers are zero-argument routines, so they reach the console log through
the active writer set up by the Dispatcher:
- echo(): Append text to the active sink
- current_sink(): The active sink, for handing to worker threads
- SinkWriter: File-like object that forwards complete lines to a sink
- capture_output(): Context manager activating a sink for echo() and print()

sys.stdout is replaced once by a router for as long as any capture is
active. The router sends each write to the SinkWriter of the calling context
and everything else to the stream it replaced, so demos running on
different threads never see each other's output.
"""

import contextlib
import contextvars
import io
import sys
import threading
from collections.abc import Iterator
from typing import Any, TextIO

from demo_console.sink import LogSink


class SinkWriter(io.TextIOBase):
    """
    Text stream that appends whole lines to a LogSink.

    print() writes the text and the line ending separately; buffering until
    a newline keeps one printed line as one log line.
    """

    def __init__(self, sink: LogSink) -> None:
        super().__init__()
        self.sink = sink
        self._pending = ""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        self._pending += s
        head, sep, tail = self._pending.rpartition("\n")
        if sep:
            self.sink.append(head)
            self._pending = tail
        return len(s)

    def flush(self) -> None:
        if self._pending:
            self.sink.append(self._pending)
            self._pending = ""


_active_writer: contextvars.ContextVar[SinkWriter | None] = contextvars.ContextVar(
    "demo_console_active_writer", default=None
)


def _current_writer() -> SinkWriter:
    writer = _active_writer.get()
    if writer is None:
        raise RuntimeError("no active log sink; demo output is only captured while a demo runs")
    return writer


def current_sink() -> LogSink:
    """
    Return the sink of the demo that is currently running.

    Raises:
        RuntimeError: If called outside a running demo
    """
    return _current_writer().sink


def echo(text: str = "") -> None:
    """Append text to the active sink, after any unterminated print() output."""
    writer = _current_writer()
    writer.flush()
    writer.sink.append(text)


class _StdoutRouter:
    """Stand-in for sys.stdout that dispatches on the active writer."""

    def __init__(self, fallback: TextIO) -> None:
        self.fallback = fallback

    def write(self, s: str) -> int:
        writer = _active_writer.get()
        if writer is None:
            return self.fallback.write(s)
        return writer.write(s)

    def flush(self) -> None:
        writer = _active_writer.get()
        if writer is None:
            self.fallback.flush()
        else:
            writer.flush()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.fallback, name)


_router_lock = threading.Lock()
_router: _StdoutRouter | None = None
_router_users = 0


def _install_router() -> None:
    global _router, _router_users
    with _router_lock:
        if _router_users == 0:
            _router = _StdoutRouter(sys.stdout)
            sys.stdout = _router
        _router_users += 1


def _uninstall_router() -> None:
    global _router, _router_users
    with _router_lock:
        _router_users -= 1
        if _router_users == 0 and _router is not None:
            # Leave sys.stdout alone if someone replaced it after us.
            if sys.stdout is _router:
                sys.stdout = _router.fallback
            _router = None


@contextlib.contextmanager
def capture_output(sink: LogSink) -> Iterator[SinkWriter]:
    """
    Route echo() and print() output to sink for the duration of the block.

    Only output from the current context is captured; other threads keep
    writing to their own sink or to the original stdout.

    Args:
        sink: Log to write into

    Yields:
        The SinkWriter receiving this context's stdout
    """
    writer = SinkWriter(sink)
    token = _active_writer.set(writer)
    _install_router()
    try:
        yield writer
    finally:
        writer.flush()
        _active_writer.reset(token)
        _uninstall_router()
