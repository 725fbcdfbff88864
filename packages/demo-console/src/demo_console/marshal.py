"""
Marshalers that funnel log mutations onto their owning context.

A LogSink never mutates its buffer on the caller's thread directly. Every
append and clear is posted through a Marshaler, which runs the posted
callbacks one at a time in arrival order on the context that owns the log.

- LoopMarshaler: the owner is an asyncio event loop (interactive screen).
  Posting uses loop.call_soon_threadsafe, which is safe from any thread,
  returns immediately, and runs callbacks in FIFO order.
- InlineMarshaler: there is no UI context (batch runs, tests). Callbacks run
  immediately on the calling thread while holding a re-entrant lock, so
  concurrent callers are still applied one whole callback at a time.
"""

import asyncio
import threading
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Marshaler(Protocol):
    """Runs posted callbacks strictly in arrival order on one context."""

    def post(self, callback: Callable[[], None]) -> None:
        """Schedule callback without waiting for it to run."""
        ...


class InlineMarshaler:
    """Applies callbacks on the calling thread, serialized by a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def post(self, callback: Callable[[], None]) -> None:
        # Re-entrant so a listener may append while a snapshot is published.
        with self._lock:
            callback()


class LoopMarshaler:
    """
    Posts callbacks onto an asyncio event loop.

    Example:
        loop = asyncio.get_running_loop()
        sink = LogSink(LoopMarshaler(loop))
        # Worker threads may now call sink.append(...) freely.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def post(self, callback: Callable[[], None]) -> None:
        self._loop.call_soon_threadsafe(callback)
