"""
KeyboardTask: the action source of the interactive screen.

Reading stdin blocks, so each read runs in the default executor with a
select() timeout. The thread always returns quickly and the task can notice
stop() between reads. Keypresses are delivered to the callback on the event
loop thread, which is where the Dispatcher runs demos.

Escape sequences for the arrow keys are folded into readable names
("up", "down", "left", "right").
"""

import asyncio
import select
import sys
import termios
import tty
from typing import Callable

ESCAPE_NAMES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
}


def _read_available(timeout: float) -> str | None:
    if select.select([sys.stdin], [], [], timeout)[0]:
        return sys.stdin.read(1)
    return None


def read_key(timeout: float) -> str | None:
    """
    Read one keypress, waiting at most timeout seconds.

    The terminal must already be in cbreak mode.

    Returns:
        The key (or its name for arrow keys), or None on timeout
    """
    key = _read_available(timeout)
    if key != "\x1b":
        return key
    # Arrow keys arrive as ESC [ X within a few milliseconds.
    for _ in range(2):
        follow = _read_available(0.05)
        if follow is None:
            break
        key += follow
    return ESCAPE_NAMES.get(key, key)


class KeyboardTask:
    """
    Async keyboard reader meant to run inside the screen's TaskGroup.

    Example:
        keyboard = KeyboardTask(on_key=screen.handle_key)
        tg.create_task(keyboard.run())
        # Later:
        keyboard.stop()
    """

    def __init__(self, on_key: Callable[[str], None], poll_interval: float = 0.3) -> None:
        """
        Initialize keyboard task.

        Args:
            on_key: Callback invoked on the loop thread with each key
            poll_interval: Seconds each blocking read may wait
        """
        self._on_key = on_key
        self._poll_interval = poll_interval
        self._shutdown = asyncio.Event()

    async def run(self) -> None:
        """Read keys until stop() is called, restoring the terminal afterwards."""
        loop = asyncio.get_running_loop()
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setcbreak(fd)
            while not self._shutdown.is_set():
                key = await loop.run_in_executor(None, read_key, self._poll_interval)
                if key is not None:
                    self._on_key(key)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    def stop(self) -> None:
        """Signal task to stop."""
        self._shutdown.set()
