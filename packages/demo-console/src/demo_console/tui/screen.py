"""
ConsoleScreen: interactive rich screen for one demo catalog.

The screen owns the per-screen pieces of the console:
- LogSink bound to the running event loop through a LoopMarshaler
- Dispatcher over the catalog's registry
- ScrollPresenter drawing the log tail inside the log panel

Keys come from KeyboardTask and are turned into commands by
command_for_key(). Demos run inline on the loop thread; worker threads the
demos start append through the sink and their lines are applied on the loop
in arrival order.

Run order:
1. Register signal handlers before entering the Live context
2. Bind sink, dispatcher and presenter to the loop, write the greeting
3. Enter Live and run the keyboard and refresh tasks in a TaskGroup
4. On quit: close the catalog off the loop thread, flush the sink
"""

import asyncio
import functools
import signal

from rich.console import Console
from rich.live import Live

from demo_console.catalogs.base import Catalog
from demo_console.dispatcher import ClearLog, Command, Dispatcher, RunDemo
from demo_console.marshal import LoopMarshaler
from demo_console.presenter import ScrollPresenter
from demo_console.registry import DemoEntry
from demo_console.settings import Settings
from demo_console.sink import LogSink
from demo_console.tui.keyboard import KeyboardTask
from demo_console.tui.layout import create_layout, format_menu, make_log_panel, make_panel

QUIT_KEYS = ("q", "Q")
CLEAR_KEYS = ("c", "C")
SCROLL_KEYS = {"up": -1, "down": 1}


def command_for_key(key: str, entries: list[DemoEntry]) -> Command | None:
    """
    Map a keypress to a console command.

    Args:
        key: Key from KeyboardTask
        entries: Menu entries; "1" selects the first

    Returns:
        RunDemo, ClearLog, or None if the key has no command
    """
    if key in CLEAR_KEYS:
        return ClearLog()
    if len(key) == 1 and key.isdigit() and key != "0":
        index = int(key) - 1
        if index < len(entries):
            return RunDemo(entries[index].id)
    return None


class ConsoleScreen:
    """
    Interactive screen: menu on the left, log on the right.

    Example:
        screen = ConsoleScreen(build_catalog("threads"))
        await screen.run()  # Runs until Q or Ctrl+C
    """

    def __init__(
        self,
        catalog: Catalog,
        settings: Settings | None = None,
        console: Console | None = None,
    ) -> None:
        """
        Initialize screen.

        Args:
            catalog: Demos to offer
            settings: Display settings (loaded from the environment if None)
            console: Rich Console to use (creates default if None)
        """
        self.catalog = catalog
        self.settings = settings if settings is not None else Settings()
        self.console = console if console is not None else Console()
        self._entries = catalog.registry.entries()
        self._shutdown = asyncio.Event()
        self._layout = create_layout()
        self._keyboard: KeyboardTask | None = None
        self.sink: LogSink | None = None
        self.dispatcher: Dispatcher | None = None
        self.presenter: ScrollPresenter | None = None

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Create the sink, dispatcher and presenter for this screen.

        Args:
            loop: Event loop that owns the display
        """
        self.sink = LogSink(LoopMarshaler(loop))
        self.dispatcher = Dispatcher(self.catalog.registry, self.sink)
        self.presenter = ScrollPresenter(
            self.sink,
            scroll_delay=self.settings.scroll_delay,
            loop=loop,
            console=self.console,
        )
        for line in self.catalog.greeting:
            self.sink.append(line)

    @property
    def shutdown(self) -> asyncio.Event:
        return self._shutdown

    async def run(self) -> None:
        """Run the screen until quit, then release the catalog's resources."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, functools.partial(self._handle_signal, sig))

        self.bind(loop)
        self._keyboard = KeyboardTask(on_key=self.handle_key)
        self._init_panels()

        try:
            with self._make_live() as live:
                async with asyncio.TaskGroup() as tg:
                    tg.create_task(self._keyboard.run())
                    tg.create_task(self._update_loop(live))
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)
            if self.presenter is not None:
                self.presenter.cancel()
            await loop.run_in_executor(None, self.catalog.close)
            if self.sink is not None:
                await self.sink.flush()

    def _make_live(self) -> Live:
        # Redraws happen only from _update_loop, on the loop thread that owns
        # the presenter.
        return Live(
            self._layout,
            console=self.console,
            auto_refresh=False,
            screen=False,
        )

    def handle_key(self, key: str) -> None:
        """
        Handle one keypress on the loop thread.

        Args:
            key: Key from KeyboardTask
        """
        if key in QUIT_KEYS:
            self.stop()
            return
        if key in SCROLL_KEYS:
            if self.presenter is not None:
                self.presenter.scroll_by(SCROLL_KEYS[key])
            return

        command = command_for_key(key, self._entries)
        if command is not None and self.dispatcher is not None:
            self.dispatcher.dispatch(command)

    def stop(self) -> None:
        """Ask the screen to close."""
        self._shutdown.set()
        if self._keyboard is not None:
            self._keyboard.stop()

    def _handle_signal(self, sig: signal.Signals) -> None:
        self.stop()

    def _init_panels(self) -> None:
        self._layout["header"].update(make_panel(self.catalog.title, "Demo Console", "magenta"))
        self._layout["body"]["menu"].update(make_panel(format_menu(self._entries), "Demos", "cyan"))
        self._refresh_log_panel()

    def _refresh_log_panel(self) -> None:
        if self.presenter is None:
            return
        line_count = len(self.presenter.snapshot)
        self._layout["body"]["log"].update(make_log_panel(self.presenter, line_count))

    async def _update_loop(self, live: Live) -> None:
        interval = 1.0 / self.settings.refresh_per_second
        while not self._shutdown.is_set():
            self._refresh_log_panel()
            live.refresh()
            try:
                await asyncio.wait_for(self._shutdown.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass  # Normal refresh interval
