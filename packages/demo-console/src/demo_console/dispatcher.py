"""
Dispatcher: runs demos by id and reports everything in the console log.

Commands from the action source (keyboard, CLI) are plain values:
- RunDemo(demo_id): Resolve and run one demo
- ClearLog(): Empty the console log

Dispatcher.run() never raises for an unknown id or a failing handler. Both
become a single diagnostic line in the log, because the log is the only
output the user sees.
"""

import logging
from dataclasses import dataclass

from demo_console.exceptions import HandlerExecutionError, UnknownDemoError
from demo_console.output import capture_output
from demo_console.registry import DemoRegistry
from demo_console.sink import LogSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunDemo:
    """Run the demo registered under demo_id."""

    demo_id: str


@dataclass(frozen=True)
class ClearLog:
    """Clear the console log."""


Command = RunDemo | ClearLog


def header_line(demo_id: str) -> str:
    """Return the line written before a demo starts."""
    return f"=== running {demo_id} ==="


class Dispatcher:
    """
    Resolves demo ids against a registry and runs them into a LogSink.

    Example:
        dispatcher = Dispatcher(registry, sink)
        dispatcher.run("double")
        dispatcher.dispatch(ClearLog())
    """

    def __init__(self, registry: DemoRegistry, sink: LogSink) -> None:
        """
        Initialize dispatcher.

        Args:
            registry: Demo table to resolve ids against
            sink: Log that receives headers, demo output and diagnostics
        """
        self.registry = registry
        self.sink = sink

    def dispatch(self, command: Command) -> None:
        """
        Execute one command.

        Args:
            command: RunDemo or ClearLog

        Raises:
            TypeError: If command is not a known command type
        """
        if isinstance(command, RunDemo):
            self.run(command.demo_id)
        elif isinstance(command, ClearLog):
            self.sink.clear()
        else:
            raise TypeError(f"Unsupported command: {command!r}")

    def run(self, demo_id: str) -> None:
        """
        Run a demo synchronously, capturing its output.

        Writes a header line first so output stays attributable when the
        same demo runs repeatedly. Lines the handler wrote before failing
        are kept and followed by exactly one failure line.

        Args:
            demo_id: Id of the demo to run
        """
        try:
            handler = self.registry.resolve(demo_id)
        except UnknownDemoError as e:
            logger.warning("Ignoring command for unregistered demo %r", demo_id)
            self.sink.append(str(e))
            return

        self.sink.append(header_line(demo_id))
        try:
            with capture_output(self.sink):
                handler()
        except Exception as e:
            error = HandlerExecutionError(demo_id, e)
            logger.warning("%s", error)
            logger.debug("Handler traceback for demo %r", demo_id, exc_info=e)
            self.sink.append(str(error))
