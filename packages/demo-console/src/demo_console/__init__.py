"""
Demo console: run small demos by id and watch their output in one log.

This package provides:
- DemoRegistry, DemoEntry: Table of demos keyed by id
- LogSink, LogLine, RenderSnapshot: Shared append-only log and its snapshots
- InlineMarshaler, LoopMarshaler: Contexts that serialize log mutations
- Dispatcher, RunDemo, ClearLog: Command execution into the log
- ScrollPresenter: Log viewport pinned to the newest line
- echo, current_sink, capture_output: Output capture for demo handlers
"""

from demo_console.dispatcher import ClearLog, Command, Dispatcher, RunDemo
from demo_console.exceptions import (
    DemoConsoleError,
    DuplicateIdError,
    HandlerExecutionError,
    UnknownDemoError,
)
from demo_console.marshal import InlineMarshaler, LoopMarshaler, Marshaler
from demo_console.output import capture_output, current_sink, echo
from demo_console.presenter import PresenterState, ScrollPresenter
from demo_console.registry import DemoEntry, DemoRegistry
from demo_console.sink import LogLine, LogSink, RenderSnapshot

__all__ = [
    "ClearLog",
    "Command",
    "DemoConsoleError",
    "DemoEntry",
    "DemoRegistry",
    "Dispatcher",
    "DuplicateIdError",
    "HandlerExecutionError",
    "InlineMarshaler",
    "LogLine",
    "LogSink",
    "LoopMarshaler",
    "Marshaler",
    "PresenterState",
    "RenderSnapshot",
    "RunDemo",
    "ScrollPresenter",
    "UnknownDemoError",
    "capture_output",
    "current_sink",
    "echo",
]
