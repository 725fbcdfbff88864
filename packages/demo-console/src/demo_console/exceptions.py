"""
Exception classes for demo registration and dispatch.

This module defines the error taxonomy of the demo console:
- DuplicateIdError: A demo id was registered twice (programming error)
- UnknownDemoError: A command named a demo that is not registered
- HandlerExecutionError: A demo handler raised while running

Only DuplicateIdError is meant to escape: it is raised while a catalog is
assembled and should stop the process at startup. The other two are caught
at the Dispatcher boundary and turned into console log lines.
"""


class DemoConsoleError(Exception):
    """Base class for demo console errors."""


class DuplicateIdError(DemoConsoleError):
    """
    Raised when a demo id is registered more than once.

    Attributes:
        demo_id: The id that was already present
    """

    def __init__(self, demo_id: str) -> None:
        self.demo_id = demo_id
        super().__init__(f"demo '{demo_id}' is already registered")


class UnknownDemoError(DemoConsoleError, LookupError):
    """
    Raised when no registered demo matches an id.

    Attributes:
        demo_id: The id that failed to resolve
    """

    def __init__(self, demo_id: str) -> None:
        self.demo_id = demo_id
        super().__init__(f"unknown demo '{demo_id}'")


class HandlerExecutionError(DemoConsoleError):
    """
    Wraps an exception raised inside a demo handler.

    The string form is the exact diagnostic line written to the console log.

    Attributes:
        demo_id: The demo whose handler failed
        cause: The original exception
    """

    def __init__(self, demo_id: str, cause: BaseException) -> None:
        self.demo_id = demo_id
        self.cause = cause
        message = str(cause) or type(cause).__name__
        super().__init__(f"demo '{demo_id}' failed: {message}")
