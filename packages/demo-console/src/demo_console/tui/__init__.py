"""
TUI module for the interactive demo console.

This module provides the building blocks of the console screen:
- ConsoleScreen: Screen controller with signal handling and refresh loop
- command_for_key: Keypress to command mapping
- KeyboardTask: Async keyboard reader
- create_layout, make_panel, format_menu, make_log_panel: Layout helpers
"""

from demo_console.tui.keyboard import KeyboardTask
from demo_console.tui.layout import create_layout, format_menu, make_log_panel, make_panel
from demo_console.tui.screen import ConsoleScreen, command_for_key

__all__ = [
    "ConsoleScreen",
    "KeyboardTask",
    "command_for_key",
    "create_layout",
    "format_menu",
    "make_log_panel",
    "make_panel",
]
