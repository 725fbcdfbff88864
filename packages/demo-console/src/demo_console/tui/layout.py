"""
Layout factory for the demo console screen.

Layout structure:
+----------------------------------------------------------+
|  Header: catalog title (3 rows fixed)                    |
+------------------+---------------------------------------+
|                  |                                       |
|  Menu            |  Log (flex, pinned to newest line)    |
|  (36 cols fixed) |                                       |
|                  |                                       |
+------------------+---------------------------------------+
"""

from rich.console import RenderableType
from rich.layout import Layout
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from demo_console.registry import DemoEntry

KEY_HINT = "[dim]1-9: run | C: clear | ↑/↓: scroll | Q: quit[/dim]"


def create_layout() -> Layout:
    """
    Create the console screen layout.

    Access regions via:
    - layout["header"]
    - layout["body"]["menu"]
    - layout["body"]["log"]

    Returns:
        Layout with 3 named regions
    """
    layout = Layout(name="root")
    layout.split_column(
        Layout(name="header", size=3),
        Layout(name="body"),
    )
    layout["body"].split_row(
        Layout(name="menu", size=36),
        Layout(name="log"),
    )
    return layout


def make_panel(content: RenderableType, title: str, style: str = "blue") -> Panel:
    """
    Create a styled panel with content.

    Args:
        content: Text or renderable for the panel
        title: Panel title (will be bolded)
        style: Border style color (default "blue")

    Returns:
        Panel with formatted title and border style
    """
    return Panel(
        content,
        title=f"[bold]{title}[/bold]",
        border_style=style,
        padding=(0, 1),
    )


def format_menu(entries: list[DemoEntry]) -> Text:
    """
    Render the numbered demo menu.

    Only the first nine entries get a key; the rest are listed dimmed.

    Args:
        entries: Demos in registration order

    Returns:
        Rich Text with one line per demo followed by key hints
    """
    lines = []
    for index, entry in enumerate(entries, start=1):
        if index <= 9:
            lines.append(f"[bold cyan]{index}[/bold cyan]  {escape(entry.display_name)}")
        else:
            lines.append(f"[dim]   {escape(entry.display_name)}[/dim]")
    lines.append("")
    lines.append(KEY_HINT)
    return Text.from_markup("\n".join(lines))


def make_log_panel(presenter: RenderableType, line_count: int) -> Panel:
    """
    Wrap the log presenter in a panel showing the line count.

    Args:
        presenter: ScrollPresenter (or any renderable) for the log body
        line_count: Number of lines currently in the log
    """
    return Panel(
        presenter,
        title="[bold]Log[/bold]",
        subtitle=f"[dim]{line_count} lines[/dim]",
        border_style="green",
        padding=(0, 1),
    )
