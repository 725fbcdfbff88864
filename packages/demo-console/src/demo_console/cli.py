"""Demo console CLI - run language-feature demos into a shared log."""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from demo_console.catalogs import CATALOGS, Catalog, build_catalog
from demo_console.dispatcher import Dispatcher
from demo_console.settings import Settings
from demo_console.sink import LogSink

app = typer.Typer(
    name="demo-console",
    help="Run language-feature demos and watch their output in one log",
    no_args_is_help=True,
)

console = Console()


def _load_catalog(name: str) -> Catalog:
    try:
        return build_catalog(name)
    except KeyError:
        console.print(f"[red]Unknown catalog '{name}'[/red]")
        console.print(f"[yellow]Available: {', '.join(CATALOGS)}[/yellow]")
        raise typer.Exit(1)


@app.callback()
def configure(
    log_level: str = typer.Option(
        None, "--log-level", "-l", help="Developer log level (default from DEMO_CONSOLE_LOG_LEVEL)"
    ),
) -> None:
    """Configure developer logging before any command runs."""
    level = (log_level or Settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command("list")
def list_demos(
    catalog: str = typer.Argument(None, help="Catalog to list (all catalogs if omitted)"),
) -> None:
    """List catalogs, or the demos of one catalog."""
    if catalog is None:
        table = Table(title="Catalogs")
        table.add_column("Name", style="cyan")
        table.add_column("Title")
        table.add_column("Demos", justify="right")
        for name in CATALOGS:
            loaded = _load_catalog(name)
            table.add_row(name, loaded.title, str(len(loaded.registry)))
            loaded.close()
        console.print(table)
        return

    loaded = _load_catalog(catalog)
    table = Table(title=loaded.title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    for index, entry in enumerate(loaded.registry.entries(), start=1):
        table.add_row(str(index), entry.id, entry.display_name)
    loaded.close()
    console.print(table)


@app.command("run")
def run_demos(
    catalog: str = typer.Argument(..., help=f"Catalog name ({', '.join(CATALOGS)})"),
    demo_ids: list[str] = typer.Argument(..., help="Demo ids to run, in order"),
    numbered: bool = typer.Option(False, "--numbered", "-n", help="Prefix sequence numbers"),
) -> None:
    """
    Run demos in order and print the resulting log.

    Background work started by the demos is waited for before printing.
    """
    loaded = _load_catalog(catalog)
    sink = LogSink()
    dispatcher = Dispatcher(loaded.registry, sink)
    try:
        for demo_id in demo_ids:
            dispatcher.run(demo_id)
    finally:
        loaded.close()

    for line in sink.current_snapshot():
        if numbered:
            console.print(f"[dim]{line.sequence:>4}[/dim] {escape(line.content)}", highlight=False, soft_wrap=True)
        else:
            console.print(line.content, markup=False, highlight=False, soft_wrap=True)


@app.command("tui")
def tui(
    catalog: str = typer.Argument(None, help="Catalog name (default from DEMO_CONSOLE_DEFAULT_CATALOG)"),
    scroll_delay_ms: int = typer.Option(
        None, "--scroll-delay", help="Milliseconds between a log update and the scroll"
    ),
) -> None:
    """Open the interactive console for a catalog."""
    from demo_console.tui.screen import ConsoleScreen

    settings = Settings()
    if scroll_delay_ms is not None:
        settings.scroll_delay_ms = scroll_delay_ms
    loaded = _load_catalog(catalog or settings.default_catalog)

    screen = ConsoleScreen(loaded, settings=settings, console=console)
    asyncio.run(screen.run())
    console.print("[green]Console closed[/green]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
