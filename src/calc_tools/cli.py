"""CLI for calc-tools."""

import sys
import time

import typer
from rich.console import Console
from rich.live import Live
from rich.table import Table

from .calculators.cli import app as calc_app
from .clock import LiveClock
from .config import load_settings, setup_logging
from .exceptions import CalcToolsError
from .mcp_server import run_server
from .split.cli import app as split_app

app = typer.Typer(
    name="calc-tools",
    help="Expense splitting and everyday calculators",
)

app.add_typer(split_app, name="split", help="Group expense splitting")
app.add_typer(calc_app, name="calc", help="Formula calculators")

console = Console()


def _clock_table(times: dict[str, str]) -> Table:
    table = Table(title="World Clock", show_header=True, header_style="bold magenta")
    table.add_column("Time zone", style="cyan")
    table.add_column("Local time", justify="right")
    for zone, local_time in times.items():
        table.add_row(zone, local_time)
    return table


@app.command()
def clock(
    zones: list[str] = typer.Argument(..., help="IANA time zones, e.g. Europe/Paris"),
    seconds: float | None = typer.Option(
        None, "--seconds", "-s", help="Stop after this many seconds (default: Ctrl+C)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show a live clock for one or more time zones."""
    setup_logging(verbose)

    try:
        settings = load_settings()
        with Live(console=console, auto_refresh=False) as live:

            def on_tick(times: dict[str, str]):
                live.update(_clock_table(times), refresh=True)

            with LiveClock(zones, on_tick, interval=settings.clock_interval_seconds):
                if seconds is None:
                    while True:
                        time.sleep(settings.clock_interval_seconds)
                else:
                    time.sleep(seconds)
    except KeyboardInterrupt:
        console.print("\n[dim]Clock stopped[/dim]")
    except CalcToolsError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def mcp():
    """Start the MCP server on stdio."""
    run_server()


if __name__ == "__main__":
    app()
