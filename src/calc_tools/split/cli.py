"""CLI commands for the group expense splitter."""

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings, load_settings, setup_logging
from ..display import format_money
from ..exceptions import CalcToolsError, InvalidInputError
from ..models import SplitResult
from .service import SplitService, load_split_request
from .ui import collect_split_request

app = typer.Typer(
    name="split",
    help="Split shared expenses and work out who pays whom",
)

console = Console()


def display_result(result: SplitResult, settings: Settings):
    """Display balances and the payment plan as tables."""
    symbol = settings.currency_symbol

    table = Table(title="Balances", show_header=True, header_style="bold magenta")
    table.add_column("Participant", style="cyan")
    table.add_column("Balance", justify="right", width=14)
    table.add_column("Status")

    for name, balance in result.balances.items():
        if balance > 0:
            status = f"Gets back {symbol}{balance:,.2f}"
        elif balance < 0:
            status = f"Owes {symbol}{abs(balance):,.2f}"
        else:
            status = "[dim]Settled[/dim]"
        table.add_row(name, format_money(balance, currency_symbol=symbol), status)

    console.print()
    console.print(table)

    console.print("\n[bold]Payment Plan:[/bold]")
    if result.is_settled:
        console.print("  [green]Everyone is settled up![/green]")
        return

    for idx, settlement in enumerate(result.settlements, start=1):
        console.print(
            f"  {idx}. [cyan]{settlement.debtor}[/cyan] pays "
            f"[cyan]{settlement.creditor}[/cyan] "
            f"[bold]{symbol}{settlement.amount:,.2f}[/bold]"
        )
    console.print(f"\n  [dim]{len(result.settlements)} payment(s)[/dim]")


def _print_invalid_input(e: InvalidInputError):
    console.print(f"\n[bold red]Invalid input:[/bold red] {e}")
    for field, message in e.errors.items():
        console.print(f"  [yellow]{field}[/yellow]: {message}")


@app.command()
def run(
    file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file with participants and expenses",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Split the expenses listed in a JSON file.

    The file holds {"participants": [...], "expenses": [...]}, where each
    expense has name, amount, paid_by and split_between.
    """
    setup_logging(verbose)

    try:
        settings = load_settings()
        request = load_split_request(file)
        result = SplitService(settings).calculate_request(request)
        display_result(result, settings)
    except InvalidInputError as e:
        _print_invalid_input(e)
        if verbose:
            raise
        sys.exit(1)
    except CalcToolsError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def interactive(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Enter participants and expenses at the prompt, then settle up.

    Names complete with Tab; a blank "split between" shares the expense
    with everyone.
    """
    setup_logging(verbose)

    try:
        settings = load_settings()
        request = collect_split_request()
        if request is None:
            return

        console.print("\n[bold blue]Computing balances...[/bold blue]")
        result = SplitService(settings).calculate_request(request)
        display_result(result, settings)
    except InvalidInputError as e:
        _print_invalid_input(e)
        if verbose:
            raise
        sys.exit(1)
    except CalcToolsError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)
