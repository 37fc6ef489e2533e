"""CLI commands for the formula calculators."""

import sys
import time
from datetime import datetime

import typer
from rich.console import Console
from rich.live import Live
from rich.table import Table

from ..config import load_settings, setup_logging
from ..display import count_up_frames, format_money
from ..exceptions import CalcToolsError, InvalidInputError
from . import (
    buffer_time,
    bus_vs_train,
    compounding_increase,
    decimal_to_percent,
    distance_between,
    expected_exposure,
    financial_health_score,
    flight_duration,
    fraction_to_percent,
    investment_growth,
    percent_error,
    percentage_point_difference,
    relative_change,
    rental_car_cost,
    time_zone_difference,
    travel_time,
)

app = typer.Typer(
    name="calc",
    help="Percentage, investment, travel and finance calculators",
)

console = Console()

DATETIME_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S"]

# Most rows shown for an exposure profile before it is sampled
MAX_PROFILE_ROWS = 25


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Run a single calculation and print the result."""
    setup_logging(verbose)
    ctx.obj = {"verbose": verbose}


def _fail(ctx: typer.Context, error: CalcToolsError):
    """Print a calculator error, then exit (or re-raise when verbose)."""
    if isinstance(error, InvalidInputError):
        console.print("\n[bold red]Invalid input:[/bold red]")
        for field, message in error.errors.items():
            console.print(f"  [yellow]{field}[/yellow]: {message}")
    else:
        console.print(f"\n[bold red]Error:[/bold red] {error}")

    if ctx.obj and ctx.obj.get("verbose"):
        raise error
    sys.exit(1)


def _result_table(title: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    return table


# ============================================================================
# Percentages
# ============================================================================


@app.command("percent-error")
def percent_error_command(
    ctx: typer.Context,
    observed: float = typer.Option(..., help="Observed (measured) value"),
    true_value: float = typer.Option(..., help="True (accepted) value"),
):
    """Percent error between an observed and a true value."""
    try:
        result = percent_error(observed, true_value)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(f"Percent error: [bold]{result.error:.2f}%[/bold]")


@app.command("relative-change")
def relative_change_command(
    ctx: typer.Context,
    old: float = typer.Option(..., help="Original value"),
    new: float = typer.Option(..., help="New value"),
    animate: bool = typer.Option(False, "--animate", help="Count up to the result"),
):
    """Relative (percentage) change from an old value to a new one."""
    try:
        result = relative_change(old, new)
    except CalcToolsError as e:
        _fail(ctx, e)

    if animate:
        frame_delay = 1 / 60
        with Live(console=console, refresh_per_second=60) as live:
            for frame in count_up_frames(result.change):
                live.update(f"Relative change: [bold]{frame}%[/bold]")
                time.sleep(frame_delay)
    else:
        console.print(f"Relative change: [bold]{result.change:.2f}%[/bold]")
    console.print(f"[dim]{result.direction}[/dim]")


@app.command("percentage-points")
def percentage_points_command(
    ctx: typer.Context,
    first: float = typer.Option(..., help="First percentage"),
    second: float = typer.Option(..., help="Second percentage"),
):
    """Difference in percentage points (second minus first)."""
    try:
        result = percentage_point_difference(first, second)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(f"Difference: [bold]{result.difference:+.2f}[/bold] percentage points")


@app.command("decimal-to-percent")
def decimal_to_percent_command(
    ctx: typer.Context,
    value: float = typer.Argument(..., help="Decimal value, e.g. 0.75"),
):
    """Convert a decimal to a percentage."""
    try:
        result = decimal_to_percent(value)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(f"{value:g} = [bold]{result.percentage:g}%[/bold]")


@app.command("fraction-to-percent")
def fraction_to_percent_command(
    ctx: typer.Context,
    numerator: float = typer.Option(..., help="Numerator"),
    denominator: float = typer.Option(..., help="Denominator"),
):
    """Convert a fraction to a decimal and a percentage."""
    try:
        result = fraction_to_percent(numerator, denominator)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(
        f"{numerator:g}/{denominator:g} = {result.decimal:g} = "
        f"[bold]{result.percentage:.2f}%[/bold]"
    )


# ============================================================================
# Investment
# ============================================================================


@app.command("investment-growth")
def investment_growth_command(
    ctx: typer.Context,
    initial: str = typer.Option(..., metavar="AMOUNT", help="Initial investment"),
    final: str = typer.Option(..., metavar="AMOUNT", help="Final value"),
):
    """Net growth and growth percentage of an investment."""
    try:
        settings = load_settings()
        result = investment_growth(initial, final)
    except CalcToolsError as e:
        _fail(ctx, e)

    symbol = settings.currency_symbol
    console.print(
        _result_table(
            "Investment Growth",
            [
                ("Net growth", format_money(result.net_growth, currency_symbol=symbol)),
                ("Growth", f"{result.growth_percentage}%"),
            ],
        )
    )


@app.command("compounding")
def compounding_command(
    ctx: typer.Context,
    initial: str = typer.Option(..., metavar="AMOUNT", help="Initial value"),
    increase: str = typer.Option(..., metavar="PERCENT", help="Increase per period"),
    periods: int = typer.Option(..., help="Number of periods"),
):
    """Value after compounding a percentage increase over several periods."""
    try:
        settings = load_settings()
        result = compounding_increase(initial, increase, periods)
    except CalcToolsError as e:
        _fail(ctx, e)

    symbol = settings.currency_symbol
    table = Table(title="Compounding Increase", header_style="bold magenta")
    table.add_column("Period", justify="right")
    table.add_column("Value", justify="right", width=16)
    for entry in result.history:
        table.add_row(str(entry.period), format_money(entry.value, currency_symbol=symbol))

    console.print(table)
    console.print(
        f"Final value: [bold]{symbol}{result.final_value:,.2f}[/bold] "
        f"(growth {symbol}{result.total_growth:,.2f})"
    )


# ============================================================================
# Travel
# ============================================================================


@app.command("travel-time")
def travel_time_command(
    ctx: typer.Context,
    distance: float = typer.Option(..., help="Distance to travel"),
    speed: float = typer.Option(..., help="Average speed"),
    miles: bool = typer.Option(False, "--miles", help="Distance is in miles"),
    mph: bool = typer.Option(False, "--mph", help="Speed is in miles per hour"),
):
    """Travel time for a distance at an average speed."""
    try:
        result = travel_time(
            distance,
            speed,
            distance_unit="miles" if miles else "kilometers",
            speed_unit="mph" if mph else "kmh",
        )
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(f"Travel time: [bold]{result.text}[/bold]")


@app.command("distance")
def distance_command(
    ctx: typer.Context,
    lat1: float = typer.Option(..., help="Latitude of the first point"),
    lon1: float = typer.Option(..., help="Longitude of the first point"),
    lat2: float = typer.Option(..., help="Latitude of the second point"),
    lon2: float = typer.Option(..., help="Longitude of the second point"),
):
    """Great-circle distance between two coordinates."""
    try:
        result = distance_between(lat1, lon1, lat2, lon2)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(
        f"Distance: [bold]{result.kilometers:,.2f} km[/bold] "
        f"({result.miles:,.2f} miles)"
    )


@app.command("flight-duration")
def flight_duration_command(
    ctx: typer.Context,
    departure: datetime = typer.Option(
        ..., formats=DATETIME_FORMATS, help="Local departure time"
    ),
    departure_zone: str = typer.Option(..., help="Departure time zone (IANA)"),
    arrival: datetime = typer.Option(
        ..., formats=DATETIME_FORMATS, help="Local arrival time"
    ),
    arrival_zone: str = typer.Option(..., help="Arrival time zone (IANA)"),
):
    """Flight duration between local departure and arrival times."""
    try:
        result = flight_duration(departure, departure_zone, arrival, arrival_zone)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(f"Flight duration: [bold]{result.text}[/bold]")


@app.command("time-zones")
def time_zones_command(
    ctx: typer.Context,
    zone1: str = typer.Argument(..., help="First time zone (IANA)"),
    zone2: str = typer.Argument(..., help="Second time zone (IANA)"),
):
    """How far one time zone is ahead of another right now."""
    try:
        result = time_zone_difference(zone1, zone2)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(result.text)


@app.command("buffer-time")
def buffer_time_command(
    ctx: typer.Context,
    minutes: float = typer.Option(..., help="Base travel time in minutes"),
    buffer: float = typer.Option(..., help="Buffer as a percentage (0-100)"),
):
    """Travel time with a safety buffer added."""
    try:
        result = buffer_time(minutes, buffer)
    except CalcToolsError as e:
        _fail(ctx, e)
    console.print(
        _result_table(
            "Buffer Time",
            [
                ("Base time", result.base_time_formatted),
                ("Buffer", result.buffer_time_formatted),
                ("Total", result.total_time_formatted),
            ],
        )
    )


@app.command("rental-car")
def rental_car_command(
    ctx: typer.Context,
    daily_rate: str = typer.Option(..., metavar="AMOUNT", help="Daily rate"),
    days: int = typer.Option(..., help="Rental days"),
    taxes: str = typer.Option("0", metavar="PERCENT", help="Taxes and fees"),
    insurance: str = typer.Option("0", metavar="AMOUNT", help="Insurance per day"),
    extras: str = typer.Option("0", metavar="AMOUNT", help="Extras (total)"),
):
    """Total cost of a car rental."""
    try:
        settings = load_settings()
        result = rental_car_cost(daily_rate, days, taxes, insurance, extras)
    except CalcToolsError as e:
        _fail(ctx, e)

    symbol = settings.currency_symbol
    rows = [
        ("Base cost", result.base_cost),
        ("Taxes and fees", result.tax_amount),
        ("Insurance", result.insurance_total),
        ("Extras", result.extras_total),
        ("Total", result.total_cost),
        ("Per day", result.average_daily_cost),
    ]
    console.print(
        _result_table(
            "Rental Car Cost",
            [(label, format_money(value, currency_symbol=symbol)) for label, value in rows],
        )
    )


@app.command("bus-vs-train")
def bus_vs_train_command(
    ctx: typer.Context,
    travelers: int = typer.Option(..., help="Number of travelers"),
    bus_ticket: str = typer.Option(..., metavar="AMOUNT", help="Bus ticket per person"),
    bus_baggage: str = typer.Option("0", metavar="AMOUNT", help="Bus baggage per person"),
    bus_other: str = typer.Option("0", metavar="AMOUNT", help="Other bus costs (group)"),
    train_ticket: str = typer.Option(
        ..., metavar="AMOUNT", help="Train ticket per person"
    ),
    train_baggage: str = typer.Option(
        "0", metavar="AMOUNT", help="Train baggage per person"
    ),
    train_other: str = typer.Option(
        "0", metavar="AMOUNT", help="Other train costs (group)"
    ),
):
    """Compare the cost of a group trip by bus and by train."""
    try:
        settings = load_settings()
        result = bus_vs_train(
            travelers,
            bus={
                "ticket_cost": bus_ticket,
                "baggage_fees": bus_baggage,
                "other_costs": bus_other,
            },
            train={
                "ticket_cost": train_ticket,
                "baggage_fees": train_baggage,
                "other_costs": train_other,
            },
        )
    except CalcToolsError as e:
        _fail(ctx, e)

    symbol = settings.currency_symbol
    table = Table(title="Bus vs Train", header_style="bold magenta")
    table.add_column("", style="cyan")
    table.add_column("Bus", justify="right", width=14)
    table.add_column("Train", justify="right", width=14)
    for label, attr in [
        ("Tickets", "ticket_cost"),
        ("Baggage", "baggage_fees"),
        ("Other", "other_costs"),
        ("Total", "total"),
        ("Per person", "per_person"),
    ]:
        table.add_row(
            label,
            format_money(getattr(result.bus, attr), currency_symbol=symbol),
            format_money(getattr(result.train, attr), currency_symbol=symbol),
        )

    console.print(table)
    console.print(f"[bold]{result.verdict}[/bold]")
    if result.cheaper_option:
        console.print(f"Savings: {symbol}{result.savings:,.2f}")


# ============================================================================
# Finance
# ============================================================================


@app.command("financial-health")
def financial_health_command(
    ctx: typer.Context,
    income: float = typer.Option(..., help="Monthly income"),
    savings: float = typer.Option(..., help="Monthly savings"),
    debt: float = typer.Option(..., help="Total debt, excluding mortgage"),
    liquid_assets: float = typer.Option(..., help="Liquid assets"),
    housing: float = typer.Option(..., help="Monthly housing cost"),
):
    """Score financial health from 0 to 100."""
    try:
        result = financial_health_score(income, savings, debt, liquid_assets, housing)
    except CalcToolsError as e:
        _fail(ctx, e)

    table = Table(title="Financial Health", header_style="bold magenta")
    table.add_column("Area", style="cyan")
    table.add_column("Score", justify="right")
    for component in result.components:
        table.add_row(component.subject, f"{component.score}/{component.full_mark}")
    table.add_row("[bold]Total[/bold]", f"[bold]{result.total_score}/100[/bold]")

    console.print(table)
    console.print(f"Status: [bold]{result.status}[/bold]")
    console.print(
        f"[dim]Savings rate {result.savings_rate:.1%}, "
        f"debt-to-income {result.debt_to_income_ratio:.2f}, "
        f"emergency fund {result.emergency_fund_months:.1f} months, "
        f"housing {result.housing_cost_ratio:.1%}[/dim]"
    )


@app.command("expected-exposure")
def expected_exposure_command(
    ctx: typer.Context,
    price: float = typer.Option(..., help="Initial price of the underlying"),
    strike: float = typer.Option(..., help="Strike price"),
    maturity: float = typer.Option(..., help="Time to maturity in years"),
    rate: float = typer.Option(..., help="Risk-free rate (%)"),
    volatility: float = typer.Option(..., help="Volatility (%)"),
    simulations: int = typer.Option(1000, help="Number of simulations"),
    steps: int = typer.Option(100, help="Number of time steps"),
    seed: int | None = typer.Option(None, help="Random seed for a reproducible run"),
):
    """Monte Carlo expected exposure profile of a European call."""
    try:
        settings = load_settings()
        with console.status("[bold blue]Simulating paths..."):
            result = expected_exposure(
                price,
                strike,
                maturity,
                rate,
                volatility,
                simulations,
                steps,
                seed=seed if seed is not None else settings.simulation_seed,
                max_cells=settings.max_simulation_cells,
            )
    except CalcToolsError as e:
        _fail(ctx, e)

    stride = max(len(result.profile) // MAX_PROFILE_ROWS, 1)
    table = Table(title="Expected Exposure", header_style="bold magenta")
    table.add_column("Time (years)", justify="right")
    table.add_column("EE", justify="right")
    for idx, point in enumerate(result.profile):
        if idx % stride and point != result.peak:
            continue
        style = "bold green" if point == result.peak else ""
        table.add_row(f"{point.time:.4f}", f"{point.ee:.4f}", style=style)

    console.print(table)
    console.print(
        f"Peak EE: [bold]{result.peak.ee:.4f}[/bold] at t = {result.peak.time:.4f} years"
    )
