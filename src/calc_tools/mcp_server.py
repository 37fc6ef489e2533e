"""MCP server for calc-tools: the calculators and a group expense splitter as tools."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, ValidationError

from .calculators import (
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
from .config import Settings, load_settings
from .exceptions import CalcToolsError, InvalidInputError
from .models import Expense
from .split.service import SplitService
from .validation import field_errors

logger = logging.getLogger(__name__)

WORKFLOW_INSTRUCTIONS = """\
You are helping a group split shared expenses. Follow this workflow:

1. PEOPLE: Call add_participant once for each person in the group.
   Names must be unique; ask the user to disambiguate two people with the
   same name (e.g. "Sam K" and "Sam L").

2. EXPENSES: For each shared expense, call add_expense with its name, amount,
   who paid, and who shared it. Leave split_between empty when everyone
   shared it. Call list_expenses to show the user what has been recorded.

3. SETTLE: Call settle_up. Show the user each person's balance and the list
   of payments, in order.

4. Call reset_session before starting an unrelated group.

Positive balance = is owed money, negative balance = owes money.\
"""


def _format_amount(amount: Decimal, currency_symbol: str = "$") -> str:
    """Format an amount as an accounting-style string."""
    if amount < 0:
        return f"({currency_symbol}{abs(amount):,.2f})"
    return f"{currency_symbol}{amount:,.2f}"


# ---------------------------------------------------------------------------
# Session state - one MCP server process = one conversation
# ---------------------------------------------------------------------------


@dataclass
class SessionState:
    """Participants and expenses gathered between MCP tool calls."""

    settings: Settings | None = None
    participants: list[str] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)

    def _settings(self) -> Settings:
        """Lazily load settings (reads .env) on first use."""
        if self.settings is None:
            self.settings = load_settings()
        return self.settings

    def add_participant(self, name: str) -> str:
        name = name.strip()
        if not name:
            return "Error: Participant name cannot be blank."
        if name in self.participants:
            return f"Error: '{name}' is already a participant. Names must be unique."
        self.participants.append(name)
        return f"Added {name}. Participants: {', '.join(self.participants)}"

    def add_expense(
        self,
        name: str,
        amount: float | str,
        paid_by: str,
        split_between: list[str] | None = None,
    ) -> str:
        if not self.participants:
            return "Error: Add participants first."

        try:
            expense = Expense(
                name=name,
                amount=amount,
                paid_by=paid_by,
                split_between=split_between or list(self.participants),
            )
        except ValidationError as e:
            return f"Error: {InvalidInputError(field_errors(e))}"

        unknown = [
            person
            for person in [expense.paid_by, *expense.split_between]
            if person not in self.participants
        ]
        if unknown:
            return (
                f"Error: Not a participant: {', '.join(dict.fromkeys(unknown))}. "
                f"Participants: {', '.join(self.participants)}"
            )

        self.expenses.append(expense)
        symbol = self._settings().currency_symbol
        return (
            f"Added expense #{len(self.expenses)}: {expense.name} "
            f"{_format_amount(expense.amount, symbol)} paid by {expense.paid_by}, "
            f"split between {', '.join(expense.split_between)}"
        )

    def list_expenses(self) -> str:
        if not self.expenses:
            return "No expenses recorded."

        symbol = self._settings().currency_symbol
        lines = [f"Expenses ({len(self.expenses)} total):"]
        for i, exp in enumerate(self.expenses):
            lines.append(
                f"  [{i}] {exp.name} | {_format_amount(exp.amount, symbol)} | "
                f"paid by {exp.paid_by} | split: {', '.join(exp.split_between)}"
            )
        total = sum((exp.amount for exp in self.expenses), Decimal("0"))
        lines.append(f"Total spent: {_format_amount(total, symbol)}")
        return "\n".join(lines)

    def settle_up(self) -> str:
        settings = self._settings()
        result = SplitService(settings).calculate(self.participants, self.expenses)
        symbol = settings.currency_symbol

        lines = ["Balances:"]
        for person, balance in result.balances.items():
            lines.append(f"  {person}: {_format_amount(balance, symbol)}")

        lines.append("")
        if result.is_settled:
            lines.append("Everyone is settled up!")
        else:
            lines.append(f"Payment Plan ({len(result.settlements)} payments):")
            for i, settlement in enumerate(result.settlements, start=1):
                lines.append(f"  {i}. {settlement.describe(symbol)}")
        return "\n".join(lines)

    def reset(self) -> str:
        self.participants.clear()
        self.expenses.clear()
        return "Session cleared."


# ---------------------------------------------------------------------------
# Stateless calculator tools
# ---------------------------------------------------------------------------


def _calculate(calculator: Callable[..., BaseModel], **inputs: Any) -> str:
    """Run a calculator and return its result as JSON, or an error string."""
    try:
        return calculator(**inputs).model_dump_json(indent=2)
    except CalcToolsError as e:
        return f"Error: {e}"


def percent_error_tool(observed: float, true_value: float) -> str:
    """Percent error = |observed - true| / |true| * 100."""
    return _calculate(percent_error, observed=observed, true_value=true_value)


def relative_change_tool(old_value: float, new_value: float) -> str:
    """Relative change = (new - old) / old * 100."""
    return _calculate(relative_change, old_value=old_value, new_value=new_value)


def percentage_point_difference_tool(percentage1: float, percentage2: float) -> str:
    """Difference in percentage points (percentage2 - percentage1)."""
    return _calculate(
        percentage_point_difference, percentage1=percentage1, percentage2=percentage2
    )


def decimal_to_percent_tool(decimal: float) -> str:
    """Convert a decimal (0.75) to a percentage (75)."""
    return _calculate(decimal_to_percent, decimal=decimal)


def fraction_to_percent_tool(numerator: float, denominator: float) -> str:
    """Convert a fraction to a decimal and a percentage."""
    return _calculate(fraction_to_percent, numerator=numerator, denominator=denominator)


def investment_growth_tool(initial_amount: float, final_amount: float) -> str:
    """Net growth and growth percentage between an initial and a final amount."""
    return _calculate(
        investment_growth, initial_amount=initial_amount, final_amount=final_amount
    )


def compounding_increase_tool(
    initial_value: float, percentage_increase: float, periods: int
) -> str:
    """Value after growing by a fixed percentage each period, with history."""
    return _calculate(
        compounding_increase,
        initial_value=initial_value,
        percentage_increase=percentage_increase,
        periods=periods,
    )


def travel_time_tool(
    distance: float,
    speed: float,
    distance_unit: str = "kilometers",
    speed_unit: str = "kmh",
) -> str:
    """Travel time for a distance (kilometers/miles) at a speed (kmh/mph)."""
    return _calculate(
        travel_time,
        distance=distance,
        speed=speed,
        distance_unit=distance_unit,
        speed_unit=speed_unit,
    )


def distance_between_tool(lat1: float, lon1: float, lat2: float, lon2: float) -> str:
    """Great-circle distance between two coordinates, in km and miles."""
    return _calculate(distance_between, lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2)


def flight_duration_tool(
    departure: str, departure_time_zone: str, arrival: str, arrival_time_zone: str
) -> str:
    """Flight duration from local ISO times (2024-05-01T09:30) and IANA zones."""
    return _calculate(
        flight_duration,
        departure=departure,
        departure_time_zone=departure_time_zone,
        arrival=arrival,
        arrival_time_zone=arrival_time_zone,
    )


def time_zone_difference_tool(time_zone1: str, time_zone2: str) -> str:
    """How far time_zone2 is ahead of time_zone1 right now."""
    return _calculate(time_zone_difference, time_zone1=time_zone1, time_zone2=time_zone2)


def buffer_time_tool(base_minutes: float, buffer_percentage: float) -> str:
    """Travel time with a percentage safety buffer added."""
    return _calculate(
        buffer_time, base_minutes=base_minutes, buffer_percentage=buffer_percentage
    )


def rental_car_cost_tool(
    daily_rate: float,
    rental_days: int,
    taxes_and_fees: float = 0,
    insurance: float = 0,
    extras: float = 0,
) -> str:
    """Rental car cost; taxes_and_fees is a percent, insurance is per day."""
    return _calculate(
        rental_car_cost,
        daily_rate=daily_rate,
        rental_days=rental_days,
        taxes_and_fees=taxes_and_fees,
        insurance=insurance,
        extras=extras,
    )


def bus_vs_train_tool(
    num_travelers: int,
    bus_ticket_cost: float,
    train_ticket_cost: float,
    bus_baggage_fees: float = 0,
    bus_other_costs: float = 0,
    train_baggage_fees: float = 0,
    train_other_costs: float = 0,
) -> str:
    """Compare a group trip by bus and by train.

    Ticket and baggage costs are per person; other costs are for the group.
    """
    return _calculate(
        bus_vs_train,
        num_travelers=num_travelers,
        bus={
            "ticket_cost": bus_ticket_cost,
            "baggage_fees": bus_baggage_fees,
            "other_costs": bus_other_costs,
        },
        train={
            "ticket_cost": train_ticket_cost,
            "baggage_fees": train_baggage_fees,
            "other_costs": train_other_costs,
        },
    )


def financial_health_score_tool(
    monthly_income: float,
    monthly_savings: float,
    total_debt: float,
    liquid_assets: float,
    monthly_housing_cost: float,
) -> str:
    """Financial health score (0-100) from savings, debt, emergency fund and housing."""
    return _calculate(
        financial_health_score,
        monthly_income=monthly_income,
        monthly_savings=monthly_savings,
        total_debt=total_debt,
        liquid_assets=liquid_assets,
        monthly_housing_cost=monthly_housing_cost,
    )


def expected_exposure_tool(
    initial_price: float,
    strike_price: float,
    time_to_maturity: float,
    risk_free_rate: float,
    volatility: float,
    num_simulations: int = 1000,
    num_time_steps: int = 50,
    seed: int | None = None,
) -> str:
    """Monte Carlo expected exposure profile of a European call.

    risk_free_rate and volatility are percentages.
    """
    try:
        settings = load_settings()
    except CalcToolsError as e:
        return f"Error: {e}"
    return _calculate(
        expected_exposure,
        initial_price=initial_price,
        strike_price=strike_price,
        time_to_maturity=time_to_maturity,
        risk_free_rate=risk_free_rate,
        volatility=volatility,
        num_simulations=num_simulations,
        num_time_steps=num_time_steps,
        seed=seed if seed is not None else settings.simulation_seed,
        max_cells=settings.max_simulation_cells,
    )


CALCULATOR_TOOLS: dict[str, Callable[..., str]] = {
    "percent_error": percent_error_tool,
    "relative_change": relative_change_tool,
    "percentage_point_difference": percentage_point_difference_tool,
    "decimal_to_percent": decimal_to_percent_tool,
    "fraction_to_percent": fraction_to_percent_tool,
    "investment_growth": investment_growth_tool,
    "compounding_increase": compounding_increase_tool,
    "travel_time": travel_time_tool,
    "distance_between": distance_between_tool,
    "flight_duration": flight_duration_tool,
    "time_zone_difference": time_zone_difference_tool,
    "buffer_time": buffer_time_tool,
    "rental_car_cost": rental_car_cost_tool,
    "bus_vs_train": bus_vs_train_tool,
    "financial_health_score": financial_health_score_tool,
    "expected_exposure": expected_exposure_tool,
}


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


def create_server(state: SessionState | None = None) -> FastMCP:
    """Build the MCP server; session tools read and write ``state``."""
    state = state or SessionState()
    server = FastMCP("calc-tools")

    for name, tool in CALCULATOR_TOOLS.items():
        server.add_tool(tool, name=name)

    @server.tool()
    def add_participant(name: str) -> str:
        """Add a person to the group. Names must be unique."""
        return state.add_participant(name)

    @server.tool()
    def add_expense(
        name: str,
        amount: float,
        paid_by: str,
        split_between: list[str] | None = None,
    ) -> str:
        """Record a shared expense, split evenly.

        Args:
            name: What the expense was for.
            amount: Total amount paid.
            paid_by: The participant who paid.
            split_between: Participants sharing the cost; omit for everyone.
        """
        try:
            return state.add_expense(name, amount, paid_by, split_between)
        except CalcToolsError as e:
            return f"Error: {e}"

    @server.tool()
    def list_expenses() -> str:
        """List the expenses recorded so far."""
        try:
            return state.list_expenses()
        except CalcToolsError as e:
            return f"Error: {e}"

    @server.tool()
    def settle_up() -> str:
        """Compute balances and a short payment plan for the recorded expenses."""
        try:
            return state.settle_up()
        except CalcToolsError as e:
            return f"Error: {e}"
        except Exception as e:
            logger.exception("settle_up failed")
            return f"Failed to settle up: {e}"

    @server.tool()
    def reset_session() -> str:
        """Forget all participants and expenses."""
        return state.reset()

    @server.prompt()
    def split_workflow() -> str:
        """Instructions for splitting a group's expenses."""
        return WORKFLOW_INSTRUCTIONS

    return server


def run_server():
    """Start the MCP server (stdio transport)."""
    create_server().run(transport="stdio")
