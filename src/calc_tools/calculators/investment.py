"""Investment calculators: simple growth and compounding future value."""

from decimal import Decimal

from pydantic import BaseModel, Field

from ..money import to_cents
from ..validation import CalculatorInput, validate_input


class InvestmentGrowthInput(CalculatorInput):
    initial_amount: Decimal = Field(gt=0)
    final_amount: Decimal = Field(gt=0)


class InvestmentGrowthResult(BaseModel):
    net_growth: Decimal  # cents
    growth_percentage: Decimal  # 2 dp


def investment_growth(
    initial_amount: Decimal | float | str, final_amount: Decimal | float | str
) -> InvestmentGrowthResult:
    """
    Net Growth = Final Amount - Initial Amount
    Growth %   = Net Growth / Initial Amount * 100
    """
    data = validate_input(
        InvestmentGrowthInput, initial_amount=initial_amount, final_amount=final_amount
    )
    net = data.final_amount - data.initial_amount
    return InvestmentGrowthResult(
        net_growth=to_cents(net),
        growth_percentage=to_cents(net / data.initial_amount * 100),
    )


class CompoundingIncreaseInput(CalculatorInput):
    initial_value: Decimal = Field(gt=0)
    percentage_increase: Decimal = Field(gt=0)
    periods: int = Field(gt=0)


class CompoundingPeriod(BaseModel):
    period: int
    value: Decimal  # cents


class CompoundingIncreaseResult(BaseModel):
    final_value: Decimal  # cents
    total_growth: Decimal  # cents
    history: list[CompoundingPeriod]


def compounding_increase(
    initial_value: Decimal | float | str,
    percentage_increase: Decimal | float | str,
    periods: int,
) -> CompoundingIncreaseResult:
    """
    Future value of a value growing by a fixed percentage each period.

    NewValue = PreviousValue * (1 + Increase / 100), applied ``periods`` times.
    The history includes period 0 (the initial value). Values are carried
    unrounded between periods and only rounded for the result.
    """
    data = validate_input(
        CompoundingIncreaseInput,
        initial_value=initial_value,
        percentage_increase=percentage_increase,
        periods=periods,
    )
    factor = 1 + data.percentage_increase / 100

    value = data.initial_value
    history = [CompoundingPeriod(period=0, value=to_cents(value))]
    for period in range(1, data.periods + 1):
        value *= factor
        history.append(CompoundingPeriod(period=period, value=to_cents(value)))

    return CompoundingIncreaseResult(
        final_value=to_cents(value),
        total_growth=to_cents(value - data.initial_value),
        history=history,
    )
