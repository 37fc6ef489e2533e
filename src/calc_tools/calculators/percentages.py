"""Percentage calculators: error, relative change, points, conversions."""

from typing import Literal

from pydantic import BaseModel, field_validator

from ..validation import CalculatorInput, validate_input


def _non_zero(value: float, message: str) -> float:
    if value == 0:
        raise ValueError(message)
    return value


# ============================================================================
# Percent error
# ============================================================================


class PercentErrorInput(CalculatorInput):
    observed: float
    true_value: float

    @field_validator("true_value")
    @classmethod
    def _true_value_non_zero(cls, value: float) -> float:
        return _non_zero(value, "True value cannot be zero.")


class PercentErrorResult(BaseModel):
    error: float  # percent, 2 dp


def percent_error(observed: float, true_value: float) -> PercentErrorResult:
    """
    Percent Error = |Observed - True| / |True| * 100

    >>> percent_error(9.8, 10).error
    2.0
    """
    data = validate_input(PercentErrorInput, observed=observed, true_value=true_value)
    error = abs(data.observed - data.true_value) / abs(data.true_value) * 100
    return PercentErrorResult(error=round(error, 2))


# ============================================================================
# Relative change
# ============================================================================


class RelativeChangeInput(CalculatorInput):
    old_value: float
    new_value: float

    @field_validator("old_value")
    @classmethod
    def _old_value_non_zero(cls, value: float) -> float:
        return _non_zero(value, "Original value cannot be zero.")


class RelativeChangeResult(BaseModel):
    change: float  # percent, 2 dp, signed
    direction: Literal["increase", "decrease", "no change"]


def relative_change(old_value: float, new_value: float) -> RelativeChangeResult:
    """
    Relative Change = (New - Old) / Old * 100

    A negative old value keeps its sign in the denominator, so a debt going
    from -100 to -120 is a +20% change (its magnitude grew).
    """
    data = validate_input(RelativeChangeInput, old_value=old_value, new_value=new_value)
    change = round((data.new_value - data.old_value) / data.old_value * 100, 2)
    if change > 0:
        direction = "increase"
    elif change < 0:
        direction = "decrease"
    else:
        direction = "no change"
    return RelativeChangeResult(change=change, direction=direction)


# ============================================================================
# Percentage points
# ============================================================================


class PercentagePointInput(CalculatorInput):
    percentage1: float
    percentage2: float


class PercentagePointResult(BaseModel):
    difference: float  # percentage points, 2 dp, signed


def percentage_point_difference(
    percentage1: float, percentage2: float
) -> PercentagePointResult:
    """Percentage Point Difference = Percentage 2 - Percentage 1"""
    data = validate_input(
        PercentagePointInput, percentage1=percentage1, percentage2=percentage2
    )
    return PercentagePointResult(
        difference=round(data.percentage2 - data.percentage1, 2)
    )


# ============================================================================
# Conversions
# ============================================================================


class DecimalToPercentInput(CalculatorInput):
    decimal: float


class DecimalToPercentResult(BaseModel):
    percentage: float


def decimal_to_percent(decimal: float) -> DecimalToPercentResult:
    """Percentage = Decimal * 100"""
    data = validate_input(DecimalToPercentInput, decimal=decimal)
    # 6 dp hides float noise such as 0.07 * 100 = 7.000000000000001
    return DecimalToPercentResult(percentage=round(data.decimal * 100, 6))


class FractionToPercentInput(CalculatorInput):
    numerator: float
    denominator: float

    @field_validator("denominator")
    @classmethod
    def _denominator_non_zero(cls, value: float) -> float:
        return _non_zero(value, "Denominator cannot be zero.")


class FractionToPercentResult(BaseModel):
    decimal: float
    percentage: float  # 2 dp


def fraction_to_percent(numerator: float, denominator: float) -> FractionToPercentResult:
    """Percentage = Numerator / Denominator * 100"""
    data = validate_input(
        FractionToPercentInput, numerator=numerator, denominator=denominator
    )
    decimal = data.numerator / data.denominator
    return FractionToPercentResult(
        decimal=round(decimal, 6), percentage=round(decimal * 100, 2)
    )
