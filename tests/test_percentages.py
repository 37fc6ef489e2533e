"""Tests for the percentage calculators."""

import pytest

from calc_tools.calculators import (
    decimal_to_percent,
    fraction_to_percent,
    percent_error,
    percentage_point_difference,
    relative_change,
)
from calc_tools.exceptions import InvalidInputError


class TestPercentError:
    def test_published_example(self):
        assert percent_error(9.8, 10).error == 2.0

    def test_overestimate_is_also_positive(self):
        assert percent_error(12, 10).error == 20.0

    def test_negative_true_value_uses_magnitude(self):
        assert percent_error(-9, -10).error == 10.0

    def test_rounds_to_two_places(self):
        assert percent_error(1, 3).error == 66.67

    def test_zero_true_value_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            percent_error(5, 0)

        assert exc_info.value.errors == {"true_value": "True value cannot be zero."}

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            percent_error(float("inf"), 10)

        assert "observed" in exc_info.value.errors


class TestRelativeChange:
    def test_increase(self):
        result = relative_change(100, 125)

        assert result.change == 25.0
        assert result.direction == "increase"

    def test_decrease(self):
        result = relative_change(200, 150)

        assert result.change == -25.0
        assert result.direction == "decrease"

    def test_no_change(self):
        result = relative_change(42, 42)

        assert result.change == 0
        assert result.direction == "no change"

    def test_negative_original_value(self):
        assert relative_change(-100, -120).change == 20.0

    def test_zero_original_value_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            relative_change(0, 10)

        assert "old_value" in exc_info.value.errors


class TestPercentagePoints:
    def test_difference(self):
        assert percentage_point_difference(20, 25.5).difference == 5.5

    def test_drop_is_negative(self):
        assert percentage_point_difference(40, 35).difference == -5.0


class TestConversions:
    @pytest.mark.parametrize(
        ("decimal", "percentage"),
        [(0.75, 75), (0.07, 7), (1.5, 150), (0, 0), (-0.25, -25)],
    )
    def test_decimal_to_percent(self, decimal, percentage):
        assert decimal_to_percent(decimal).percentage == percentage

    def test_fraction_to_percent(self):
        result = fraction_to_percent(1, 3)

        assert result.decimal == 0.333333
        assert result.percentage == 33.33

    def test_fraction_over_one(self):
        assert fraction_to_percent(5, 4).percentage == 125.0

    def test_zero_denominator_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            fraction_to_percent(1, 0)

        assert exc_info.value.errors == {"denominator": "Denominator cannot be zero."}

    def test_unparseable_input_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            decimal_to_percent("three quarters")

        assert "decimal" in exc_info.value.errors
