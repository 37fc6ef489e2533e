"""Single-formula calculators, each validating its inputs with a pydantic schema."""

from .exposure import expected_exposure
from .health import financial_health_score
from .investment import compounding_increase, investment_growth
from .percentages import (
    decimal_to_percent,
    fraction_to_percent,
    percent_error,
    percentage_point_difference,
    relative_change,
)
from .travel import (
    buffer_time,
    bus_vs_train,
    distance_between,
    flight_duration,
    rental_car_cost,
    time_zone_difference,
    travel_time,
)

__all__ = [
    "expected_exposure",
    "financial_health_score",
    "compounding_increase",
    "investment_growth",
    "decimal_to_percent",
    "fraction_to_percent",
    "percent_error",
    "percentage_point_difference",
    "relative_change",
    "buffer_time",
    "bus_vs_train",
    "distance_between",
    "flight_duration",
    "rental_car_cost",
    "time_zone_difference",
    "travel_time",
]
