"""Travel calculators: time, distance, time zones, buffers and trip costs."""

import math
from datetime import UTC, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ..clock import resolve_zone
from ..display import format_hours, format_minutes
from ..exceptions import InvalidInputError
from ..money import to_cents
from ..validation import CalculatorInput, validate_input

MILES_TO_KM = 1.60934
EARTH_RADIUS_KM = 6371


# ============================================================================
# Travel time and distance
# ============================================================================


class TravelTimeInput(CalculatorInput):
    distance: float = Field(ge=0)
    distance_unit: Literal["kilometers", "miles"] = "kilometers"
    speed: float = Field(gt=0)
    speed_unit: Literal["kmh", "mph"] = "kmh"


class TravelTimeResult(BaseModel):
    hours: float
    text: str


def travel_time(
    distance: float,
    speed: float,
    distance_unit: str = "kilometers",
    speed_unit: str = "kmh",
) -> TravelTimeResult:
    """Time = Distance / Speed, with both converted to kilometres first."""
    data = validate_input(
        TravelTimeInput,
        distance=distance,
        distance_unit=distance_unit,
        speed=speed,
        speed_unit=speed_unit,
    )
    distance_km = data.distance * (MILES_TO_KM if data.distance_unit == "miles" else 1)
    speed_kmh = data.speed * (MILES_TO_KM if data.speed_unit == "mph" else 1)

    hours = distance_km / speed_kmh
    return TravelTimeResult(hours=hours, text=format_hours(hours))


class DistanceInput(CalculatorInput):
    lat1: float = Field(ge=-90, le=90)
    lon1: float = Field(ge=-180, le=180)
    lat2: float = Field(ge=-90, le=90)
    lon2: float = Field(ge=-180, le=180)


class DistanceResult(BaseModel):
    kilometers: float
    miles: float


def distance_between(lat1: float, lon1: float, lat2: float, lon2: float) -> DistanceResult:
    """Great-circle distance between two coordinates (haversine formula)."""
    data = validate_input(DistanceInput, lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2)

    d_lat = math.radians(data.lat2 - data.lat1)
    d_lon = math.radians(data.lon2 - data.lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(data.lat1))
        * math.cos(math.radians(data.lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    kilometers = EARTH_RADIUS_KM * c
    return DistanceResult(kilometers=kilometers, miles=kilometers / MILES_TO_KM)


# ============================================================================
# Time zones
# ============================================================================


class FlightDurationInput(CalculatorInput):
    departure: datetime
    departure_time_zone: str = Field(min_length=1)
    arrival: datetime
    arrival_time_zone: str = Field(min_length=1)


class FlightDurationResult(BaseModel):
    total_minutes: int
    hours: int
    minutes: int
    text: str


def _localize(moment: datetime, zone_name: str, field: str) -> datetime:
    """Attach a zone to a naive local time; aware times are converted instead."""
    zone = resolve_zone(zone_name, field=field)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=zone)
    return moment.astimezone(zone)


def flight_duration(
    departure: datetime | str,
    departure_time_zone: str,
    arrival: datetime | str,
    arrival_time_zone: str,
) -> FlightDurationResult:
    """
    Duration = AbsoluteTime(Arrival) - AbsoluteTime(Departure)

    Both times are local wall-clock times in their own zones; each is pinned
    to UTC before subtracting.

    Raises:
        InvalidInputError: If a zone is unknown or arrival precedes departure
    """
    data = validate_input(
        FlightDurationInput,
        departure=departure,
        departure_time_zone=departure_time_zone,
        arrival=arrival,
        arrival_time_zone=arrival_time_zone,
    )
    departure_utc = _localize(
        data.departure, data.departure_time_zone, "departure_time_zone"
    ).astimezone(UTC)
    arrival_utc = _localize(
        data.arrival, data.arrival_time_zone, "arrival_time_zone"
    ).astimezone(UTC)

    total_minutes = int((arrival_utc - departure_utc).total_seconds() // 60)
    if total_minutes < 0:
        raise InvalidInputError(
            {"arrival": "Arrival time cannot be before departure time."}
        )

    hours, minutes = divmod(total_minutes, 60)
    return FlightDurationResult(
        total_minutes=total_minutes,
        hours=hours,
        minutes=minutes,
        text=(
            f"{hours} hour{'' if hours == 1 else 's'}, "
            f"{minutes} minute{'' if minutes == 1 else 's'}"
        ),
    )


class TimeZoneDifferenceInput(CalculatorInput):
    time_zone1: str = Field(min_length=1)
    time_zone2: str = Field(min_length=1)
    at: datetime | None = None


class TimeZoneDifferenceResult(BaseModel):
    offset_minutes: int  # zone 2 minus zone 1
    ahead: str | None  # None when both zones share an offset
    text: str


def _utc_offset_minutes(zone_name: str, instant: datetime, field: str) -> int:
    offset = instant.astimezone(resolve_zone(zone_name, field=field)).utcoffset()
    assert offset is not None
    return int(offset.total_seconds() // 60)


def time_zone_difference(
    time_zone1: str, time_zone2: str, at: datetime | None = None
) -> TimeZoneDifferenceResult:
    """
    Difference = UTC offset(zone 2) - UTC offset(zone 1), at the instant ``at``.

    Offsets depend on daylight saving time, so the answer is for a specific
    instant; ``at`` defaults to now. Naive ``at`` values are taken as UTC.
    """
    data = validate_input(
        TimeZoneDifferenceInput, time_zone1=time_zone1, time_zone2=time_zone2, at=at
    )
    instant = data.at or datetime.now(UTC)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)

    diff = _utc_offset_minutes(data.time_zone2, instant, "time_zone2") - (
        _utc_offset_minutes(data.time_zone1, instant, "time_zone1")
    )

    if diff == 0:
        return TimeZoneDifferenceResult(
            offset_minutes=0,
            ahead=None,
            text=f"{data.time_zone1} and {data.time_zone2} are in the same time zone.",
        )

    ahead = data.time_zone2 if diff > 0 else data.time_zone1
    return TimeZoneDifferenceResult(
        offset_minutes=diff,
        ahead=ahead,
        text=f"{ahead} is ahead by {format_minutes(abs(diff)).replace(', ', ' and ')}.",
    )


# ============================================================================
# Buffer time
# ============================================================================


class BufferTimeInput(CalculatorInput):
    base_minutes: float = Field(gt=0)
    buffer_percentage: float = Field(ge=0, le=100)


class BufferTimeResult(BaseModel):
    base_minutes: float
    buffer_minutes: float
    total_minutes: float
    base_time_formatted: str
    buffer_time_formatted: str
    total_time_formatted: str


def buffer_time(base_minutes: float, buffer_percentage: float) -> BufferTimeResult:
    """
    BufferTime = BaseTime * (BufferPercentage / 100)
    TotalTime  = BaseTime + BufferTime
    """
    data = validate_input(
        BufferTimeInput, base_minutes=base_minutes, buffer_percentage=buffer_percentage
    )
    buffer = data.base_minutes * data.buffer_percentage / 100
    total = data.base_minutes + buffer
    return BufferTimeResult(
        base_minutes=data.base_minutes,
        buffer_minutes=buffer,
        total_minutes=total,
        base_time_formatted=format_minutes(data.base_minutes),
        buffer_time_formatted=format_minutes(buffer),
        total_time_formatted=format_minutes(total),
    )


# ============================================================================
# Trip costs
# ============================================================================


class RentalCarInput(CalculatorInput):
    daily_rate: Decimal = Field(gt=0)
    rental_days: int = Field(gt=0)
    taxes_and_fees: Decimal = Field(default=Decimal("0"), ge=0)  # percent of base
    insurance: Decimal = Field(default=Decimal("0"), ge=0)  # per day
    extras: Decimal = Field(default=Decimal("0"), ge=0)  # flat total


class RentalCarResult(BaseModel):
    base_cost: Decimal
    tax_amount: Decimal
    insurance_total: Decimal
    extras_total: Decimal
    total_cost: Decimal
    average_daily_cost: Decimal


def rental_car_cost(
    daily_rate: Decimal | float | str,
    rental_days: int,
    taxes_and_fees: Decimal | float | str = 0,
    insurance: Decimal | float | str = 0,
    extras: Decimal | float | str = 0,
) -> RentalCarResult:
    """
    BaseCost       = DailyRate * RentalDays
    TaxAmount      = BaseCost * (TaxesAndFees / 100)
    InsuranceTotal = InsurancePerDay * RentalDays
    TotalCost      = BaseCost + TaxAmount + InsuranceTotal + Extras
    """
    data = validate_input(
        RentalCarInput,
        daily_rate=daily_rate,
        rental_days=rental_days,
        taxes_and_fees=taxes_and_fees,
        insurance=insurance,
        extras=extras,
    )
    base = data.daily_rate * data.rental_days
    tax = base * data.taxes_and_fees / 100
    insurance_total = data.insurance * data.rental_days
    total = base + tax + insurance_total + data.extras

    return RentalCarResult(
        base_cost=to_cents(base),
        tax_amount=to_cents(tax),
        insurance_total=to_cents(insurance_total),
        extras_total=to_cents(data.extras),
        total_cost=to_cents(total),
        average_daily_cost=to_cents(total / data.rental_days),
    )


class ModeCostInput(CalculatorInput):
    ticket_cost: Decimal = Field(gt=0)  # per person
    baggage_fees: Decimal = Field(default=Decimal("0"), ge=0)  # per person
    other_costs: Decimal = Field(default=Decimal("0"), ge=0)  # whole group


class BusVsTrainInput(CalculatorInput):
    num_travelers: int = Field(gt=0)
    bus: ModeCostInput
    train: ModeCostInput


class ModeCostBreakdown(BaseModel):
    ticket_cost: Decimal
    baggage_fees: Decimal
    other_costs: Decimal
    total: Decimal
    per_person: Decimal


class BusVsTrainResult(BaseModel):
    bus: ModeCostBreakdown
    train: ModeCostBreakdown
    cheaper_option: Literal["bus", "train"] | None
    savings: Decimal
    verdict: str


def _mode_breakdown(costs: ModeCostInput, travelers: int) -> ModeCostBreakdown:
    tickets = costs.ticket_cost * travelers
    baggage = costs.baggage_fees * travelers
    total = tickets + baggage + costs.other_costs
    return ModeCostBreakdown(
        ticket_cost=to_cents(tickets),
        baggage_fees=to_cents(baggage),
        other_costs=to_cents(costs.other_costs),
        total=to_cents(total),
        per_person=to_cents(total / travelers),
    )


def bus_vs_train(
    num_travelers: int,
    bus: dict | ModeCostInput,
    train: dict | ModeCostInput,
) -> BusVsTrainResult:
    """
    Total = (Ticket + Baggage) * Travelers + Other Costs, for each mode.

    The cheaper mode and the savings (difference of totals) are reported;
    equal totals give no cheaper option.
    """
    data = validate_input(BusVsTrainInput, num_travelers=num_travelers, bus=bus, train=train)

    bus_cost = _mode_breakdown(data.bus, data.num_travelers)
    train_cost = _mode_breakdown(data.train, data.num_travelers)

    cheaper: Literal["bus", "train"] | None
    if bus_cost.total < train_cost.total:
        cheaper, verdict = "bus", "The bus is the more economical option."
    elif train_cost.total < bus_cost.total:
        cheaper, verdict = "train", "The train is the more economical option."
    else:
        cheaper, verdict = None, "Both options cost the same."

    return BusVsTrainResult(
        bus=bus_cost,
        train=train_cost,
        cheaper_option=cheaper,
        savings=abs(bus_cost.total - train_cost.total),
        verdict=verdict,
    )
