"""Tests for the travel calculators."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from calc_tools.calculators import (
    buffer_time,
    bus_vs_train,
    distance_between,
    flight_duration,
    rental_car_cost,
    time_zone_difference,
    travel_time,
)
from calc_tools.exceptions import InvalidInputError


class TestTravelTime:
    def test_kilometers(self):
        result = travel_time(100, 50)

        assert result.hours == 2.0
        assert result.text == "2 hours"

    def test_hours_and_minutes(self):
        assert travel_time(90, 60).text == "1 hour, 30 minutes"

    def test_miles_at_mph(self):
        result = travel_time(100, 50, distance_unit="miles", speed_unit="mph")

        assert result.hours == pytest.approx(2.0)

    def test_mixed_units(self):
        result = travel_time(160.934, 1, speed_unit="mph")

        assert result.hours == pytest.approx(100.0)
        assert result.text == "4 days, 4 hours"

    def test_zero_distance(self):
        assert travel_time(0, 80).text == "0 minutes"

    def test_zero_speed_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            travel_time(100, 0)

        assert "speed" in exc_info.value.errors

    def test_unknown_unit_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            travel_time(100, 50, distance_unit="furlongs")

        assert "distance_unit" in exc_info.value.errors


class TestDistanceBetween:
    def test_same_point(self):
        result = distance_between(40.0, -73.0, 40.0, -73.0)

        assert result.kilometers == 0
        assert result.miles == 0

    def test_london_to_paris(self):
        result = distance_between(51.5074, -0.1278, 48.8566, 2.3522)

        assert result.kilometers == pytest.approx(343.5, abs=1)
        assert result.miles == pytest.approx(result.kilometers / 1.60934)

    def test_quarter_of_the_equator(self):
        result = distance_between(0, 0, 0, 90)

        assert result.kilometers == pytest.approx(6371 * 3.141592653589793 / 2)

    def test_latitude_out_of_range(self):
        with pytest.raises(InvalidInputError) as exc_info:
            distance_between(91, 0, 0, 0)

        assert "lat1" in exc_info.value.errors


class TestFlightDuration:
    def test_eastbound_across_zones(self):
        """10:00 in New York (UTC-5 in winter) to 22:00 in London is 7 hours."""
        result = flight_duration(
            "2024-03-01T10:00", "America/New_York", "2024-03-01T22:00", "Europe/London"
        )

        assert result.total_minutes == 420
        assert (result.hours, result.minutes) == (7, 0)
        assert result.text == "7 hours, 0 minutes"

    def test_westbound_arrives_earlier_on_the_clock(self):
        """Tokyo 17:00 to Los Angeles 09:30 the same day is a 9.5 hour flight."""
        result = flight_duration(
            datetime(2024, 1, 15, 17, 0),
            "Asia/Tokyo",
            datetime(2024, 1, 15, 9, 30),
            "America/Los_Angeles",
        )

        assert result.total_minutes == 570
        assert result.text == "9 hours, 30 minutes"

    def test_singular_units(self):
        result = flight_duration("2024-06-01T08:00", "UTC", "2024-06-01T09:01", "UTC")

        assert result.text == "1 hour, 1 minute"

    def test_arrival_before_departure_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            flight_duration("2024-06-01T12:00", "UTC", "2024-06-01T11:00", "UTC")

        assert "arrival" in exc_info.value.errors

    def test_unknown_zone_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            flight_duration("2024-06-01T12:00", "Mars/Olympus", "2024-06-01T13:00", "UTC")

        assert "departure_time_zone" in exc_info.value.errors


class TestTimeZoneDifference:
    at = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)

    def test_half_hour_offset(self):
        result = time_zone_difference("UTC", "Asia/Kolkata", at=self.at)

        assert result.offset_minutes == 330
        assert result.ahead == "Asia/Kolkata"
        assert result.text == "Asia/Kolkata is ahead by 5 hours and 30 minutes."

    def test_first_zone_ahead(self):
        result = time_zone_difference("Asia/Tokyo", "UTC", at=self.at)

        assert result.offset_minutes == -540
        assert result.ahead == "Asia/Tokyo"
        assert result.text == "Asia/Tokyo is ahead by 9 hours."

    def test_same_offset(self):
        result = time_zone_difference("UTC", "Etc/UTC", at=self.at)

        assert result.offset_minutes == 0
        assert result.ahead is None
        assert result.text == "UTC and Etc/UTC are in the same time zone."

    def test_daylight_saving_changes_the_answer(self):
        winter = time_zone_difference("America/New_York", "UTC", at=self.at)
        summer = time_zone_difference(
            "America/New_York", "UTC", at=datetime(2024, 7, 15, 12, 0, tzinfo=UTC)
        )

        assert winter.offset_minutes == 300
        assert summer.offset_minutes == 240

    def test_defaults_to_now(self):
        result = time_zone_difference("UTC", "Asia/Kolkata")

        assert result.offset_minutes == 330

    def test_unknown_zone_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            time_zone_difference("UTC", "Nowhere/Special", at=self.at)

        assert "time_zone2" in exc_info.value.errors


class TestBufferTime:
    def test_quarter_buffer(self):
        result = buffer_time(60, 25)

        assert result.buffer_minutes == 15
        assert result.total_minutes == 75
        assert result.base_time_formatted == "1 hour"
        assert result.buffer_time_formatted == "15 minutes"
        assert result.total_time_formatted == "1 hour, 15 minutes"

    def test_zero_buffer(self):
        result = buffer_time(45, 0)

        assert result.total_minutes == 45
        assert result.buffer_time_formatted == "0 minutes"

    @pytest.mark.parametrize("percentage", [-1, 101])
    def test_percentage_out_of_range(self, percentage):
        with pytest.raises(InvalidInputError) as exc_info:
            buffer_time(60, percentage)

        assert "buffer_percentage" in exc_info.value.errors


class TestRentalCarCost:
    def test_full_breakdown(self):
        result = rental_car_cost(50, 3, taxes_and_fees=10, insurance=15, extras=20)

        assert result.base_cost == Decimal("150.00")
        assert result.tax_amount == Decimal("15.00")
        assert result.insurance_total == Decimal("45.00")
        assert result.extras_total == Decimal("20.00")
        assert result.total_cost == Decimal("230.00")
        assert result.average_daily_cost == Decimal("76.67")

    def test_base_rate_only(self):
        result = rental_car_cost("39.99", 2)

        assert result.total_cost == Decimal("79.98")
        assert result.average_daily_cost == Decimal("39.99")

    def test_zero_days_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            rental_car_cost(50, 0)

        assert "rental_days" in exc_info.value.errors


class TestBusVsTrain:
    def test_bus_is_cheaper(self):
        result = bus_vs_train(
            4,
            bus={"ticket_cost": 25, "baggage_fees": 5},
            train={"ticket_cost": 40, "other_costs": 10},
        )

        assert result.bus.total == Decimal("120.00")
        assert result.bus.per_person == Decimal("30.00")
        assert result.train.total == Decimal("170.00")
        assert result.cheaper_option == "bus"
        assert result.savings == Decimal("50.00")
        assert result.verdict == "The bus is the more economical option."

    def test_train_is_cheaper(self):
        result = bus_vs_train(
            2, bus={"ticket_cost": 30, "other_costs": 20}, train={"ticket_cost": 35}
        )

        assert result.cheaper_option == "train"
        assert result.savings == Decimal("10.00")

    def test_same_cost(self):
        result = bus_vs_train(3, bus={"ticket_cost": 20}, train={"ticket_cost": 20})

        assert result.cheaper_option is None
        assert result.savings == Decimal("0.00")
        assert result.verdict == "Both options cost the same."

    def test_ticket_cost_must_be_positive(self):
        with pytest.raises(InvalidInputError) as exc_info:
            bus_vs_train(2, bus={"ticket_cost": 0}, train={"ticket_cost": 10})

        assert "bus.ticket_cost" in exc_info.value.errors

    def test_unknown_cost_field_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            bus_vs_train(2, bus={"ticket_cost": 10, "snacks": 5}, train={"ticket_cost": 10})

        assert "bus.snacks" in exc_info.value.errors
