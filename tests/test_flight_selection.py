"""Tests for seat-class selection and pricing."""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from booking_app.application.use_cases.select_seat_class import SelectSeatClassUseCase, select_seat_class
from booking_app.domain.entities.flight import FlightSelection
from booking_app.domain.exceptions import BookingAPIError, FormValidationError, ServerRejectedError


class TestSelectSeatClass:
    """unit_price == base_price * multiplier, exactly."""

    @pytest.mark.parametrize("seat_class_id, expected", [
        ("1", Decimal("150.00")),
        ("2", Decimal("300.00")),
        ("3", Decimal("202.50")),
    ])
    def test_unit_price_is_base_times_multiplier(self, flight, seat_class_id, expected):
        selection = select_seat_class(flight, seat_class_id)
        seat = flight.find_seat(seat_class_id)
        assert selection.unit_price == flight.base_price * seat.seat_class.price_multiplier
        assert selection.unit_price == expected
        assert selection.flight_id == "42"
        assert selection.seat_class_id == seat_class_id

    def test_no_rounding_applied(self, flight, premium):
        flight.base_price = Decimal("99.99")
        selection = select_seat_class(flight, premium.id)
        assert selection.unit_price == Decimal("134.9865")

    def test_sold_out_class_is_still_selectable(self, flight):
        selection = select_seat_class(flight, "2")
        assert selection.available_seats == 0
        assert selection.seat_class_name == "Business"

    def test_unknown_class_is_rejected(self, flight):
        with pytest.raises(FormValidationError):
            select_seat_class(flight, "99")

    def test_selection_is_immutable(self, flight):
        selection = select_seat_class(flight, "1")
        with pytest.raises(AttributeError):
            selection.unit_price = Decimal("1")

    def test_total_for_passengers(self, flight):
        selection = select_seat_class(flight, "1")
        assert selection.total_for(3) == Decimal("450.00")


class TestSelectSeatClassUseCase:
    """Loading the flight before selecting."""

    def test_fetches_flight_by_id(self, flight):
        api_client = Mock()
        api_client.get_flight.return_value = flight

        selection = SelectSeatClassUseCase(api_client).execute("42", "2")

        api_client.get_flight.assert_called_once_with("42")
        assert selection.unit_price == Decimal("300.00")

    def test_load_failure_makes_no_selection(self):
        api_client = Mock()
        api_client.get_flight.side_effect = ServerRejectedError("Flight not found", status_code=404)

        with pytest.raises(BookingAPIError):
            SelectSeatClassUseCase(api_client).execute("404", "1")


class TestFlightSelectionPayload:
    """The selection travels through the client as JSON."""

    def test_round_trip(self, flight):
        selection = select_seat_class(flight, "3")
        assert FlightSelection.from_payload(selection.to_payload()) == selection

    @pytest.mark.parametrize("payload", [
        None,
        {},
        {"flightId": "42"},
        {"flightId": "42", "seatClassId": "1", "unitPrice": "abc"},
        {"flightId": "42", "seatClassId": "1", "unitPrice": "NaN"},
        {"flightId": "42", "seatClassId": "1", "unitPrice": "-5"},
        {"flightId": "42", "seatClassId": "1", "unitPrice": "150", "availableSeats": []},
        {"flightId": "42", "seatClassId": "1", "unitPrice": "150", "availableSeats": {"n": 1}},
        {"flightId": "42", "seatClassId": "1", "unitPrice": "150", "availableSeats": "few"},
    ])
    def test_invalid_payload(self, payload):
        with pytest.raises(ValueError):
            FlightSelection.from_payload(payload)
