"""Tests for parsing booking service payloads."""
from datetime import datetime
from decimal import Decimal

import pytest

from booking_app.domain.entities.booking import BookingStatus
from booking_app.domain.exceptions import BookingAPIError
from booking_app.utils import response_parser


FLIGHT_DETAIL = {
    "id": 42,
    "flight_number": "SA201",
    "origin": {"code": "JNB", "city": "Johannesburg", "name": "O.R. Tambo"},
    "destination": {"code": "CPT", "city": "Cape Town"},
    "departure_time": "2025-03-12T07:05:00Z",
    "arrival_time": "2025-03-12T09:15:00Z",
    "base_price": "150.00",
    "status": "scheduled",
    "duration": "2h 10m",
    "airline": {"name": "South Air", "logo": "https://example.com/sa.png"},
    "flightSeats": [
        {"available_seats": 80, "seatClass": {"id": 1, "name": "Economy", "price_multiplier": "1.00"}},
        {"available_seats": 0, "seatClass": {"id": 2, "name": "Business", "price_multiplier": "2.00"}},
    ],
}

SEARCH_RESULT = {
    "id": "7",
    "flightNumber": "CA812",
    "airline": "Coastal",
    "airlineLogo": "https://example.com/ca.png",
    "departureCode": "CPT",
    "departureCity": "Cape Town",
    "arrivalCode": "DUR",
    "arrivalCity": "Durban",
    "departureTime": "2025-03-12T10:00:00",
    "price": 99.5,
    "flightSeats": [{"availableSeats": "5", "seatClass": {"id": "1", "name": "Economy"}}],
}


class TestParseFlight:
    """Both the detail and the flattened search shapes."""

    def test_detail_shape(self):
        flight = response_parser.parse_flight(FLIGHT_DETAIL)

        assert flight.id == "42"
        assert flight.flight_number == "SA201"
        assert flight.origin.code == "JNB"
        assert flight.origin.name == "O.R. Tambo"
        assert flight.destination.city == "Cape Town"
        assert flight.base_price == Decimal("150.00")
        assert flight.airline.name == "South Air"
        assert flight.departure_time.hour == 7
        assert [seat.seat_class.name for seat in flight.seats] == ["Economy", "Business"]
        assert flight.find_seat("2").sold_out is True

    def test_search_shape(self):
        flight = response_parser.parse_flight(SEARCH_RESULT)

        assert flight.flight_number == "CA812"
        assert flight.origin.code == "CPT"
        assert flight.destination.city == "Durban"
        assert flight.airline.logo == "https://example.com/ca.png"
        assert flight.base_price == Decimal("99.5")
        assert flight.departure_time == datetime(2025, 3, 12, 10, 0)
        assert flight.seats[0].available_seats == 5

    @pytest.mark.parametrize("name, expected", [
        ("Economy", Decimal("1")),
        ("business", Decimal("2")),
        ("First", Decimal("1")),
    ])
    def test_missing_multiplier_uses_class_default(self, name, expected):
        seat = response_parser.parse_seat({"available_seats": 3, "seatClass": {"id": "9", "name": name}})
        assert seat.seat_class.price_multiplier == expected

    def test_unparseable_availability_is_zero(self):
        seat = response_parser.parse_seat({"available_seats": "lots", "seatClass": {"id": "1", "name": "Economy"}})
        assert seat.available_seats == 0

    @pytest.mark.parametrize("payload", [None, [], "flight", {"flight_number": "X1", "base_price": "-1", "id": "1"}])
    def test_unusable_flight(self, payload):
        with pytest.raises(BookingAPIError):
            response_parser.parse_flight(payload)

    def test_parse_flights_accepts_wrapped_list(self):
        assert len(response_parser.parse_flights({"flights": [SEARCH_RESULT, FLIGHT_DETAIL]})) == 2
        assert response_parser.parse_flights([]) == []

    def test_parse_flights_rejects_other_shapes(self):
        with pytest.raises(BookingAPIError):
            response_parser.parse_flights("nope")


class TestParseValues:
    """Amounts and timestamps."""

    @pytest.mark.parametrize("value, expected", [
        ("12.50", Decimal("12.50")),
        (3, Decimal("3")),
        ("", None),
        (None, None),
        ("abc", None),
        ("Infinity", None),
        (True, None),
    ])
    def test_parse_decimal(self, value, expected):
        assert response_parser.parse_decimal(value) == expected

    def test_parse_datetime(self):
        assert response_parser.parse_datetime("2025-03-12T07:05:00") == datetime(2025, 3, 12, 7, 5)
        assert response_parser.parse_datetime("yesterday") is None
        assert response_parser.parse_datetime(None) is None


class TestParseBookingReference:
    """The reference may sit in several places depending on backend version."""

    @pytest.mark.parametrize("payload", [
        {"bookingReference": "ABC123"},
        {"booking_reference": "ABC123"},
        {"message": "Booking created", "booking": {"booking_reference": "ABC123"}},
        {"booking": {"bookingReference": "ABC123"}},
        {"bookingId": "ABC123"},
    ])
    def test_reference_locations(self, payload):
        assert response_parser.parse_booking_reference(payload) == "ABC123"

    @pytest.mark.parametrize("payload", [{}, {"bookingReference": ""}, [], None])
    def test_missing_reference(self, payload):
        with pytest.raises(BookingAPIError):
            response_parser.parse_booking_reference(payload)


class TestParseBookingRecord:
    """Full booking records from lookup, cancel and check-in."""

    def test_wrapped_record(self):
        record = response_parser.parse_booking_record({
            "booking": {
                "booking_reference": "ABC123",
                "status": "Checked-In",
                "total_price": "300.00",
                "booked_at": "2025-03-01T12:00:00Z",
                "flight": FLIGHT_DETAIL,
                "passengers": [{"full_name": "Alice", "passport_number": "P1", "age": "30"}],
                "payment": {"method": "Credit Card", "amount": "300.00", "status": "completed"},
            }
        })

        assert record.booking_reference == "ABC123"
        assert record.status == BookingStatus.CHECKED_IN
        assert record.raw_status == "Checked-In"
        assert record.total_price == Decimal("300.00")
        assert record.flight.flight_number == "SA201"
        assert record.passengers[0].age == 30
        assert record.payment.method == "Credit Card"

    def test_unknown_status_is_kept_raw(self):
        record = response_parser.parse_booking_record({"bookingReference": "ABC123", "status": "on_hold"})
        assert record.status == BookingStatus.UNKNOWN
        assert record.raw_status == "on_hold"

    def test_record_without_reference(self):
        with pytest.raises(BookingAPIError):
            response_parser.parse_booking_record({"booking": {"status": "confirmed"}})

    def test_action_result(self):
        result = response_parser.parse_action_result({
            "message": "Booking cancelled successfully",
            "booking": {"booking_reference": "ABC123", "status": "cancelled"},
        })
        assert result.success is True
        assert result.message == "Booking cancelled successfully"
        assert result.booking.status == BookingStatus.CANCELLED


class TestExtractErrorMessage:
    @pytest.mark.parametrize("payload, expected", [
        ({"message": "No booking matches"}, "No booking matches"),
        ({"error": "Seat class sold out"}, "Seat class sold out"),
        ({"detail": "Not found"}, "Not found"),
        ({"message": "  "}, None),
        ("oops", None),
        (None, None),
    ])
    def test_extract(self, payload, expected):
        assert response_parser.extract_error_message(payload) == expected
