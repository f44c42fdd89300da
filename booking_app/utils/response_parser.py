"""Parser for payloads returned by the booking service.

Remote JSON is turned into typed domain entities here, at the boundary,
so nothing else in the app reads raw response dictionaries. Both the
snake_case and camelCase spellings used by different backend versions
are accepted.
"""
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse

from booking_app.domain.entities.booking import (
    BookingActionResult,
    BookingRecord,
    BookingStatus,
    Passenger,
    PaymentDetail,
    parse_age,
)
from booking_app.domain.entities.flight import Airline, Airport, Flight, FlightSeat, SeatClass
from booking_app.domain.exceptions import BookingAPIError

logger = logging.getLogger(__name__)

# Multipliers used when the backend does not send one for a seat class
DEFAULT_CLASS_MULTIPLIERS = {
    "economy": Decimal("1"),
    "business": Decimal("2"),
}


def _first(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Parse a money amount; None for missing or non-numeric values."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning(f"Non-numeric amount in response: {value!r}")
        return None
    return result if result.is_finite() else None


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return isoparse(str(value))
    except (ValueError, OverflowError):
        logger.warning(f"Unparseable timestamp in response: {value!r}")
        return None


def _parse_airport(value: Any, flat: Dict[str, Any], prefix: str) -> Airport:
    if isinstance(value, dict):
        return Airport(
            code=str(_first(value, "code", "iata_code", default="")),
            city=str(_first(value, "city", default="")),
            name=_first(value, "name"),
        )
    # Search results flatten the airport: departureCode/departureCity, ...
    code = _first(flat, f"{prefix}Code", default=value if isinstance(value, str) else "")
    return Airport(code=str(code or ""), city=str(_first(flat, f"{prefix}City", default="")))


def _parse_airline(flight: Dict[str, Any]) -> Optional[Airline]:
    airline = flight.get("airline")
    if isinstance(airline, dict):
        return Airline(name=str(airline.get("name", "")), logo=airline.get("logo"))
    if isinstance(airline, str):
        return Airline(name=airline, logo=flight.get("airlineLogo"))
    if flight.get("airlineLogo"):
        return Airline(name="", logo=flight.get("airlineLogo"))
    return None


def parse_seat(entry: Dict[str, Any]) -> FlightSeat:
    """Parse one ``flightSeats`` entry."""
    seat_class_data = _first(entry, "seatClass", "seat_class", default=entry)
    if not isinstance(seat_class_data, dict):
        raise BookingAPIError("Flight seat class data is malformed")

    name = str(seat_class_data.get("name", ""))
    multiplier = parse_decimal(_first(seat_class_data, "price_multiplier", "priceMultiplier", "multiplier"))
    if multiplier is None:
        multiplier = DEFAULT_CLASS_MULTIPLIERS.get(name.strip().lower(), Decimal("1"))

    available = _first(entry, "available_seats", "availableSeats", default=0)
    try:
        available = int(available)
    except (TypeError, ValueError):
        available = 0

    try:
        seat_class = SeatClass(id=str(seat_class_data.get("id", "")), name=name, price_multiplier=multiplier)
    except ValueError as e:
        raise BookingAPIError("Flight seat class data is malformed") from e
    return FlightSeat(seat_class=seat_class, available_seats=available)


def parse_flight(data: Any) -> Flight:
    """
    Parse a flight from either the detail or the search-result shape.

    Raises:
        BookingAPIError: If the payload is not a usable flight
    """
    if not isinstance(data, dict):
        raise BookingAPIError("Unexpected flight data from the booking service")

    base_price = parse_decimal(_first(data, "base_price", "basePrice", "price"))
    seats = [parse_seat(entry) for entry in _first(data, "flightSeats", "flight_seats", "seats", default=[])]

    try:
        return Flight(
            id=str(_first(data, "id", "flight_id", default="")),
            flight_number=str(_first(data, "flight_number", "flightNumber", default="")),
            origin=_parse_airport(data.get("origin"), data, "departure"),
            destination=_parse_airport(data.get("destination"), data, "arrival"),
            base_price=base_price if base_price is not None else Decimal("0"),
            airline=_parse_airline(data),
            departure_time=parse_datetime(_first(data, "departure_time", "departureTime")),
            arrival_time=parse_datetime(_first(data, "arrival_time", "arrivalTime")),
            status=data.get("status"),
            duration=None if data.get("duration") is None else str(data.get("duration")),
            seats=seats,
        )
    except ValueError as e:
        raise BookingAPIError("Unexpected flight data from the booking service") from e


def parse_flights(data: Any) -> List[Flight]:
    """Parse a search response (a bare list or ``{"flights": [...]}``)."""
    if isinstance(data, dict):
        data = data.get("flights", [])
    if not isinstance(data, list):
        raise BookingAPIError("Unexpected search results from the booking service")
    return [parse_flight(item) for item in data]


def parse_booking_reference(data: Any) -> str:
    """
    Extract the booking reference from a create-booking response.

    Raises:
        BookingAPIError: If the response carries no reference
    """
    if isinstance(data, dict):
        booking = data.get("booking")
        candidates = [
            data.get("bookingReference"),
            data.get("booking_reference"),
            booking.get("booking_reference") if isinstance(booking, dict) else None,
            booking.get("bookingReference") if isinstance(booking, dict) else None,
            data.get("bookingId"),
        ]
        for candidate in candidates:
            if candidate not in (None, ""):
                return str(candidate)
    raise BookingAPIError("The booking service did not return a booking reference")


def _parse_passenger(data: Dict[str, Any]) -> Passenger:
    return Passenger(
        full_name=str(_first(data, "full_name", "fullName", "name", default="")),
        passport_number=str(_first(data, "passport_number", "passportNumber", default="")),
        age=parse_age(data.get("age")),
    )


def _parse_payment(data: Any) -> Optional[PaymentDetail]:
    if not isinstance(data, dict):
        return None
    return PaymentDetail(
        method=_first(data, "method", "payment_method"),
        amount=parse_decimal(data.get("amount")),
        status=data.get("status"),
        paid_at=parse_datetime(_first(data, "paid_at", "paidAt")),
    )


def parse_booking_record(data: Any) -> BookingRecord:
    """
    Parse a full booking. Accepts the record itself or ``{"booking": {...}}``.

    Raises:
        BookingAPIError: If the payload has no booking reference
    """
    if isinstance(data, dict) and isinstance(data.get("booking"), dict):
        data = data["booking"]
    if not isinstance(data, dict):
        raise BookingAPIError("Unexpected booking data from the booking service")

    reference = _first(data, "booking_reference", "bookingReference")
    if reference in (None, ""):
        raise BookingAPIError("Unexpected booking data from the booking service")

    flight_data = data.get("flight")
    passengers = [
        _parse_passenger(item)
        for item in _first(data, "passengers", "seats", default=[])
        if isinstance(item, dict)
    ]
    raw_status = data.get("status")

    return BookingRecord(
        booking_reference=str(reference),
        status=BookingStatus.parse(raw_status),
        raw_status=raw_status,
        total_price=parse_decimal(_first(data, "total_price", "totalPrice")),
        booked_at=parse_datetime(_first(data, "booked_at", "bookedAt")),
        flight=parse_flight(flight_data) if isinstance(flight_data, dict) else None,
        passengers=passengers,
        payment=_parse_payment(data.get("payment")),
    )


def parse_action_result(data: Any) -> BookingActionResult:
    """Parse a cancel or check-in response: ``{message, booking}``."""
    if not isinstance(data, dict):
        return BookingActionResult(success=True)
    booking = None
    if isinstance(data.get("booking"), dict):
        try:
            booking = parse_booking_record(data["booking"])
        except BookingAPIError:
            logger.warning("Action response carried an unreadable booking")
    return BookingActionResult(success=True, message=data.get("message"), booking=booking)


def extract_error_message(data: Any) -> Optional[str]:
    """Server-provided error text, if any (``message`` or ``error``)."""
    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return None
