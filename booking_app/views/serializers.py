"""JSON shapes read and returned by the views."""
from typing import Any, Dict, Optional

from flask import request

from booking_app.domain.entities.booking import BookingActionResult, BookingRecord, PaymentDetail
from booking_app.domain.entities.flight import Airport, Flight
from booking_app.domain.exceptions import FormValidationError
from booking_app.utils.formatting import format_amount, format_price


def json_body() -> Dict[str, Any]:
    """The request body as a JSON object."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise FormValidationError("Request body must be a JSON object.")
    return body


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _airport(airport: Airport) -> Dict[str, Any]:
    return {"code": airport.code, "city": airport.city, "name": airport.name}


def flight_to_dict(flight: Flight, currency_symbol: str = "$") -> Dict[str, Any]:
    seat_classes = []
    for seat in flight.seats:
        unit_price = flight.unit_price(seat)
        seat_classes.append({
            "id": seat.seat_class.id,
            "name": seat.seat_class.name,
            "priceMultiplier": str(seat.seat_class.price_multiplier),
            "availableSeats": seat.available_seats,
            "soldOut": seat.sold_out,
            "unitPrice": format_amount(unit_price),
            "displayPrice": format_price(unit_price, currency_symbol),
        })
    return {
        "id": flight.id,
        "flightNumber": flight.flight_number,
        "airline": {"name": flight.airline.name, "logo": flight.airline.logo} if flight.airline else None,
        "origin": _airport(flight.origin),
        "destination": _airport(flight.destination),
        "departureTime": _iso(flight.departure_time),
        "arrivalTime": _iso(flight.arrival_time),
        "status": flight.status,
        "duration": flight.duration,
        "basePrice": format_amount(flight.base_price),
        "displayPrice": format_price(flight.base_price, currency_symbol),
        "seatClasses": seat_classes,
    }


def _payment(payment: Optional[PaymentDetail]) -> Optional[Dict[str, Any]]:
    if payment is None:
        return None
    return {
        "method": payment.method,
        "amount": format_amount(payment.amount),
        "status": payment.status,
        "paidAt": _iso(payment.paid_at),
    }


def booking_to_dict(record: BookingRecord, currency_symbol: str = "$") -> Dict[str, Any]:
    return {
        "bookingReference": record.booking_reference,
        "status": record.status.value,
        "rawStatus": record.raw_status,
        "totalPrice": format_amount(record.total_price),
        "displayTotal": format_price(record.total_price, currency_symbol),
        "bookedAt": _iso(record.booked_at),
        "flight": flight_to_dict(record.flight, currency_symbol) if record.flight else None,
        "passengers": [
            {"fullName": p.full_name, "passportNumber": p.passport_number, "age": p.age}
            for p in record.passengers
        ],
        "payment": _payment(record.payment),
    }


def action_result_to_dict(result: BookingActionResult, currency_symbol: str = "$") -> Dict[str, Any]:
    return {
        "status": "ok" if result.success else "error",
        "message": result.message,
        "booking": booking_to_dict(result.booking, currency_symbol) if result.booking else None,
    }
