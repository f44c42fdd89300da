"""Domain entities - core business objects."""
from booking_app.domain.entities.flight import Airline, Airport, Flight, FlightSeat, FlightSelection, SeatClass
from booking_app.domain.entities.booking import (
    BookingActionResult,
    BookingConfirmation,
    BookingRecord,
    BookingRequest,
    BookingStatus,
    IdentityCheck,
    Passenger,
    PaymentDetail,
)
from booking_app.domain.entities.roster import PassengerRoster

__all__ = [
    "Airline",
    "Airport",
    "Flight",
    "FlightSeat",
    "FlightSelection",
    "SeatClass",
    "BookingActionResult",
    "BookingConfirmation",
    "BookingRecord",
    "BookingRequest",
    "BookingStatus",
    "IdentityCheck",
    "Passenger",
    "PaymentDetail",
    "PassengerRoster",
]
