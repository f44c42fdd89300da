"""In-memory implementation of the booking service for development/testing."""
import logging
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from booking_app.domain.entities.booking import (
    BookingActionResult,
    BookingRecord,
    BookingRequest,
    BookingStatus,
    IdentityCheck,
    Passenger,
    PaymentDetail,
    parse_age,
)
from booking_app.domain.entities.flight import Airline, Airport, Flight, FlightSeat, SeatClass
from booking_app.domain.exceptions import ServerRejectedError
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient


ECONOMY = SeatClass(id="1", name="Economy", price_multiplier=Decimal("1"))
BUSINESS = SeatClass(id="2", name="Business", price_multiplier=Decimal("2"))


class MockBookingAPIClient(IBookingAPIClient):
    """
    Mock implementation of the booking service.

    Behaves like the real backend closely enough for local runs and tests:
    references are issued on booking, identity fields are checked on
    cancel/check-in and failures carry a server message.
    """

    def __init__(self, flights: Optional[List[Flight]] = None):
        """Initialize mock client with in-memory storage."""
        self._flights: Dict[str, Flight] = {}
        self._bookings: Dict[str, BookingRecord] = {}
        self._references_by_request: Dict[str, str] = {}
        self.booking_requests: List[BookingRequest] = []
        self._logger = logging.getLogger(__name__)
        for flight in flights if flights is not None else self._sample_flights():
            self._flights[flight.id] = flight

    @staticmethod
    def _sample_flights() -> List[Flight]:
        """A few fixed flights for demo use."""
        departure = datetime.now().replace(hour=8, minute=30, second=0, microsecond=0) + timedelta(days=7)
        routes = [
            ("101", "SA201", "South Air", ("JNB", "Johannesburg"), ("CPT", "Cape Town"), Decimal("150.00")),
            ("102", "SA305", "South Air", ("JNB", "Johannesburg"), ("DUR", "Durban"), Decimal("120.00")),
            ("103", "CA812", "Coastal", ("CPT", "Cape Town"), ("JNB", "Johannesburg"), Decimal("200.00")),
        ]
        flights = []
        for index, (flight_id, number, airline, origin, destination, price) in enumerate(routes):
            leaves = departure + timedelta(hours=3 * index)
            flights.append(Flight(
                id=flight_id,
                flight_number=number,
                origin=Airport(code=origin[0], city=origin[1]),
                destination=Airport(code=destination[0], city=destination[1]),
                base_price=price,
                airline=Airline(name=airline),
                departure_time=leaves,
                arrival_time=leaves + timedelta(hours=2),
                status="scheduled",
                duration="2h 0m",
                seats=[
                    FlightSeat(seat_class=ECONOMY, available_seats=120),
                    # Sold-out business class on the last flight
                    FlightSeat(seat_class=BUSINESS, available_seats=0 if index == 2 else 12),
                ],
            ))
        return flights

    def search_flights(self, origin: str, destination: str, date: str) -> List[Flight]:
        self._logger.info(f"Mock: Searching flights {origin} -> {destination} on {date}")

        def matches(airport: Airport, query: str) -> bool:
            query = query.strip().lower()
            return query in (airport.code.lower(), airport.city.lower())

        results = []
        for flight in self._flights.values():
            if not (matches(flight.origin, origin) and matches(flight.destination, destination)):
                continue
            if date and flight.departure_time and flight.departure_time.date().isoformat() != date:
                continue
            results.append(flight)
        return sorted(results, key=lambda f: f.base_price)

    def get_flight(self, flight_id: str) -> Flight:
        self._logger.info(f"Mock: Fetching flight {flight_id}")
        flight = self._flights.get(str(flight_id))
        if flight is None:
            raise ServerRejectedError("Flight not found", status_code=404)
        return flight

    def create_booking(self, request: BookingRequest) -> str:
        self.booking_requests.append(request)

        existing = self._references_by_request.get(request.request_id)
        if existing:
            self._logger.info(f"Mock: Replaying booking {existing} for request {request.request_id}")
            return existing

        flight = self.get_flight(request.flight_id)
        seat = flight.find_seat(request.seat_class_id)
        if seat is None:
            raise ServerRejectedError("Seat class not available on this flight", status_code=400)

        reference = uuid.uuid4().hex[:6].upper()
        total = flight.unit_price(seat) * len(request.passengers)
        self._bookings[reference] = BookingRecord(
            booking_reference=reference,
            status=BookingStatus.CONFIRMED,
            raw_status="confirmed",
            total_price=total,
            booked_at=datetime.now(),
            flight=flight,
            passengers=[
                Passenger(
                    full_name=item["full_name"],
                    passport_number=item["passport_number"],
                    age=parse_age(item.get("age")),
                )
                for item in request.passengers
            ],
            payment=PaymentDetail(
                method=request.payment_method,
                amount=total,
                status="completed",
                paid_at=datetime.now(),
            ),
        )
        self._references_by_request[request.request_id] = reference
        self._logger.info(f"Mock: Created booking {reference}")
        return reference

    def _find_passenger(self, record: BookingRecord, name: str) -> Optional[Passenger]:
        for passenger in record.passengers:
            if passenger.full_name.strip().lower() == name.strip().lower():
                return passenger
        return None

    def get_booking_by_reference(self, booking_reference: str, passenger_name: str) -> BookingRecord:
        self._logger.info(f"Mock: Looking up booking {booking_reference}")
        record = self._bookings.get(booking_reference.strip().upper())
        if record is None or self._find_passenger(record, passenger_name) is None:
            raise ServerRejectedError("Booking not found", status_code=404)
        return record

    def _authorise(self, identity: IdentityCheck) -> BookingRecord:
        record = self._bookings.get(identity.booking_reference.strip().upper())
        passenger = self._find_passenger(record, identity.name) if record else None
        if (
            passenger is None
            or passenger.passport_number != identity.passport_number
            or passenger.age != identity.age
        ):
            raise ServerRejectedError("No booking matches the details provided", status_code=404)
        return record

    def cancel_booking(self, identity: IdentityCheck) -> BookingActionResult:
        self._logger.info(f"Mock: Cancelling booking {identity.booking_reference}")
        record = self._authorise(identity)
        if record.status == BookingStatus.CANCELLED:
            raise ServerRejectedError("Booking is already cancelled", status_code=400)
        record.status = BookingStatus.CANCELLED
        record.raw_status = "cancelled"
        return BookingActionResult(success=True, message="Booking cancelled successfully", booking=record)

    def check_in(self, identity: IdentityCheck) -> BookingActionResult:
        self._logger.info(f"Mock: Checking in booking {identity.booking_reference}")
        record = self._authorise(identity)
        if record.status == BookingStatus.CANCELLED:
            raise ServerRejectedError("Cannot check in a cancelled booking", status_code=400)
        if record.status == BookingStatus.CHECKED_IN:
            raise ServerRejectedError("Booking is already checked in", status_code=400)
        record.status = BookingStatus.CHECKED_IN
        record.raw_status = "checked_in"
        return BookingActionResult(success=True, message="Check-in successful", booking=record)
