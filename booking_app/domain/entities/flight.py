"""Flight domain entities."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass
class SeatClass:
    """A priced travel tier (Economy, Business, ...)."""

    id: str
    name: str
    price_multiplier: Decimal = Decimal("1")

    def __post_init__(self):
        """Validate seat class entity."""
        if self.id in (None, ""):
            raise ValueError("seat class id is required")
        if self.price_multiplier < 0:
            raise ValueError("price_multiplier must be non-negative")


@dataclass
class FlightSeat:
    """Seat class entry of a flight with its remaining availability."""

    seat_class: SeatClass
    available_seats: int = 0

    @property
    def sold_out(self) -> bool:
        return self.available_seats <= 0


@dataclass
class Airport:
    code: str
    city: str = ""
    name: Optional[str] = None


@dataclass
class Airline:
    name: str
    logo: Optional[str] = None


@dataclass
class Flight:
    """Domain entity representing a scheduled flight."""

    id: str
    flight_number: str
    origin: Airport
    destination: Airport
    base_price: Decimal
    airline: Optional[Airline] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    status: Optional[str] = None
    duration: Optional[str] = None
    seats: List[FlightSeat] = field(default_factory=list)

    def __post_init__(self):
        """Validate flight entity."""
        if self.id in (None, ""):
            raise ValueError("flight id is required")
        if self.base_price < 0:
            raise ValueError("base_price must be non-negative")

    def find_seat(self, seat_class_id: str) -> Optional[FlightSeat]:
        """Return the seat entry for ``seat_class_id`` or None."""
        for seat in self.seats:
            if str(seat.seat_class.id) == str(seat_class_id):
                return seat
        return None

    def unit_price(self, seat: FlightSeat) -> Decimal:
        """Price of one seat in ``seat``'s class."""
        return self.base_price * seat.seat_class.price_multiplier


@dataclass(frozen=True)
class FlightSelection:
    """
    Immutable result of picking a seat class on a flight.

    Passed by value between workflow stages; never mutated.
    """

    flight_id: str
    seat_class_id: str
    unit_price: Decimal
    seat_class_name: str = ""
    available_seats: Optional[int] = None

    def __post_init__(self):
        if self.unit_price < 0:
            raise ValueError("unit_price must be non-negative")

    def total_for(self, passenger_count: int) -> Decimal:
        """Every passenger is priced at the same unit price."""
        return self.unit_price * passenger_count

    @classmethod
    def from_payload(cls, payload: dict) -> "FlightSelection":
        """Rebuild a selection handed back by the client."""
        if not isinstance(payload, dict):
            raise ValueError("selection must be an object")
        flight_id = payload.get("flightId")
        seat_class_id = payload.get("seatClassId")
        if flight_id in (None, "") or seat_class_id in (None, ""):
            raise ValueError("selection requires flightId and seatClassId")
        try:
            unit_price = Decimal(str(payload.get("unitPrice")))
        except ArithmeticError as e:
            raise ValueError("selection unitPrice is not a number") from e
        if not unit_price.is_finite():
            raise ValueError("selection unitPrice is not a number")
        available = payload.get("availableSeats")
        if available is not None:
            try:
                available = int(available)
            except (TypeError, ValueError) as e:
                raise ValueError("selection availableSeats is not a number") from e
        return cls(
            flight_id=str(flight_id),
            seat_class_id=str(seat_class_id),
            unit_price=unit_price,
            seat_class_name=payload.get("seatClassName") or "",
            available_seats=available,
        )

    def to_payload(self) -> dict:
        return {
            "flightId": self.flight_id,
            "seatClassId": self.seat_class_id,
            "unitPrice": str(self.unit_price),
            "seatClassName": self.seat_class_name,
            "availableSeats": self.available_seats,
        }
