"""Booking domain entities."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from booking_app.domain.entities.flight import Flight
from booking_app.domain.exceptions import FormValidationError


def parse_age(value: Any) -> Optional[int]:
    """
    Parse an age typed into a text field.

    Non-numeric input normalises to None instead of raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    text = str(value).strip()
    if not text.isdecimal():
        return None
    return int(text)


@dataclass
class Passenger:
    """One entry of a passenger roster."""

    full_name: str = ""
    passport_number: str = ""
    age: Optional[int] = None
    expanded: bool = False

    def is_complete(self) -> bool:
        return bool(self.full_name.strip()) and bool(self.passport_number.strip()) and self.age is not None

    def to_payload(self) -> Dict[str, Any]:
        """Submission payload; UI-only state is left out."""
        return {
            "full_name": self.full_name,
            "passport_number": self.passport_number,
            "age": self.age,
        }


@dataclass(frozen=True)
class BookingRequest:
    """Write-once request sent to create a booking."""

    flight_id: str
    seat_class_id: str
    user_id: str
    passengers: Tuple[Dict[str, Any], ...]
    payment_method: str
    unit_price: Decimal
    request_id: str

    def __post_init__(self):
        if not self.passengers:
            raise ValueError("a booking needs at least one passenger")

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * len(self.passengers)

    @property
    def lead_passenger_name(self) -> str:
        return self.passengers[0]["full_name"]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "flightId": self.flight_id,
            "seatClassId": self.seat_class_id,
            "passengers": [dict(p) for p in self.passengers],
            "paymentMethod": self.payment_method,
        }


@dataclass(frozen=True)
class BookingConfirmation:
    """Reference returned by the booking service plus the lookup name."""

    booking_reference: str
    passenger_name: str

    def to_payload(self) -> Dict[str, str]:
        return {
            "bookingReference": self.booking_reference,
            "passengerName": self.passenger_name,
        }


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    PENDING = "pending"
    CHECKED_IN = "checked_in"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BookingStatus":
        if not value:
            return cls.UNKNOWN
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        if normalized == "checkedin":
            normalized = "checked_in"
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class PaymentDetail:
    method: Optional[str] = None
    amount: Optional[Decimal] = None
    status: Optional[str] = None
    paid_at: Optional[datetime] = None


@dataclass
class BookingRecord:
    """Booking as owned by the remote service. Read-only here."""

    booking_reference: str
    status: BookingStatus
    raw_status: Optional[str] = None
    total_price: Optional[Decimal] = None
    booked_at: Optional[datetime] = None
    flight: Optional[Flight] = None
    passengers: List[Passenger] = field(default_factory=list)
    payment: Optional[PaymentDetail] = None


@dataclass(frozen=True)
class IdentityCheck:
    """The four fields the service uses to authorise cancel and check-in."""

    name: str
    booking_reference: str
    age: int
    passport_number: str

    @classmethod
    def from_form(cls, name: Any, booking_reference: Any, age: Any, passport_number: Any) -> "IdentityCheck":
        """
        Build from raw form input.

        Raises:
            FormValidationError: If any field is blank or age is not a number
        """
        fields = [str(v).strip() if v is not None else "" for v in (name, booking_reference, age, passport_number)]
        if not all(fields):
            raise FormValidationError()
        parsed_age = parse_age(fields[2])
        if parsed_age is None:
            raise FormValidationError()
        return cls(
            name=fields[0],
            booking_reference=fields[1],
            age=parsed_age,
            passport_number=fields[3],
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bookingReference": self.booking_reference,
            "age": self.age,
            "passportNumber": self.passport_number,
        }


@dataclass
class BookingActionResult:
    """Outcome of a one-shot lookup, cancel or check-in exchange."""

    success: bool
    message: Optional[str] = None
    booking: Optional[BookingRecord] = None
