"""Passenger roster edited while a booking is being prepared."""
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from booking_app.domain.entities.booking import Passenger, parse_age
from booking_app.domain.exceptions import FormValidationError, MinimumPassengersError


EDITABLE_FIELDS = ("full_name", "passport_number", "age")
INCOMPLETE_ROSTER_MESSAGE = "Please fill out all fields for all passengers."


class PassengerRoster:
    """
    Ordered, mutable list of passengers for one booking attempt.

    Invariants:
        - the roster always holds at least one passenger
        - at most one passenger is expanded at a time
    """

    def __init__(self, passengers: Optional[Iterable[Passenger]] = None):
        self._passengers: List[Passenger] = list(passengers or [])
        if not self._passengers:
            self._passengers.append(Passenger())
        self._pending_removal: Optional[int] = None
        self._logger = logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self._passengers)

    def __iter__(self):
        return iter(self._passengers)

    def __getitem__(self, index: int) -> Passenger:
        return self._passengers[index]

    @property
    def passengers(self) -> List[Passenger]:
        """Copy of the passenger list."""
        return list(self._passengers)

    @property
    def pending_removal(self) -> Optional[int]:
        return self._pending_removal

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._passengers):
            raise IndexError(f"No passenger at position {index}")

    def add_passenger(self) -> Passenger:
        passenger = Passenger()
        self._passengers.append(passenger)
        return passenger

    def update_field(self, index: int, field_name: str, value: Any) -> None:
        """
        Set one field of passenger ``index``.

        Args:
            index: Position in the roster
            field_name: One of full_name, passport_number, age
            value: Raw input; for age, non-numeric text clears the field

        Raises:
            IndexError: If index is out of range
            ValueError: If field_name is not editable
        """
        self._check_index(index)
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown passenger field: {field_name}")

        passenger = self._passengers[index]
        if field_name == "age":
            passenger.age = parse_age(value)
        else:
            setattr(passenger, field_name, "" if value is None else str(value))

    def request_removal(self, index: int) -> None:
        """
        First step of removal; the caller must confirm before it happens.

        Raises:
            MinimumPassengersError: If only one passenger is left
        """
        self._check_index(index)
        if len(self._passengers) <= 1:
            raise MinimumPassengersError()
        self._pending_removal = index

    def cancel_removal(self) -> None:
        self._pending_removal = None

    def confirm_removal(self) -> Passenger:
        """Commit the removal asked for with :meth:`request_removal`."""
        if self._pending_removal is None:
            raise ValueError("No passenger removal is awaiting confirmation")
        index = self._pending_removal
        self._pending_removal = None
        return self.remove_passenger(index)

    def remove_passenger(self, index: int) -> Passenger:
        """
        Remove passenger ``index``.

        Raises:
            IndexError: If index is out of range
            MinimumPassengersError: If only one passenger is left; the roster
                is left unchanged
        """
        self._check_index(index)
        if len(self._passengers) <= 1:
            self._logger.info("Refusing to remove the last passenger")
            raise MinimumPassengersError()
        removed = self._passengers.pop(index)
        # Positions shifted, so any unconfirmed removal is stale
        self._pending_removal = None
        return removed

    def toggle_expand(self, index: int) -> None:
        """Accordion toggle: expanding one passenger collapses the rest."""
        self._check_index(index)
        expand = not self._passengers[index].expanded
        for position, passenger in enumerate(self._passengers):
            passenger.expanded = expand and position == index

    @property
    def expanded_index(self) -> Optional[int]:
        for position, passenger in enumerate(self._passengers):
            if passenger.expanded:
                return position
        return None

    def validate_all(self) -> bool:
        return all(passenger.is_complete() for passenger in self._passengers)

    def ensure_valid(self) -> None:
        """Raise one aggregate error if any passenger is incomplete."""
        if not self.validate_all():
            raise FormValidationError(INCOMPLETE_ROSTER_MESSAGE)

    def total_price(self, unit_price: Decimal) -> Decimal:
        return unit_price * len(self._passengers)

    def to_submission(self) -> List[Dict[str, Any]]:
        return [passenger.to_payload() for passenger in self._passengers]

    def to_payload(self) -> List[Dict[str, Any]]:
        """Full roster state, UI flags included, for handing back to the client."""
        return [
            dict(passenger.to_payload(), expanded=passenger.expanded)
            for passenger in self._passengers
        ]

    @classmethod
    def from_payload(cls, items: Any) -> "PassengerRoster":
        """
        Rebuild a roster from client JSON.

        Accepts both snake_case and camelCase keys.
        """
        if items is None:
            return cls()
        if not isinstance(items, list):
            raise ValueError("passengers must be a list")

        passengers = []
        for item in items:
            if not isinstance(item, dict):
                raise ValueError("each passenger must be an object")
            full_name = item.get("full_name", item.get("fullName"))
            passport = item.get("passport_number", item.get("passportNumber"))
            passengers.append(Passenger(
                full_name="" if full_name is None else str(full_name),
                passport_number="" if passport is None else str(passport),
                age=parse_age(item.get("age")),
                expanded=bool(item.get("expanded", False)),
            ))

        roster = cls(passengers)
        # Keep accordion exclusivity even if the client sent several expanded
        expanded = roster.expanded_index
        if expanded is not None:
            for position, passenger in enumerate(roster._passengers):
                passenger.expanded = position == expanded
        return roster
