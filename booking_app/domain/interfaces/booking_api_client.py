"""Interface for booking service clients (Adapter Pattern).

This allows switching between the real booking backend and an
in-memory stand-in for development and tests.
"""
from abc import ABC, abstractmethod
from typing import List

from booking_app.domain.entities.booking import (
    BookingActionResult,
    BookingRecord,
    BookingRequest,
    IdentityCheck,
)
from booking_app.domain.entities.flight import Flight


class IBookingAPIClient(ABC):
    """
    Interface for the remote flights and bookings service.

    Every method is a single request/response exchange. Implementations
    raise BookingAPIError (or ServerRejectedError) on failure.
    """

    @abstractmethod
    def search_flights(self, origin: str, destination: str, date: str) -> List[Flight]:
        """
        Search scheduled flights.

        Args:
            origin: Origin city or airport code
            destination: Destination city or airport code
            date: Travel date (YYYY-MM-DD)

        Returns:
            Matching flights, possibly empty
        """
        pass

    @abstractmethod
    def get_flight(self, flight_id: str) -> Flight:
        """
        Fetch one flight with its seat classes.

        Raises:
            ServerRejectedError: If the flight does not exist
        """
        pass

    @abstractmethod
    def create_booking(self, request: BookingRequest) -> str:
        """
        Create a booking. Called once per submit; never retried.

        Returns:
            Booking reference issued by the service
        """
        pass

    @abstractmethod
    def get_booking_by_reference(self, booking_reference: str, passenger_name: str) -> BookingRecord:
        """
        Resolve a booking reference plus passenger name to the full booking.
        """
        pass

    @abstractmethod
    def cancel_booking(self, identity: IdentityCheck) -> BookingActionResult:
        """Cancel the booking identified by ``identity``."""
        pass

    @abstractmethod
    def check_in(self, identity: IdentityCheck) -> BookingActionResult:
        """Check in the booking identified by ``identity``."""
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass
