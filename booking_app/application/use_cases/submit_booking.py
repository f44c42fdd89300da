"""Use case for submitting a booking (Use Case Pattern)."""
import logging
import uuid
from typing import Optional

from booking_app.domain.entities.booking import BookingConfirmation, BookingRequest
from booking_app.domain.entities.flight import FlightSelection
from booking_app.domain.entities.roster import PassengerRoster
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient


logger = logging.getLogger(__name__)


def new_request_id() -> str:
    """Client-generated idempotency key for one booking attempt."""
    return uuid.uuid4().hex


class SubmitBookingUseCase:
    """
    Combines a FlightSelection and a validated roster into one booking call.

    Exactly one create-booking request is made per :meth:`execute`; failures
    propagate to the caller and are never retried here.
    """

    def __init__(self, api_client: IBookingAPIClient, default_user_id: str, default_payment_method: str):
        """
        Initialize use case with dependencies (Dependency Injection).

        Args:
            api_client: Booking service client
            default_user_id: Identity used when the caller supplies none
            default_payment_method: Payment method used when the caller supplies none
        """
        self.api_client = api_client
        self.default_user_id = default_user_id
        self.default_payment_method = default_payment_method

    def build_request(
        self,
        roster: PassengerRoster,
        selection: FlightSelection,
        user_id: Optional[str] = None,
        payment_method: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> BookingRequest:
        """
        Validate the roster and freeze it into a BookingRequest.

        Raises:
            FormValidationError: If any passenger is missing a field
        """
        roster.ensure_valid()
        return BookingRequest(
            flight_id=selection.flight_id,
            seat_class_id=selection.seat_class_id,
            user_id=str(user_id or self.default_user_id),
            passengers=tuple(roster.to_submission()),
            payment_method=str(payment_method or "").strip() or self.default_payment_method,
            unit_price=selection.unit_price,
            request_id=request_id or new_request_id(),
        )

    def execute(self, request: BookingRequest) -> BookingConfirmation:
        """
        Send the booking request once.

        Returns:
            Confirmation carrying the reference and the lead passenger's name

        Raises:
            BookingAPIError: On any transport or server failure
        """
        logger.info(
            f"Submitting booking for flight {request.flight_id}, seat class {request.seat_class_id}, "
            f"{len(request.passengers)} passenger(s), total {request.total_price}"
        )
        reference = self.api_client.create_booking(request)
        return BookingConfirmation(booking_reference=reference, passenger_name=request.lead_passenger_name)

    def submit(
        self,
        roster: PassengerRoster,
        selection: FlightSelection,
        user_id: Optional[str] = None,
        payment_method: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> BookingConfirmation:
        """Validate, build and send in one step."""
        request = self.build_request(roster, selection, user_id, payment_method, request_id)
        return self.execute(request)
