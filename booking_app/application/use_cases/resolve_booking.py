"""Use case for looking up a booking by reference and passenger name."""
import logging

from booking_app.domain.entities.booking import BookingActionResult, BookingConfirmation
from booking_app.domain.exceptions import BookingAPIError, FormValidationError
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient


NOT_FOUND_MESSAGE = "Booking not found. Please check your details."


class ResolveBookingUseCase:
    """
    Re-fetches the canonical booking for display.

    Used right after booking and for "view my booking". Pure read; the
    record is never cached locally.
    """

    def __init__(self, api_client: IBookingAPIClient):
        self.api_client = api_client
        self._logger = logging.getLogger(__name__)

    def execute(self, booking_reference: str, passenger_name: str) -> BookingActionResult:
        """
        Look up a booking.

        Args:
            booking_reference: Reference issued at booking time
            passenger_name: Full name of any passenger on the booking

        Returns:
            Result with the booking, or a failure with a display message
        """
        booking_reference = (booking_reference or "").strip()
        passenger_name = (passenger_name or "").strip()
        if not booking_reference or not passenger_name:
            return BookingActionResult(success=False, message=FormValidationError.default_message)

        try:
            record = self.api_client.get_booking_by_reference(booking_reference, passenger_name)
        except BookingAPIError as e:
            self._logger.warning(f"Lookup of booking {booking_reference} failed: {e.user_message}")
            return BookingActionResult(success=False, message=NOT_FOUND_MESSAGE)

        self._logger.info(f"Resolved booking {record.booking_reference} ({record.status.value})")
        return BookingActionResult(success=True, booking=record)

    def for_confirmation(self, confirmation: BookingConfirmation) -> BookingActionResult:
        return self.execute(confirmation.booking_reference, confirmation.passenger_name)
