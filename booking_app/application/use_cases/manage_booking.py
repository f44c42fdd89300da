"""Use cases for cancelling and checking in an existing booking.

Both are single fire-and-confirm exchanges: the identity fields are sent
once, the caller waits for the answer and shows the server's message on
failure (or a fallback when the server gives none).
"""
import logging
from typing import Any

from booking_app.domain.entities.booking import BookingActionResult, IdentityCheck
from booking_app.domain.exceptions import BookingAPIError, FormValidationError, ServerRejectedError
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient


CANCEL_FALLBACK_MESSAGE = "Failed to cancel booking. Please check your details."
CHECK_IN_FALLBACK_MESSAGE = "Something went wrong. Please try again."


class _IdentityActionUseCase:
    operation = ""
    fallback_message = ""

    def __init__(self, api_client: IBookingAPIClient):
        self.api_client = api_client
        self._logger = logging.getLogger(__name__)

    def _call(self, identity: IdentityCheck) -> BookingActionResult:
        raise NotImplementedError

    def execute_form(self, name: Any, booking_reference: Any, age: Any, passport_number: Any) -> BookingActionResult:
        """Validate raw form input, then :meth:`execute`."""
        try:
            identity = IdentityCheck.from_form(name, booking_reference, age, passport_number)
        except FormValidationError as e:
            return BookingActionResult(success=False, message=e.user_message)
        return self.execute(identity)

    def execute(self, identity: IdentityCheck) -> BookingActionResult:
        self._logger.info(f"{self.operation} requested for booking {identity.booking_reference}")
        try:
            result = self._call(identity)
        except ServerRejectedError as e:
            self._logger.warning(f"{self.operation} rejected for {identity.booking_reference}: {e.server_message}")
            return BookingActionResult(success=False, message=e.server_message or self.fallback_message)
        except BookingAPIError as e:
            self._logger.error(f"{self.operation} failed for {identity.booking_reference}: {e.user_message}")
            return BookingActionResult(success=False, message=self.fallback_message)

        self._logger.info(f"{self.operation} succeeded for booking {identity.booking_reference}")
        return result


class CancelBookingUseCase(_IdentityActionUseCase):
    """Cancel a booking given name, reference, age and passport number."""

    operation = "Cancellation"
    fallback_message = CANCEL_FALLBACK_MESSAGE

    def _call(self, identity: IdentityCheck) -> BookingActionResult:
        return self.api_client.cancel_booking(identity)


class CheckInUseCase(_IdentityActionUseCase):
    """Check in a booking given the same four identity fields."""

    operation = "Check-in"
    fallback_message = CHECK_IN_FALLBACK_MESSAGE

    def _call(self, identity: IdentityCheck) -> BookingActionResult:
        return self.api_client.check_in(identity)
