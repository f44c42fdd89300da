"""Booking error taxonomy.

Every error carries a ``user_message`` that is safe to show as-is next to
the control that triggered it.
"""
from typing import Optional


class BookingAppError(Exception):
    """Base class for all booking workflow errors."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, user_message: Optional[str] = None):
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class BookingAPIError(BookingAppError):
    """Transport failure or unexpected response from the booking service."""

    def __init__(self, user_message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(user_message)
        self.status_code = status_code


class ServerRejectedError(BookingAPIError):
    """The booking service answered with an error and (maybe) a message."""

    def __init__(self, server_message: Optional[str], status_code: Optional[int] = None):
        super().__init__(server_message, status_code=status_code)
        self.server_message = server_message


class FormValidationError(BookingAppError):
    """A required form field is empty or malformed."""

    default_message = "Please fill in all fields"


class MinimumPassengersError(BookingAppError):
    """Removing a passenger would leave the roster empty."""

    default_message = "At least one passenger is required."


class BookingSessionError(BookingAppError):
    """An operation was attempted in the wrong workflow state."""


class SubmissionInProgressError(BookingSessionError):
    """A booking request is already in flight for this session."""

    default_message = "Your booking is already being processed."


class OperationCancelledError(BookingAppError):
    """The pending remote call was cancelled before it completed."""

    default_message = "The request was cancelled."
