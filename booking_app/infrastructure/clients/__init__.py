"""Booking service clients module."""
from booking_app.infrastructure.clients.booking_api_client import BookingAPIClient
from booking_app.infrastructure.clients.mock_booking_api_client import MockBookingAPIClient

__all__ = [
    "BookingAPIClient",
    "MockBookingAPIClient",
]
