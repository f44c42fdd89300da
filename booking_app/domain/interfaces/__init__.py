"""Domain interfaces following Dependency Inversion Principle."""

from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient

__all__ = [
    "IBookingAPIClient",
]
