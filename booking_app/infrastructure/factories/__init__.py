"""Factories module for creating infrastructure components."""
from booking_app.infrastructure.factories.client_factory import BookingClientFactory

__all__ = ["BookingClientFactory"]
