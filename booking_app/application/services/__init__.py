"""Application services module.

Workflow services that are independent of the HTTP layer.
"""
from booking_app.application.services.booking_session import BookingSession, SessionState

__all__ = [
    "BookingSession",
    "SessionState",
]
