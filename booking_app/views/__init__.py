"""Views module - exports all blueprints."""
from booking_app.views.flights import flights_blueprint
from booking_app.views.bookings import bookings_blueprint
from booking_app.views.health import health_blueprint

__all__ = ["flights_blueprint", "bookings_blueprint", "health_blueprint"]
