"""Use case for turning a seat-class tap into a FlightSelection."""
import logging

from booking_app.domain.entities.flight import Flight, FlightSelection
from booking_app.domain.exceptions import FormValidationError
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient


logger = logging.getLogger(__name__)


def select_seat_class(flight: Flight, seat_class_id: str) -> FlightSelection:
    """
    Price a seat class on a flight.

    ``unit_price = base_price * price_multiplier``, exact. Sold-out classes
    are still selectable; availability is left to the booking service.

    Raises:
        FormValidationError: If the flight has no such seat class
    """
    seat = flight.find_seat(seat_class_id)
    if seat is None:
        raise FormValidationError("Please choose one of the available seat classes.")

    if seat.sold_out:
        logger.warning(
            f"Seat class {seat.seat_class.name} on flight {flight.id} shows no available seats; "
            f"selection allowed"
        )

    return FlightSelection(
        flight_id=flight.id,
        seat_class_id=str(seat.seat_class.id),
        unit_price=flight.unit_price(seat),
        seat_class_name=seat.seat_class.name,
        available_seats=seat.available_seats,
    )


class SelectSeatClassUseCase:
    """Fetches a flight by id and selects a seat class on it."""

    def __init__(self, api_client: IBookingAPIClient):
        self.api_client = api_client

    def execute(self, flight_id: str, seat_class_id: str) -> FlightSelection:
        """
        Raises:
            BookingAPIError: If the flight cannot be loaded (no selection is made)
            FormValidationError: If the seat class is unknown
        """
        flight = self.api_client.get_flight(flight_id)
        selection = select_seat_class(flight, seat_class_id)
        logger.info(
            f"Selected {selection.seat_class_name or selection.seat_class_id} on flight "
            f"{selection.flight_id} at {selection.unit_price}"
        )
        return selection
