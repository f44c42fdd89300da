"""Use case for searching flights."""
from datetime import date as date_type
from typing import List, Union

from booking_app.domain.entities.flight import Flight
from booking_app.domain.exceptions import FormValidationError
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient
from booking_app.utils.formatting import format_date


MISSING_ROUTE_MESSAGE = "Please enter both origin and destination."


class SearchFlightsUseCase:
    """Validates a search form and asks the booking service for flights."""

    def __init__(self, api_client: IBookingAPIClient):
        self.api_client = api_client

    def execute(self, origin: str, destination: str, travel_date: Union[str, date_type, None]) -> List[Flight]:
        """
        Search flights for a route and day.

        Raises:
            FormValidationError: If origin or destination is blank, or the date is unreadable
            BookingAPIError: If the search request fails
        """
        origin = (origin or "").strip()
        destination = (destination or "").strip()
        if not origin or not destination:
            raise FormValidationError(MISSING_ROUTE_MESSAGE)

        formatted_date = format_date(travel_date) if travel_date else date_type.today().isoformat()
        if formatted_date is None:
            raise FormValidationError("Please choose a valid travel date.")

        return self.api_client.search_flights(origin, destination, formatted_date)
