"""Service container for dependency injection (IoC Container Pattern)."""
import logging
from typing import Optional

from booking_app.application.use_cases.manage_booking import CancelBookingUseCase, CheckInUseCase
from booking_app.application.use_cases.resolve_booking import ResolveBookingUseCase
from booking_app.application.use_cases.search_flights import SearchFlightsUseCase
from booking_app.application.use_cases.select_seat_class import SelectSeatClassUseCase
from booking_app.application.use_cases.submit_booking import SubmitBookingUseCase
from booking_app.config.settings import Config
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient
from booking_app.infrastructure.factories.client_factory import BookingClientFactory


class ServiceContainer:
    """
    Service container implementing Dependency Injection pattern.

    One container per application; services are created on first use.
    Uses Factory Pattern to create the booking client from configuration.
    """

    def __init__(self, config: type[Config] = Config, api_client: Optional[IBookingAPIClient] = None):
        """
        Initialize service container.

        Args:
            config: Configuration class
            api_client: Pre-built booking client (for tests)
        """
        self.config = config
        self._api_client = api_client
        self._submit_booking: Optional[SubmitBookingUseCase] = None
        self._logger = logging.getLogger(__name__)

    def get_api_client(self) -> IBookingAPIClient:
        """Get or create the booking service client."""
        if self._api_client is None:
            try:
                self._api_client = BookingClientFactory.create_api_client(self.config)
                self._logger.info(f"Booking client created: {type(self._api_client).__name__}")
            except ValueError as e:
                self._logger.error(f"Failed to create booking client: {e}")
                raise
        return self._api_client

    def get_search_flights(self) -> SearchFlightsUseCase:
        return SearchFlightsUseCase(self.get_api_client())

    def get_select_seat_class(self) -> SelectSeatClassUseCase:
        return SelectSeatClassUseCase(self.get_api_client())

    def get_submit_booking(self) -> SubmitBookingUseCase:
        """Get or create the booking submitter."""
        if self._submit_booking is None:
            self._submit_booking = SubmitBookingUseCase(
                api_client=self.get_api_client(),
                default_user_id=self.config.DEFAULT_USER_ID,
                default_payment_method=self.config.DEFAULT_PAYMENT_METHOD,
            )
        return self._submit_booking

    def get_resolve_booking(self) -> ResolveBookingUseCase:
        return ResolveBookingUseCase(self.get_api_client())

    def get_cancel_booking(self) -> CancelBookingUseCase:
        return CancelBookingUseCase(self.get_api_client())

    def get_check_in(self) -> CheckInUseCase:
        return CheckInUseCase(self.get_api_client())

    def close(self) -> None:
        """Release the booking client's connections."""
        if self._api_client is not None:
            self._api_client.close()
