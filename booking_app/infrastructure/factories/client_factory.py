"""Factory for the booking service client (Factory Pattern)."""
import logging

from booking_app.config.settings import Config
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient
from booking_app.infrastructure.clients.booking_api_client import BookingAPIClient
from booking_app.infrastructure.clients.mock_booking_api_client import MockBookingAPIClient


logger = logging.getLogger(__name__)


class BookingClientFactory:
    """
    Creates the booking service client selected by configuration.

    ``BOOKING_API_CLIENT=http`` talks to the real backend; ``mock`` uses
    the in-memory stand-in.
    """

    @staticmethod
    def create_api_client(config: type[Config] = Config) -> IBookingAPIClient:
        """
        Create booking API client.

        Args:
            config: Configuration class to read settings from

        Returns:
            IBookingAPIClient instance

        Raises:
            ValueError: If the configured client type is unknown
        """
        client_type = config.BOOKING_API_CLIENT
        if client_type == "mock":
            logger.info("Using in-memory booking service")
            return MockBookingAPIClient()
        if client_type == "http":
            logger.info(f"Using booking service at {config.BOOKING_API_BASE_URL}")
            return BookingAPIClient(
                base_url=config.BOOKING_API_BASE_URL,
                timeout=config.BOOKING_API_TIMEOUT,
                booking_endpoint=config.BOOKING_ENDPOINT,
            )
        raise ValueError(f"Unknown booking client type: {client_type}")
