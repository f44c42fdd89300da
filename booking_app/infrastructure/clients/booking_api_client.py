"""HTTP client for the remote flights and bookings service."""
import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from booking_app.config.settings import Config
from booking_app.domain.entities.booking import (
    BookingActionResult,
    BookingRecord,
    BookingRequest,
    IdentityCheck,
)
from booking_app.domain.entities.flight import Flight
from booking_app.domain.exceptions import BookingAPIError, ServerRejectedError
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient
from booking_app.middleware.monitoring import track_api_call
from booking_app.utils import response_parser


class BookingAPIClient(IBookingAPIClient):
    """
    Client for the booking backend REST API.

    Each public method issues exactly one logical request. Only idempotent
    GET requests are retried at the transport level; booking, cancellation
    and check-in are sent once.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        booking_endpoint: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the booking API client.

        Args:
            base_url: Base URL of the booking API (defaults to Config value)
            timeout: Request timeout in seconds (defaults to Config value)
            booking_endpoint: Path used to create bookings (defaults to Config value)
            session: Pre-built session (for tests)
        """
        self.base_url = base_url or Config.BOOKING_API_BASE_URL
        self.timeout = timeout or Config.BOOKING_API_TIMEOUT
        self.booking_endpoint = booking_endpoint or Config.BOOKING_ENDPOINT
        self._logger = logging.getLogger(__name__)

        if session is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=3,
                backoff_factor=1,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=frozenset(["GET"]),
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session

    def _make_request(
        self,
        method: str,
        endpoint: str,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make an HTTP request to the booking API.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint (relative to base_url)
            operation: Operation name for logs and metrics
            params: Optional query parameters
            json_data: Optional JSON body
            headers: Optional extra headers

        Returns:
            Decoded JSON response

        Raises:
            ServerRejectedError: If the service answers 4xx/5xx
            BookingAPIError: On connection errors, timeouts or non-JSON bodies
        """
        url = f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        headers = dict(headers or {})
        headers.setdefault("Accept", "application/json")
        if json_data is not None:
            headers.setdefault("Content-Type", "application/json")

        self._logger.debug(f"Request: {method} {url}")
        self._logger.debug(f"Params: {params}")
        if json_data:
            self._logger.debug(f"JSON Payload: {json.dumps(json_data, default=str)}")

        start_time = time.time()
        success = False
        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
            self._logger.debug(f"Status Code: {response.status_code}")

            if response.status_code >= 400:
                server_message = response_parser.extract_error_message(self._decode(response, strict=False))
                self._logger.error(f"HTTP error {response.status_code}: {method} {url} - {server_message}")
                raise ServerRejectedError(server_message, status_code=response.status_code)

            data = self._decode(response, strict=True)
            success = True
            return data

        except requests.exceptions.Timeout as e:
            self._logger.error(f"Booking API timed out after {self.timeout}s: {method} {url}")
            raise BookingAPIError("The booking service is taking too long to respond. Please try again.") from e
        except requests.exceptions.RequestException as e:
            self._logger.error(f"Booking API request failed: {method} {url} - {e}")
            raise BookingAPIError("Unable to reach the booking service. Please check your connection.") from e
        finally:
            track_api_call(operation, success, time.time() - start_time)

    def _decode(self, response: requests.Response, strict: bool) -> Any:
        if not response.text:
            if strict:
                self._logger.error(f"Empty response from {response.url}")
                raise BookingAPIError(status_code=response.status_code)
            return None
        try:
            return response.json()
        except ValueError as e:
            if not strict:
                return None
            self._logger.error(f"Non-JSON response from {response.url}: {response.text[:200]}")
            raise BookingAPIError(status_code=response.status_code) from e

    def search_flights(self, origin: str, destination: str, date: str) -> List[Flight]:
        self._logger.info(f"Searching flights {origin} -> {destination} on {date}")
        data = self._make_request(
            "GET", "/flights", "search_flights",
            params={"origin": origin, "destination": destination, "date": date},
        )
        flights = response_parser.parse_flights(data)
        self._logger.info(f"Found {len(flights)} flight(s)")
        return flights

    def get_flight(self, flight_id: str) -> Flight:
        self._logger.info(f"Fetching flight {flight_id}")
        data = self._make_request("GET", f"/flights/{flight_id}", "get_flight")
        return response_parser.parse_flight(data)

    def create_booking(self, request: BookingRequest) -> str:
        self._logger.info(
            f"Creating booking on flight {request.flight_id} for {len(request.passengers)} passenger(s) "
            f"(request {request.request_id})"
        )
        data = self._make_request(
            "POST", self.booking_endpoint, "create_booking",
            json_data=request.to_payload(),
            headers={"Idempotency-Key": request.request_id},
        )
        reference = response_parser.parse_booking_reference(data)
        self._logger.info(f"Booking created: {reference}")
        return reference

    def get_booking_by_reference(self, booking_reference: str, passenger_name: str) -> BookingRecord:
        self._logger.info(f"Looking up booking {booking_reference}")
        data = self._make_request(
            "POST", "/bookings/ref", "get_booking",
            json_data={"bookingReference": booking_reference, "passengerName": passenger_name},
        )
        return response_parser.parse_booking_record(data)

    def cancel_booking(self, identity: IdentityCheck) -> BookingActionResult:
        self._logger.info(f"Cancelling booking {identity.booking_reference}")
        data = self._make_request("POST", "/bookings/cancel", "cancel_booking", json_data=identity.to_payload())
        return response_parser.parse_action_result(data)

    def check_in(self, identity: IdentityCheck) -> BookingActionResult:
        self._logger.info(f"Checking in booking {identity.booking_reference}")
        data = self._make_request("POST", "/bookings/checkIn", "check_in", json_data=identity.to_payload())
        return response_parser.parse_action_result(data)

    def close(self) -> None:
        self.session.close()
