"""Shared fixtures for the booking app tests."""
from datetime import datetime
from decimal import Decimal

import pytest

from booking_app import create_app
from booking_app.config.settings import TestingConfig
from booking_app.domain.entities.booking import BookingRequest
from booking_app.domain.entities.flight import Airline, Airport, Flight, FlightSeat, SeatClass
from booking_app.infrastructure.clients.mock_booking_api_client import MockBookingAPIClient


@pytest.fixture
def economy():
    return SeatClass(id="1", name="Economy", price_multiplier=Decimal("1"))


@pytest.fixture
def business():
    return SeatClass(id="2", name="Business", price_multiplier=Decimal("2"))


@pytest.fixture
def premium():
    return SeatClass(id="3", name="Premium Economy", price_multiplier=Decimal("1.35"))


@pytest.fixture
def flight(economy, business, premium):
    return Flight(
        id="42",
        flight_number="SA201",
        origin=Airport(code="JNB", city="Johannesburg"),
        destination=Airport(code="CPT", city="Cape Town"),
        base_price=Decimal("150.00"),
        airline=Airline(name="South Air"),
        departure_time=datetime(2025, 3, 12, 7, 5),
        arrival_time=datetime(2025, 3, 12, 9, 15),
        status="scheduled",
        seats=[
            FlightSeat(seat_class=economy, available_seats=80),
            FlightSeat(seat_class=business, available_seats=0),
            FlightSeat(seat_class=premium, available_seats=4),
        ],
    )


@pytest.fixture
def mock_client(flight):
    return MockBookingAPIClient(flights=[flight])


@pytest.fixture
def app(mock_client):
    app = create_app(TestingConfig, api_client=mock_client)
    yield app
    app.config["service_container"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def alice_reference(mock_client):
    """A one-passenger booking made directly on the mock service."""
    request = BookingRequest(
        flight_id="42",
        seat_class_id="1",
        user_id="1",
        passengers=({"full_name": "Alice", "passport_number": "P1", "age": 30},),
        payment_method="Credit Card",
        unit_price=Decimal("150.00"),
        request_id="req-alice",
    )
    return mock_client.create_booking(request)
