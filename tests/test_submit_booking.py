"""Tests for building and submitting booking requests."""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from booking_app.application.use_cases.resolve_booking import ResolveBookingUseCase
from booking_app.application.use_cases.submit_booking import SubmitBookingUseCase
from booking_app.domain.entities.booking import BookingRecord, BookingStatus, Passenger
from booking_app.domain.entities.flight import FlightSelection
from booking_app.domain.entities.roster import PassengerRoster
from booking_app.domain.exceptions import BookingAPIError, FormValidationError


@pytest.fixture
def selection():
    return FlightSelection(flight_id="42", seat_class_id="1", unit_price=Decimal("200.00"))


@pytest.fixture
def api_client():
    client = Mock()
    client.create_booking.return_value = "ABC123"
    return client


@pytest.fixture
def submitter(api_client):
    return SubmitBookingUseCase(api_client, default_user_id="1", default_payment_method="Credit Card")


def alice_roster() -> PassengerRoster:
    return PassengerRoster([Passenger("Alice", "P1", 30, expanded=True)])


class TestBuildRequest:
    """Validation and payload shaping before anything is sent."""

    def test_request_carries_selection_and_roster(self, submitter, selection):
        request = submitter.build_request(alice_roster(), selection)

        assert request.flight_id == "42"
        assert request.seat_class_id == "1"
        assert request.user_id == "1"
        assert request.payment_method == "Credit Card"
        assert request.passengers == ({"full_name": "Alice", "passport_number": "P1", "age": 30},)
        assert request.request_id

    def test_payload_has_no_ui_state(self, submitter, selection):
        payload = submitter.build_request(alice_roster(), selection).to_payload()
        assert "expanded" not in payload["passengers"][0]
        assert payload == {
            "userId": "1",
            "flightId": "42",
            "seatClassId": "1",
            "passengers": [{"full_name": "Alice", "passport_number": "P1", "age": 30}],
            "paymentMethod": "Credit Card",
        }

    def test_caller_values_override_defaults(self, submitter, selection):
        request = submitter.build_request(alice_roster(), selection, user_id="7", payment_method="PayPal",
                                          request_id="fixed")
        assert request.user_id == "7"
        assert request.payment_method == "PayPal"
        assert request.request_id == "fixed"

    def test_each_build_gets_a_fresh_request_id(self, submitter, selection):
        first = submitter.build_request(alice_roster(), selection)
        second = submitter.build_request(alice_roster(), selection)
        assert first.request_id != second.request_id

    def test_incomplete_roster_is_not_sent(self, submitter, selection, api_client):
        roster = alice_roster()
        roster.add_passenger()

        with pytest.raises(FormValidationError):
            submitter.submit(roster, selection)
        api_client.create_booking.assert_not_called()

    @pytest.mark.parametrize("count, unit_price, total", [
        (1, "200.00", "200.00"),
        (2, "150.00", "300.00"),
        (4, "99.95", "399.80"),
    ])
    def test_total_is_unit_price_times_passengers(self, submitter, count, unit_price, total):
        roster = PassengerRoster([Passenger(f"P{i}", f"X{i}", 30) for i in range(count)])
        selection = FlightSelection(flight_id="42", seat_class_id="1", unit_price=Decimal(unit_price))
        assert submitter.build_request(roster, selection).total_price == Decimal(total)


class TestSubmit:
    """One network call per submit; failures are not retried."""

    def test_success_returns_reference_and_lead_name(self, submitter, selection, api_client):
        roster = alice_roster()
        roster.add_passenger()
        roster.update_field(1, "full_name", "Bob")
        roster.update_field(1, "passport_number", "P2")
        roster.update_field(1, "age", "41")

        confirmation = submitter.submit(roster, selection)

        assert confirmation.booking_reference == "ABC123"
        assert confirmation.passenger_name == "Alice"
        api_client.create_booking.assert_called_once()

    def test_failure_propagates_without_retry(self, submitter, selection, api_client):
        api_client.create_booking.side_effect = BookingAPIError("Unable to reach the booking service.")

        with pytest.raises(BookingAPIError):
            submitter.submit(alice_roster(), selection)
        assert api_client.create_booking.call_count == 1

    def test_confirmation_resolves_by_reference_and_name(self, submitter, selection, api_client):
        api_client.get_booking_by_reference.return_value = BookingRecord(
            booking_reference="ABC123", status=BookingStatus.CONFIRMED
        )
        confirmation = submitter.submit(alice_roster(), selection)

        result = ResolveBookingUseCase(api_client).for_confirmation(confirmation)

        api_client.get_booking_by_reference.assert_called_once_with("ABC123", "Alice")
        assert result.success is True
        assert result.booking.booking_reference == "ABC123"
