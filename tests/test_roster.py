"""Tests for the passenger roster."""
from decimal import Decimal

import pytest

from booking_app.domain.entities.booking import Passenger
from booking_app.domain.entities.roster import INCOMPLETE_ROSTER_MESSAGE, PassengerRoster
from booking_app.domain.exceptions import FormValidationError, MinimumPassengersError


def filled_roster(count: int) -> PassengerRoster:
    return PassengerRoster([
        Passenger(full_name=f"Passenger {i}", passport_number=f"P{i}", age=20 + i)
        for i in range(count)
    ])


class TestRosterEditing:
    """Adding passengers and editing their fields."""

    def test_new_roster_has_one_blank_passenger(self):
        roster = PassengerRoster()
        assert len(roster) == 1
        assert roster[0] == Passenger()
        assert roster[0].expanded is False

    def test_add_passenger_appends_blank(self):
        roster = filled_roster(1)
        roster.add_passenger()
        assert len(roster) == 2
        assert roster[1].full_name == ""
        assert roster[1].age is None
        assert roster[1].expanded is False

    def test_update_text_fields(self):
        roster = PassengerRoster()
        roster.update_field(0, "full_name", "Alice")
        roster.update_field(0, "passport_number", "P1")
        assert roster[0].full_name == "Alice"
        assert roster[0].passport_number == "P1"

    @pytest.mark.parametrize("raw, expected", [
        ("30", 30),
        (" 42 ", 42),
        (7, 7),
        ("abc", None),
        ("3O", None),
        ("", None),
        ("-1", None),
        ("12.5", None),
        ("\u00b2", None),
        ("\u0663", 3),
        (None, None),
    ])
    def test_age_input_is_normalised(self, raw, expected):
        roster = PassengerRoster()
        roster.update_field(0, "age", raw)
        assert roster[0].age == expected

    def test_invalid_age_clears_previous_value(self):
        roster = PassengerRoster()
        roster.update_field(0, "age", "30")
        roster.update_field(0, "age", "30x")
        assert roster[0].age is None

    def test_unknown_field_is_rejected(self):
        roster = PassengerRoster()
        with pytest.raises(ValueError):
            roster.update_field(0, "expanded", True)

    def test_update_out_of_range(self):
        with pytest.raises(IndexError):
            PassengerRoster().update_field(3, "full_name", "Bob")


class TestRosterRemoval:
    """The roster never drops below one passenger."""

    def test_remove_last_passenger_is_rejected(self):
        roster = filled_roster(1)
        before = roster.passengers

        with pytest.raises(MinimumPassengersError) as exc_info:
            roster.remove_passenger(0)

        assert exc_info.value.user_message == "At least one passenger is required."
        assert roster.passengers == before

    def test_remove_passenger(self):
        roster = filled_roster(3)
        removed = roster.remove_passenger(1)
        assert removed.full_name == "Passenger 1"
        assert [p.full_name for p in roster] == ["Passenger 0", "Passenger 2"]

    def test_removal_requires_confirmation(self):
        roster = filled_roster(2)
        roster.request_removal(1)
        assert len(roster) == 2
        assert roster.pending_removal == 1

        roster.confirm_removal()
        assert len(roster) == 1
        assert roster.pending_removal is None

    def test_cancelled_removal_keeps_passenger(self):
        roster = filled_roster(2)
        roster.request_removal(0)
        roster.cancel_removal()
        assert len(roster) == 2
        with pytest.raises(ValueError):
            roster.confirm_removal()

    def test_request_removal_of_last_passenger_is_rejected(self):
        roster = filled_roster(1)
        with pytest.raises(MinimumPassengersError):
            roster.request_removal(0)
        assert roster.pending_removal is None
        assert len(roster) == 1


class TestRosterExpansion:
    """Accordion semantics: at most one passenger expanded."""

    @pytest.mark.parametrize("first, second", [(0, 1), (1, 0), (0, 2), (2, 1)])
    def test_expanding_one_collapses_the_other(self, first, second):
        roster = filled_roster(3)
        roster.toggle_expand(first)
        roster.toggle_expand(second)
        assert roster[first].expanded is False
        assert roster[second].expanded is True
        assert sum(p.expanded for p in roster) == 1

    def test_toggling_expanded_passenger_collapses_it(self):
        roster = filled_roster(2)
        roster.toggle_expand(1)
        roster.toggle_expand(1)
        assert roster.expanded_index is None


class TestRosterValidation:
    """validate_all passes only when every field of every passenger is set."""

    def test_complete_roster_passes(self):
        assert filled_roster(3).validate_all() is True

    @pytest.mark.parametrize("field_name, value", [
        ("full_name", ""),
        ("full_name", "   "),
        ("passport_number", ""),
        ("age", "abc"),
        ("age", ""),
    ])
    def test_one_bad_field_fails_whole_roster(self, field_name, value):
        roster = filled_roster(3)
        roster.update_field(2, field_name, value)
        assert roster.validate_all() is False

    def test_ensure_valid_raises_aggregate_message(self):
        roster = filled_roster(2)
        roster.add_passenger()
        with pytest.raises(FormValidationError) as exc_info:
            roster.ensure_valid()
        assert exc_info.value.user_message == INCOMPLETE_ROSTER_MESSAGE


class TestRosterPricing:
    """Every passenger pays the selected unit price."""

    def test_single_passenger_total(self):
        roster = PassengerRoster([Passenger("Alice", "P1", 30)])
        assert roster.total_price(Decimal("200.00")) == Decimal("200.00")

    def test_two_passenger_total(self):
        assert filled_roster(2).total_price(Decimal("150.00")) == Decimal("300.00")


class TestRosterPayload:
    """Round trip with the client, UI state never submitted."""

    def test_submission_strips_expanded(self):
        roster = filled_roster(1)
        roster.toggle_expand(0)
        assert roster.to_submission() == [
            {"full_name": "Passenger 0", "passport_number": "P0", "age": 20}
        ]

    def test_from_payload_accepts_camel_case(self):
        roster = PassengerRoster.from_payload([
            {"fullName": "Alice", "passportNumber": "P1", "age": "30"},
        ])
        assert roster[0] == Passenger("Alice", "P1", 30)

    def test_from_payload_keeps_single_expanded(self):
        roster = PassengerRoster.from_payload([
            {"full_name": "A", "expanded": True},
            {"full_name": "B", "expanded": True},
        ])
        assert [p.expanded for p in roster] == [True, False]

    def test_empty_payload_gives_one_passenger(self):
        assert len(PassengerRoster.from_payload([])) == 1

    def test_malformed_payload(self):
        with pytest.raises(ValueError):
            PassengerRoster.from_payload({"full_name": "A"})
