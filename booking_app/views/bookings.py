"""Roster, booking, lookup, cancellation and check-in endpoints.

The server keeps no booking session state: the client sends the current
selection and roster with every call, the same way screens hand values
to each other.
"""
import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify

from booking_app.domain.entities.flight import FlightSelection
from booking_app.domain.entities.roster import PassengerRoster
from booking_app.domain.exceptions import FormValidationError
from booking_app.middleware.monitoring import track_request
from booking_app.utils.formatting import format_amount, format_price
from booking_app.views.serializers import action_result_to_dict, json_body


bookings_blueprint = Blueprint("bookings", __name__, url_prefix="/api")
_logger = logging.getLogger(__name__)

ROSTER_ACTIONS = ("add", "update", "remove", "toggle", "validate")


def _container():
    return current_app.config["service_container"]


def _parse_roster(body: Dict[str, Any]) -> PassengerRoster:
    try:
        return PassengerRoster.from_payload(body.get("passengers"))
    except ValueError as e:
        raise FormValidationError(str(e)) from e


def _parse_selection(body: Dict[str, Any]) -> FlightSelection:
    try:
        return FlightSelection.from_payload(body.get("selection"))
    except ValueError as e:
        raise FormValidationError(str(e)) from e


def _parse_index(body: Dict[str, Any], roster: PassengerRoster) -> int:
    index = body.get("index")
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(roster):
        raise FormValidationError("Unknown passenger.")
    return index


def _quote(selection: FlightSelection, roster: PassengerRoster) -> Dict[str, Any]:
    total = roster.total_price(selection.unit_price)
    return {
        "unitPrice": format_amount(selection.unit_price),
        "passengerCount": len(roster),
        "totalPrice": format_amount(total),
        "displayTotal": format_price(total, current_app.config["CURRENCY_SYMBOL"]),
    }


def _action_response(result, failure_status: int) -> Tuple[Any, int]:
    payload = action_result_to_dict(result, current_app.config["CURRENCY_SYMBOL"])
    return jsonify(payload), 200 if result.success else failure_status


@bookings_blueprint.route("/roster", methods=["POST"])
@track_request("roster")
def edit_roster():
    """
    Apply one roster action and return the new roster.

    Body: ``{"passengers": [...], "action": "add|update|remove|toggle|validate",
    "index": 0, "field": "age", "value": "30", "confirmed": false}``.
    Removal needs ``confirmed: true``; without it the response asks for
    confirmation and the roster is returned unchanged.
    """
    body = json_body()
    roster = _parse_roster(body)
    action = body.get("action")
    if action not in ROSTER_ACTIONS:
        raise FormValidationError(f"Unknown roster action: {action}")

    response: Dict[str, Any] = {"status": "ok"}
    if action == "add":
        roster.add_passenger()
    elif action == "update":
        try:
            roster.update_field(_parse_index(body, roster), body.get("field"), body.get("value"))
        except ValueError as e:
            raise FormValidationError(str(e)) from e
    elif action == "remove":
        index = _parse_index(body, roster)
        roster.request_removal(index)
        if body.get("confirmed") is True:
            roster.confirm_removal()
        else:
            roster.cancel_removal()
            response["confirmRemoval"] = index
    elif action == "toggle":
        roster.toggle_expand(_parse_index(body, roster))

    response["valid"] = roster.validate_all()
    response["passengers"] = roster.to_payload()
    return jsonify(response), 200


@bookings_blueprint.route("/bookings/quote", methods=["POST"])
@track_request("quote")
def quote_booking():
    """Total price for ``{"selection": ..., "passengers": [...]}``."""
    body = json_body()
    quote = _quote(_parse_selection(body), _parse_roster(body))
    return jsonify(dict(quote, status="ok")), 200


@bookings_blueprint.route("/bookings", methods=["POST"])
@track_request("create_booking")
def create_booking():
    """
    Submit a booking once.

    Body: ``{"selection": ..., "passengers": [...], "paymentMethod": "Credit Card",
    "userId": "1", "requestId": "..."}``. Clients should reuse ``requestId``
    when retrying the same booking.
    """
    body = json_body()
    selection = _parse_selection(body)
    roster = _parse_roster(body)

    submitter = _container().get_submit_booking()
    booking_request = submitter.build_request(
        roster,
        selection,
        user_id=body.get("userId"),
        payment_method=body.get("paymentMethod"),
        request_id=body.get("requestId") or None,
    )
    confirmation = submitter.execute(booking_request)

    response = dict(_quote(selection, roster), status="ok")
    response.update(confirmation.to_payload())
    response["requestId"] = booking_request.request_id
    return jsonify(response), 201


@bookings_blueprint.route("/bookings/lookup", methods=["POST"])
@track_request("lookup_booking")
def lookup_booking():
    """Resolve ``{"bookingReference", "passengerName"}`` to the full booking."""
    body = json_body()
    result = _container().get_resolve_booking().execute(
        str(body.get("bookingReference") or ""),
        str(body.get("passengerName") or ""),
    )
    return _action_response(result, 404)


@bookings_blueprint.route("/bookings/cancel", methods=["POST"])
@track_request("cancel_booking")
def cancel_booking():
    """Cancel with ``{"name", "bookingReference", "age", "passportNumber"}``."""
    body = json_body()
    result = _container().get_cancel_booking().execute_form(
        body.get("name"), body.get("bookingReference"), body.get("age"), body.get("passportNumber"),
    )
    return _action_response(result, 400)


@bookings_blueprint.route("/bookings/check-in", methods=["POST"])
@track_request("check_in")
def check_in():
    """Check in with the same four identity fields as cancellation."""
    body = json_body()
    result = _container().get_check_in().execute_form(
        body.get("name"), body.get("bookingReference"), body.get("age"), body.get("passportNumber"),
    )
    return _action_response(result, 400)
