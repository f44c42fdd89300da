"""Flight search and seat-class selection endpoints."""
import logging

from flask import Blueprint, current_app, jsonify, request

from booking_app.domain.exceptions import FormValidationError
from booking_app.middleware.monitoring import track_request
from booking_app.utils.formatting import format_amount, format_price
from booking_app.views.serializers import flight_to_dict, json_body


flights_blueprint = Blueprint("flights", __name__, url_prefix="/api/flights")
_logger = logging.getLogger(__name__)


def _container():
    return current_app.config["service_container"]


@flights_blueprint.route("", methods=["GET"])
@track_request("search_flights")
def search_flights():
    """
    Search flights.

    Query params: origin, destination, date (YYYY-MM-DD; defaults to today)
    """
    flights = _container().get_search_flights().execute(
        request.args.get("origin", ""),
        request.args.get("destination", ""),
        request.args.get("date"),
    )
    symbol = current_app.config["CURRENCY_SYMBOL"]
    return jsonify({
        "status": "ok",
        "flights": [flight_to_dict(flight, symbol) for flight in flights],
    }), 200


@flights_blueprint.route("/<flight_id>", methods=["GET"])
@track_request("flight_details")
def flight_details(flight_id: str):
    """Flight detail with priced seat classes."""
    flight = _container().get_api_client().get_flight(flight_id)
    return jsonify({
        "status": "ok",
        "flight": flight_to_dict(flight, current_app.config["CURRENCY_SYMBOL"]),
    }), 200


@flights_blueprint.route("/<flight_id>/selection", methods=["POST"])
@track_request("select_seat_class")
def select_seat_class(flight_id: str):
    """
    Pick a seat class.

    Body: ``{"seatClassId": "2"}``. The returned selection is handed back
    unchanged with the roster and booking calls.
    """
    body = json_body()
    seat_class_id = body.get("seatClassId")
    if seat_class_id in (None, ""):
        raise FormValidationError("Please choose a seat class.")

    selection = _container().get_select_seat_class().execute(flight_id, str(seat_class_id))
    payload = selection.to_payload()
    payload["unitPrice"] = format_amount(selection.unit_price)
    payload["displayPrice"] = format_price(selection.unit_price, current_app.config["CURRENCY_SYMBOL"])
    return jsonify({"status": "ok", "selection": payload}), 200
