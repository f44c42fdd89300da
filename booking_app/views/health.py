"""Health check endpoints."""
import logging
from flask import Blueprint, current_app, jsonify

health_blueprint = Blueprint("health", __name__)
_logger = logging.getLogger(__name__)


@health_blueprint.route("/health", methods=["GET"])
def health_check():
    """
    Basic health check endpoint.

    Returns:
        JSON response with health status
    """
    return jsonify({
        "status": "healthy",
        "service": "flight-booking-app"
    }), 200


@health_blueprint.route("/health/ready", methods=["GET"])
def readiness_check():
    """
    Readiness check endpoint (booking client can be built).

    Returns:
        JSON response with readiness status
    """
    checks = {"booking_client": False}

    try:
        current_app.config["service_container"].get_api_client()
        checks["booking_client"] = True
    except (KeyError, ValueError) as e:
        _logger.error(f"Booking client health check failed: {e}")

    ready = all(checks.values())
    return jsonify({
        "status": "ready" if ready else "not_ready",
        "checks": checks
    }), 200 if ready else 503


@health_blueprint.route("/health/live", methods=["GET"])
def liveness_check():
    """
    Liveness check endpoint (for Kubernetes).

    Returns:
        JSON response with liveness status
    """
    return jsonify({
        "status": "alive",
        "service": "flight-booking-app"
    }), 200
