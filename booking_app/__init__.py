"""Flask application factory with dependency injection."""
import logging
import sys
from typing import Optional

from flask import Flask, jsonify

from booking_app.config.settings import get_config
from booking_app.domain.interfaces.booking_api_client import IBookingAPIClient
from booking_app.infrastructure.service_container import ServiceContainer
from booking_app.middleware.error_handler import init_error_handlers
from booking_app.middleware.monitoring import register_metrics_middleware
from booking_app.views import bookings_blueprint, flights_blueprint, health_blueprint


def create_app(config_class=None, api_client: Optional[IBookingAPIClient] = None) -> Flask:
    """
    Create and configure Flask application with dependency injection.

    Args:
        config_class: Optional configuration class (for testing)
        api_client: Optional pre-built booking client (for testing)

    Returns:
        Configured Flask application

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config_class or get_config()

    _configure_logging(config.DEBUG)
    _logger = logging.getLogger(__name__)

    config.validate()

    app = Flask(__name__)
    app.config.from_object(config)

    app.register_blueprint(flights_blueprint)
    app.register_blueprint(bookings_blueprint)
    app.register_blueprint(health_blueprint)

    @app.route("/", methods=["GET"])
    def root():
        """Root endpoint for testing."""
        return jsonify({
            "status": "ok",
            "service": "flight-booking-app",
            "message": "Service is running"
        }), 200

    init_error_handlers(app)
    register_metrics_middleware(app)

    app.config["service_container"] = ServiceContainer(config, api_client=api_client)

    _logger.info("Flask application initialized successfully")
    _logger.debug(f"App routes registered: {[str(rule) for rule in app.url_map.iter_rules()]}")
    return app


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True
    )
