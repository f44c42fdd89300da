"""Error handling middleware with Sentry integration."""
import logging
from flask import jsonify

from booking_app.domain.exceptions import (
    BookingAPIError,
    BookingAppError,
    BookingSessionError,
    FormValidationError,
    MinimumPassengersError,
    ServerRejectedError,
)

logger = logging.getLogger(__name__)


def status_for_error(error: BookingAppError) -> int:
    """HTTP status a booking failure is rendered with."""
    if isinstance(error, (FormValidationError, MinimumPassengersError)):
        return 400
    if isinstance(error, BookingSessionError):
        return 409
    if isinstance(error, ServerRejectedError) and error.status_code == 404:
        return 404
    if isinstance(error, BookingAPIError):
        return 502
    return 500


def init_error_handlers(app) -> None:
    """
    Initialize error handlers for the application.

    Args:
        app: Flask application instance
    """
    dsn = app.config.get("SENTRY_DSN")
    if dsn:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get("FLASK_ENV", "production"),
        )
        logger.info("Sentry error tracking initialized")

    @app.errorhandler(BookingAppError)
    def booking_error(error: BookingAppError):
        """Render any booking failure as a plain message."""
        status = status_for_error(error)
        if status >= 500:
            logger.error(f"Booking failure: {error.user_message}", exc_info=error)
        else:
            logger.info(f"Request rejected ({status}): {error.user_message}")
        return jsonify({"status": "error", "message": error.user_message}), status

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"status": "error", "message": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return jsonify({"status": "error", "message": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({"status": "error", "message": "Internal server error"}), 500
