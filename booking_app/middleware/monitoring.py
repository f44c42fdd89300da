"""Monitoring and metrics middleware using Prometheus."""
import logging
import time
from functools import wraps
from typing import Callable

from flask import request
from prometheus_client import Counter, Histogram
from prometheus_client import make_wsgi_app
from werkzeug.middleware.dispatcher import DispatcherMiddleware

from booking_app.domain.exceptions import BookingAppError
from booking_app.middleware.error_handler import status_for_error

logger = logging.getLogger(__name__)

# Prometheus metrics
booking_api_calls_total = Counter(
    'booking_api_calls_total',
    'Total number of calls made to the booking service',
    ['operation', 'status']
)

booking_api_call_duration = Histogram(
    'booking_api_call_duration_seconds',
    'Time spent waiting for the booking service',
    ['operation'],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0]
)

http_requests_total = Counter(
    'booking_http_requests_total',
    'Total number of HTTP requests served',
    ['method', 'endpoint', 'status']
)

http_request_duration = Histogram(
    'booking_http_request_duration_seconds',
    'Time spent serving HTTP requests',
    ['endpoint']
)


def register_metrics_middleware(app) -> None:
    """
    Expose Prometheus metrics at /metrics.

    Args:
        app: Flask application instance
    """
    if not app.config.get("ENABLE_METRICS"):
        return

    app.wsgi_app = DispatcherMiddleware(app.wsgi_app, {
        '/metrics': make_wsgi_app()
    })

    logger.info("Prometheus metrics enabled at /metrics")


def track_request(endpoint: str):
    """
    Decorator to track request count and latency of a view.

    Args:
        endpoint: Endpoint name for metrics
    """
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            status_code = 500

            try:
                response = f(*args, **kwargs)
                status_code = response[1] if isinstance(response, tuple) else 200
                return response
            except BookingAppError as e:
                status_code = status_for_error(e)
                raise
            finally:
                http_requests_total.labels(
                    method=request.method,
                    endpoint=endpoint,
                    status=status_code
                ).inc()
                http_request_duration.labels(endpoint=endpoint).observe(
                    time.time() - start_time
                )

        return wrapper
    return decorator


def track_api_call(operation: str, success: bool, duration: float) -> None:
    """
    Track one booking service call.

    Args:
        operation: Operation name (e.g., 'create_booking', 'cancel_booking')
        success: Whether the call was successful
        duration: Seconds spent waiting for the response
    """
    try:
        status = "success" if success else "error"
        booking_api_calls_total.labels(operation=operation, status=status).inc()
        booking_api_call_duration.labels(operation=operation).observe(duration)
    except ValueError as e:
        # Metrics failures are logged only
        logger.debug(f"Failed to track booking API metrics: {e}")
