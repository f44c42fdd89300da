"""Application configuration with environment-based settings."""
import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """Base configuration class following Single Responsibility Principle."""

    # Load environment variables
    load_dotenv()

    # Booking service
    BOOKING_API_BASE_URL: str = os.getenv("BOOKING_API_BASE_URL", "http://127.0.0.1:3500/api")
    BOOKING_API_TIMEOUT: int = int(os.getenv("BOOKING_API_TIMEOUT", "30"))
    BOOKING_API_CLIENT: str = os.getenv("BOOKING_API_CLIENT", "http").lower()
    # Older backends expose booking creation at /book
    BOOKING_ENDPOINT: str = os.getenv("BOOKING_ENDPOINT", "/flights/book")

    # Booking defaults
    DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "1")
    DEFAULT_PAYMENT_METHOD: str = os.getenv("DEFAULT_PAYMENT_METHOD", "Credit Card")
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")

    # Monitoring
    SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
    ENABLE_METRICS: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values."""
        if cls.BOOKING_API_CLIENT not in ("http", "mock"):
            raise ValueError(f"Unknown BOOKING_API_CLIENT: {cls.BOOKING_API_CLIENT}")
        if cls.BOOKING_API_CLIENT == "http" and not cls.BOOKING_API_BASE_URL:
            raise ValueError("Missing required environment variable: BOOKING_API_BASE_URL")
        if cls.BOOKING_API_TIMEOUT <= 0:
            raise ValueError("BOOKING_API_TIMEOUT must be positive")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    BOOKING_API_CLIENT = "mock"
    ENABLE_METRICS = False
    SENTRY_DSN = None


def get_config() -> type[Config]:
    """Factory method to get configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    return config_map.get(env, DevelopmentConfig)
