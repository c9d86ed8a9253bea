"""
Configuration module for loading environment variables.
All tunables for the pricing engine are read once at import time.
"""
import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration loaded from environment variables."""

    # Time constants used for every hourly -> monthly/yearly conversion
    HOURS_PER_MONTH: int = 730  # Standard assumption: 24/7 operation
    HOURS_PER_YEAR: int = 8760
    MONTHS_PER_YEAR: int = 12

    # Results presentation
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "USD")
    INCLUDE_PRICING_IN_RESULTS: bool = _env_bool("INCLUDE_PRICING_IN_RESULTS", "true")

    # Optional live pricing (offline tables are always the fallback)
    LIVE_PRICING_ENABLED: bool = _env_bool("LIVE_PRICING_ENABLED", "false")
    LIVE_PRICING_TIMEOUT_SECONDS: float = float(os.getenv("LIVE_PRICING_TIMEOUT_SECONDS", "10"))
    LIVE_PRICING_MAX_RETRIES: int = int(os.getenv("LIVE_PRICING_MAX_RETRIES", "3"))
    LIVE_PRICING_BACKOFF_SECONDS: float = float(os.getenv("LIVE_PRICING_BACKOFF_SECONDS", "0.5"))
    AWS_PRICING_REGION: str = os.getenv("AWS_PRICING_REGION", "us-east-1")
    PRICING_CACHE_TTL_SECONDS: int = int(os.getenv("PRICING_CACHE_TTL_SECONDS", "86400"))  # 24 hours

    SUPPORTED_CURRENCIES = ("USD", "EUR", "GBP", "AUD", "CAD", "JPY")

    @classmethod
    def validate(cls) -> None:
        """
        Validates that configuration values are usable.

        Raises:
            ValueError: If any configuration value is missing or invalid.
        """
        if cls.DEFAULT_CURRENCY not in cls.SUPPORTED_CURRENCIES:
            raise ValueError(
                f"DEFAULT_CURRENCY must be one of {', '.join(cls.SUPPORTED_CURRENCIES)} "
                f"(got: {cls.DEFAULT_CURRENCY})"
            )
        if cls.LIVE_PRICING_TIMEOUT_SECONDS <= 0:
            raise ValueError("LIVE_PRICING_TIMEOUT_SECONDS must be positive")
        if cls.LIVE_PRICING_MAX_RETRIES < 0:
            raise ValueError("LIVE_PRICING_MAX_RETRIES must not be negative")
        if cls.LIVE_PRICING_BACKOFF_SECONDS < 0:
            raise ValueError("LIVE_PRICING_BACKOFF_SECONDS must not be negative")
        if cls.PRICING_CACHE_TTL_SECONDS < 0:
            raise ValueError("PRICING_CACHE_TTL_SECONDS must not be negative")


config = Config()
