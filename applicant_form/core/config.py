"""
Application configuration management for the applicant form validators.
This module loads and validates all configuration settings from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal, Optional
import logging

# Configure logging
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """
    Validation settings management using Pydantic.
    Covers the email plausibility service, phone parsing and logging.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_assignment=True,
    )

    # Email plausibility service
    EMAIL_CHECK_URL: Optional[str] = None
    EMAIL_CHECK_API_KEY: Optional[str] = None
    EMAIL_CHECK_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    EMAIL_CHECK_RESULT_FIELD: str = "valid"
    # "raise" propagates EmailCheckError, "violation" reports the address as invalid
    EMAIL_CHECK_FAILURE_POLICY: Literal["raise", "violation"] = "raise"

    # Phone numbers without a leading "+" are parsed against this region
    DEFAULT_PHONE_REGION: Optional[str] = None

    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """
    Creates and caches validation settings.
    Uses LRU cache to avoid reading environment variables multiple times.

    Returns:
        Settings: Validation configuration settings

    Raises:
        Exception: If settings cannot be loaded properly
    """
    try:
        logger.info("Loading validation settings")
        settings = Settings()

        # Log non-sensitive configuration values
        logger.info(f"Email check URL: {settings.EMAIL_CHECK_URL or 'not configured'}")
        logger.info(f"Email check timeout: {settings.EMAIL_CHECK_TIMEOUT_SECONDS}s")
        logger.info(f"Email check failure policy: {settings.EMAIL_CHECK_FAILURE_POLICY}")
        logger.info(f"Default phone region: {settings.DEFAULT_PHONE_REGION}")

        if settings.EMAIL_CHECK_URL is None:
            logger.warning("EMAIL_CHECK_URL is not set")

        return settings

    except Exception as e:
        logger.error(f"Failed to load settings: {str(e)}")
        raise


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging with the shared format and the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
