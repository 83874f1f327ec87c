"""Environment variable loading and validation."""

import os
from typing import Optional

from .duration import DurationParseError, parse_duration
from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        sheet_csv_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
        cache_ttl: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.sheet_csv_url = sheet_csv_url
        self.log_level = log_level
        self.environment = environment or "local"
        self.cache_ttl = cache_ttl


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - SHEET_CSV_URL: Published spreadsheet CSV URL (overrides source.sheet_url)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to every log record
    - CACHE_TTL: Override source.cache_ttl (e.g. "30m", "PT1H")

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    sheet_csv_url = (os.getenv("SHEET_CSV_URL") or "").strip() or None
    log_level = (os.getenv("LOG_LEVEL") or "").strip() or None
    environment = (os.getenv("ENVIRONMENT") or "").strip() or None
    cache_ttl = (os.getenv("CACHE_TTL") or "").strip() or None

    if sheet_csv_url and not sheet_csv_url.lower().startswith(("http://", "https://")):
        errors.append(
            f"Invalid SHEET_CSV_URL: '{sheet_csv_url}'. Must start with http:// or https://."
        )

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if cache_ttl:
        try:
            parse_duration(cache_ttl)
        except DurationParseError as e:
            errors.append(f"Invalid CACHE_TTL: {e}")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        sheet_csv_url=sheet_csv_url,
        log_level=log_level,
        environment=environment,
        cache_ttl=cache_ttl,
    )
