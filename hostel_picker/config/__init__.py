"""Configuration management module for the hostel picker."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config, validate_config_file
from .models import (
    AppConfig,
    FieldMap,
    KeywordTables,
    LogFormat,
    LogLevel,
    LoggingConfig,
    ScoringWeights,
    ShortlistConfig,
    SourceConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "AppConfig",
    "SourceConfig",
    "FieldMap",
    "ScoringWeights",
    "KeywordTables",
    "ShortlistConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
