"""Command-line entry point for the hostel picker."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from hostel_picker.config.environment import EnvironmentConfig
from hostel_picker.config.exceptions import ConfigurationError
from hostel_picker.config.loader import load_config
from hostel_picker.config.models import AppConfig
from hostel_picker.domain.models import UserProfile
from hostel_picker.logging import get_logger
from hostel_picker.logging.config import configure_logging
from hostel_picker.pipeline import ShortlistPipeline
from hostel_picker.shortlist.utils import build_shortlist_payload
from hostel_picker.sources import SourceError, build_source

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Priority for the log level is CLI > environment > config file.

    Args:
        config_path: Path to configuration file (None tries the default locations)
        log_level_override: Log level from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with env_config.log_level set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def load_profile(profile_path: Path) -> UserProfile:
    """
    Read a traveller profile from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    if not profile_path.exists():
        raise ConfigurationError(
            f"Profile file not found: {profile_path}",
            suggestions=["Pass --profile with the path to a YAML or JSON profile"],
        )

    try:
        with open(profile_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid profile syntax in {profile_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read profile {profile_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Profile must be a mapping of fields, got {type(data).__name__}",
            suggestions=["Use keys such as destination, maxPrice, vibe, noiseLevel, age"],
        )

    try:
        return UserProfile.coerce(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid profile in {profile_path}: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostel-picker",
        description="Hostel Picker - rank spreadsheet venues against a traveller profile",
    )
    parser.add_argument(
        "--profile",
        type=Path,
        required=True,
        help="Path to the traveller profile (YAML or JSON)",
    )
    parser.add_argument(
        "--table",
        type=Path,
        default=None,
        help="Local CSV export to read instead of the configured sheet URL",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Shortlist size (overrides shortlist.top_k)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the hostel picker.

    Prints the shortlist payload as JSON on stdout; logs go to stderr.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        if args.top_k is not None and args.top_k < 1:
            raise ConfigurationError(f"--top-k must be positive, got: {args.top_k}")

        profile = load_profile(args.profile)
        source = build_source(app_config.source, table_path=args.table)

        logger.info(
            "Hostel picker starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "source_type": type(source).__name__,
                "log_level": env_config.log_level,
            },
        )

        pipeline = ShortlistPipeline(app_config=app_config, source=source)
        run = pipeline.run(profile, k=args.top_k)

        payload: Dict[str, Any] = build_shortlist_payload(run.result)
        payload["run_id"] = run.run_id
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except SourceError as e:
        print(f"Source Error: {e}", file=sys.stderr)
        logger.error(
            f"Failed to load venue table: {e}",
            extra={"event": "source.error", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during run",
            extra={
                "event": "service.run.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
