"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

from .duration import DurationParseError, parse_duration

WEIGHT_KEYS = ("price", "facilities", "vibe", "noise", "nomad", "solo", "age", "size", "nationality")


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    source = config_dict.get("source", {})
    if isinstance(source, dict):
        cache_ttl = source.get("cache_ttl")
        if isinstance(cache_ttl, str):
            try:
                if parse_duration(cache_ttl) < 60:
                    warning_messages.append(
                        f"Short cache_ttl ({cache_ttl}) refetches the sheet on almost every request"
                    )
            except DurationParseError:
                # Reported as a validation error later
                pass

    scoring = config_dict.get("scoring", {})
    if isinstance(scoring, dict) and scoring:
        weights = [scoring.get(key) for key in WEIGHT_KEYS if key in scoring]
        if len(weights) == len(WEIGHT_KEYS) and all(w == 0 for w in weights):
            warning_messages.append(
                "All scoring weights are zero; shortlists will keep input order"
            )

    keywords = config_dict.get("keywords", {})
    if isinstance(keywords, dict):
        for table_name in ("vibe", "facilities"):
            table = keywords.get(table_name)
            if not isinstance(table, dict):
                continue
            for bucket, terms in table.items():
                if not terms:
                    warning_messages.append(
                        f"Keyword bucket '{bucket}' in {table_name} has no terms and can never hit"
                    )

    shortlist = config_dict.get("shortlist", {})
    if isinstance(shortlist, dict):
        top_k = shortlist.get("top_k")
        pool = shortlist.get("fallback_pool_size")
        if isinstance(top_k, int) and isinstance(pool, int) and pool < top_k:
            warning_messages.append(
                f"fallback_pool_size ({pool}) is smaller than top_k ({top_k}); "
                "fallback shortlists will be short"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
