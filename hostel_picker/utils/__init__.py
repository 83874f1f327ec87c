"""Utility functions for text normalization and timestamps."""

from .text import clamp_score, normalize_header, normalize_location, parse_number, round_half_up
from .timestamps import format_timestamp_for_log, utc_now

__all__ = [
    # Text
    "normalize_header",
    "normalize_location",
    "parse_number",
    "round_half_up",
    "clamp_score",
    # Timestamps
    "utc_now",
    "format_timestamp_for_log",
]
