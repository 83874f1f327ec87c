"""Text helpers shared by the parser and the scorers.

This module provides:
- normalize_header: the column-key normalization applied to header cells
- normalize_location: case/whitespace-insensitive form used for city equality
- parse_number: tolerant extraction of the first decimal number in a cell
- round_half_up: rounding used for integer sub-scores
- clamp_score: bound a score to the 0-100 range
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_HEADER_STRIP = re.compile(r"[^a-z0-9_]")
_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d+)?|\.\d+)")
_WHITESPACE = re.compile(r"\s+")


def normalize_header(cell: str) -> str:
    """Normalize a header cell into a record key.

    Lower-cases, trims, and removes every character outside ``[a-z0-9_]``.

    Example:
        >>> normalize_header("Pulse Summary:")
        'pulsesummary'
    """
    return _HEADER_STRIP.sub("", cell.strip().lower())


def normalize_location(value: Optional[str]) -> str:
    """Case-fold and collapse whitespace so "  New  York " equals "new york"."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.strip()).casefold()


def parse_number(value) -> Optional[float]:
    """Extract the first decimal number from a value.

    Accepts ints and floats as-is and scans strings for the first number
    (``"€20"`` gives 20.0, ``"20.5 EUR"`` gives 20.5). Returns None for
    anything without a finite number, including bools and ints too large
    for a float.

    Only plain decimals are recognized, so exponents and decimal commas
    stop the match early:

        >>> parse_number("1e3")
        1.0
        >>> parse_number("2,50")
        2.0
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None

    match = _NUMBER.search(value)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (37.5 gives 38)."""
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp_score(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Bound a score to ``[low, high]``; NaN collapses to ``low``."""
    if value != value:
        return low
    return max(low, min(high, value))
