"""Shortlist selection over scored venue records.

This module provides:
- ShortlistSelector: destination filter, explicit fallback, ranking, truncation
- ShortlistResult: the ranked candidates plus how the pool was chosen
- shortlist: function form returning just the ranked candidates
- build_candidate_payload / build_shortlist_payload: JSON-ready output
"""

from .models import ShortlistResult
from .selector import DEFAULT_TOP_K, ShortlistSelector, shortlist
from .utils import DEFAULT_OMIT_FIELDS, build_candidate_payload, build_shortlist_payload

__all__ = [
    "ShortlistSelector",
    "ShortlistResult",
    "shortlist",
    "DEFAULT_TOP_K",
    "DEFAULT_OMIT_FIELDS",
    "build_candidate_payload",
    "build_shortlist_payload",
]
