"""Helpers for handing shortlists to downstream consumers.

The advisory layer only needs the data it reasons over, so heavy columns
such as image URLs are left out of the payload; callers that need them
can look the record up by name in the original shortlist.
"""

from typing import Any, Dict, Iterable, List, Optional

from hostel_picker.scoring.models import RankedCandidate

from .models import ShortlistResult

DEFAULT_OMIT_FIELDS = ("hostel_img",)


def build_candidate_payload(
    candidate: RankedCandidate,
    omit_fields: Iterable[str] = DEFAULT_OMIT_FIELDS,
    rank: Optional[int] = None,
) -> Dict[str, Any]:
    """Build a JSON-ready dict for one candidate.

    Args:
        candidate: Ranked candidate to serialize
        omit_fields: Record columns left out of the venue block
        rank: Optional 1-based position in the shortlist

    Returns:
        Dict with keys:
        - rank: position in the shortlist (only when given)
        - venue: record columns, JSON cells as objects
        - scores: the nine sub-scores
        - aggregate: weighted aggregate, rounded to 2 decimals
    """
    omitted = set(omit_fields)
    venue = {k: v for k, v in candidate.record.to_dict().items() if k not in omitted}

    payload: Dict[str, Any] = {}
    if rank is not None:
        payload["rank"] = rank
    payload["venue"] = venue
    payload["scores"] = candidate.scores.as_dict()
    payload["aggregate"] = round(candidate.aggregate, 2)
    return payload


def build_shortlist_payload(
    result: ShortlistResult, omit_fields: Iterable[str] = DEFAULT_OMIT_FIELDS
) -> Dict[str, Any]:
    """Serialize a whole ShortlistResult, candidates ranked from 1."""
    omit = tuple(omit_fields)
    candidates: List[Dict[str, Any]] = [
        build_candidate_payload(candidate, omit_fields=omit, rank=position)
        for position, candidate in enumerate(result.candidates, 1)
    ]
    return {
        "destination": result.destination,
        "used_fallback": result.used_fallback,
        "matched_count": result.matched_count,
        "pool_size": result.pool_size,
        "candidates": candidates,
    }
