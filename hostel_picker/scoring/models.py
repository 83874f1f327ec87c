"""Data models for the scoring engine.

This module defines the per-dimension score set produced for one
(record, profile) pair and the ranked candidate wrapper handed to the
shortlist.
"""

from dataclasses import astuple, dataclass, fields
from typing import Dict

from hostel_picker.domain.models import Record

SCORE_KEYS = (
    "price",
    "vibe",
    "facilities",
    "noise",
    "age",
    "size",
    "nationality",
    "nomad",
    "solo",
)


@dataclass(frozen=True)
class ScoreSet:
    """Integer fit scores in [0, 100], one per dimension.

    Every field is always populated; missing inputs produce the neutral
    default of the corresponding normalizer rather than an absent key.
    """

    price: int
    vibe: int
    facilities: int
    noise: int
    age: int
    size: int
    nationality: int
    nomad: int
    solo: int

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or not 0 <= value <= 100:
                raise ValueError(f"{f.name} score must be an int in [0, 100], got {value!r}")

    def as_dict(self) -> Dict[str, int]:
        """Scores keyed by dimension name, in canonical order."""
        return dict(zip(SCORE_KEYS, astuple(self)))


@dataclass(frozen=True)
class RankedCandidate:
    """A record together with its scores and weighted aggregate.

    Attributes:
        record: The original parsed record (not a copy)
        scores: Full ScoreSet for the record against the profile
        aggregate: Weighted sum of the scores; only meaningful relative to
            other candidates scored with the same weights
    """

    record: Record
    scores: ScoreSet
    aggregate: float
