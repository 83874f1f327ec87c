"""Scoring of venue records against a user profile.

This module provides:
- ScoreSet: integer 0-100 fit score per dimension
- RankedCandidate: a record with its ScoreSet and weighted aggregate
- ScoringEngine: service composing the field normalizers
- NORMALIZERS and the individual score_* functions
"""

from .engine import ScoringEngine, score_record
from .models import SCORE_KEYS, RankedCandidate, ScoreSet
from .normalizers import (
    NORMALIZERS,
    backend_noise_level,
    bucket_match,
    score_age,
    score_facilities,
    score_nationality,
    score_noise,
    score_nomad,
    score_price,
    score_size,
    score_solo,
    score_vibe,
)

__all__ = [
    "ScoringEngine",
    "score_record",
    "ScoreSet",
    "RankedCandidate",
    "SCORE_KEYS",
    "NORMALIZERS",
    "bucket_match",
    "backend_noise_level",
    "score_price",
    "score_vibe",
    "score_facilities",
    "score_noise",
    "score_age",
    "score_size",
    "score_nationality",
    "score_nomad",
    "score_solo",
]
