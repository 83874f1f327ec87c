"""Scoring engine combining field normalizers into a ScoreSet and aggregate.

This module implements the scoring logic that:
1. Runs every registered normalizer for a (record, profile) pair
2. Rounds and clamps each result into an integer ScoreSet
3. Picks the weight vector for the profile (nomad/solo boosts)
4. Produces the weighted aggregate used for ranking
"""

import logging
from typing import Any, Dict, Mapping, Optional

from hostel_picker.config.models import FieldMap, KeywordTables, ScoringWeights
from hostel_picker.domain.models import Record, UserProfile
from hostel_picker.logging import get_logger
from hostel_picker.parsing.tokenizer import to_record
from hostel_picker.utils.text import clamp_score, round_half_up

from .models import SCORE_KEYS, RankedCandidate, ScoreSet
from .normalizers import NORMALIZERS

logger = get_logger(__name__, component="scoring")


class ScoringEngine:
    """Scores venue records against a user profile.

    Stateless apart from its configuration, so one engine can be shared
    across threads and requests.

    Attributes:
        weights: Weight vector for the aggregate
        tables: Vibe and facility bucket tables
        columns: Record keys each normalizer reads
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        keyword_tables: Optional[KeywordTables] = None,
        field_map: Optional[FieldMap] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ScoringEngine.

        Args:
            weights: Aggregate weights (defaults to the canonical weight set)
            keyword_tables: Bucket tables (defaults to the built-in vocabulary)
            field_map: Column keys (defaults to the spreadsheet's column names)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.weights = weights or ScoringWeights()
        self.tables = keyword_tables or KeywordTables()
        self.columns = field_map or FieldMap()
        self.logger = logger_instance or logger

    def score(self, record: Any, profile: Any) -> ScoreSet:
        """Compute every sub-score for one record.

        Args:
            record: A Record (plain mappings are converted)
            profile: A UserProfile or a mapping of profile fields

        Returns:
            Fully populated ScoreSet

        Raises:
            TypeError: If record or profile is not a mapping
        """
        record = to_record(record)
        profile = UserProfile.coerce(profile)

        values = {}
        for key in SCORE_KEYS:
            raw = NORMALIZERS[key](record, profile, self.columns, self.tables)
            values[key] = round_half_up(clamp_score(raw))
        return ScoreSet(**values)

    def weights_for(self, profile: Any) -> Dict[str, float]:
        """Weight per sub-score for this profile, with nomad/solo boosts applied."""
        profile = UserProfile.coerce(profile)
        w = self.weights
        return {
            "price": w.price,
            "vibe": w.vibe,
            "facilities": w.facilities,
            "noise": w.noise,
            "age": w.age,
            "size": w.size,
            "nationality": w.nationality,
            "nomad": w.nomad_boost if profile.nomad_mode else w.nomad,
            "solo": w.solo_boost if profile.solo_mode else w.solo,
        }

    def aggregate(self, scores: ScoreSet, profile: Any) -> float:
        """Weighted sum of a ScoreSet. Not normalized to 0-100."""
        weights = self.weights_for(profile)
        return sum(value * weights[key] for key, value in scores.as_dict().items())

    def evaluate(self, record: Any, profile: Any) -> RankedCandidate:
        """Score one record and wrap it as a RankedCandidate."""
        record = to_record(record)
        profile = UserProfile.coerce(profile)

        scores = self.score(record, profile)
        aggregate = self.aggregate(scores, profile)

        self.logger.debug(
            f"Scored {record.text(self.columns.name)}",
            extra={
                "event": "scoring.candidate.scored",
                "venue": record.text(self.columns.name),
                "aggregate": round(aggregate, 2),
                **{f"score_{key}": value for key, value in scores.as_dict().items()},
            },
        )
        return RankedCandidate(record=record, scores=scores, aggregate=aggregate)


def score_record(
    record: Mapping, profile: Any, engine: Optional[ScoringEngine] = None
) -> ScoreSet:
    """Score one record with a default (or given) engine."""
    return (engine or ScoringEngine()).score(record, profile)
