"""Shortlist selection: filter by destination, score, rank, truncate.

This module implements the selection logic that:
1. Keeps records whose location equals the profile destination
2. Falls back to the head of the unfiltered input when nothing matches
3. Scores every pooled record with the ScoringEngine
4. Stable-sorts by aggregate (ties keep input order) and truncates to k
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Optional

from hostel_picker.domain.models import Record, UserProfile
from hostel_picker.logging import get_logger
from hostel_picker.parsing.tokenizer import to_record
from hostel_picker.scoring.engine import ScoringEngine
from hostel_picker.scoring.models import RankedCandidate
from hostel_picker.utils.text import normalize_location

from .models import ShortlistResult

logger = get_logger(__name__, component="shortlist")

DEFAULT_TOP_K = 15


class ShortlistSelector:
    """Builds ranked, size-bounded shortlists of venue records.

    Attributes:
        engine: ScoringEngine used for every candidate
        top_k: Default shortlist size
        fallback_pool_size: Records taken when no venue is in the destination
            (None means the requested k)
        location_field: Record key compared against the destination
        max_workers: Thread pool size for scoring; None scores sequentially
    """

    def __init__(
        self,
        engine: Optional[ScoringEngine] = None,
        top_k: int = DEFAULT_TOP_K,
        fallback_pool_size: Optional[int] = None,
        location_field: Optional[str] = None,
        max_workers: Optional[int] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ShortlistSelector.

        Args:
            engine: ScoringEngine (defaults to one with canonical weights)
            top_k: Default number of candidates returned
            fallback_pool_size: Size of the fallback pool (defaults to k)
            location_field: Location column (defaults to the engine's field map)
            max_workers: Score in a thread pool of this size when > 1
            logger_instance: Optional logger instance (defaults to module logger)

        Raises:
            ValueError: If top_k or fallback_pool_size is not positive
        """
        self.engine = engine or ScoringEngine()
        self.top_k = _positive("top_k", top_k)
        self.fallback_pool_size = (
            None if fallback_pool_size is None else _positive("fallback_pool_size", fallback_pool_size)
        )
        self.location_field = location_field or self.engine.columns.location
        self.max_workers = max_workers
        self.logger = logger_instance or logger

    def select(self, records: Iterable[Any], profile: Any, k: Optional[int] = None) -> ShortlistResult:
        """Select the top-k candidates for a profile.

        Args:
            records: Parsed records in input order
            profile: UserProfile or mapping of profile fields
            k: Shortlist size (defaults to top_k)

        Returns:
            ShortlistResult with candidates sorted by aggregate, best first

        Raises:
            TypeError: If profile or a record is not a mapping
            ValueError: If k is not positive
        """
        profile = UserProfile.coerce(profile)
        k = self.top_k if k is None else _positive("k", k)
        records = [to_record(r) for r in records]

        destination = normalize_location(profile.destination)
        matched = [r for r in records if self._in_destination(r, destination)]

        used_fallback = not matched and bool(records)
        if matched:
            pool = matched
        else:
            pool = records[: self.fallback_pool_size or k]

        if used_fallback:
            self.logger.warning(
                f"No venues in '{profile.destination}', using first {len(pool)} records",
                extra={
                    "event": "shortlist.fallback.used",
                    "destination": profile.destination,
                    "record_count": len(records),
                    "pool_size": len(pool),
                },
            )

        scored = self._score_pool(pool, profile)
        # sorted() is stable, so equal aggregates keep input order
        ranked = sorted(scored, key=lambda c: c.aggregate, reverse=True)[:k]

        self.logger.info(
            f"Shortlisted {len(ranked)} of {len(pool)} candidates",
            extra={
                "event": "shortlist.selected",
                "destination": profile.destination,
                "matched_count": len(matched),
                "pool_size": len(pool),
                "candidate_count": len(ranked),
                "used_fallback": used_fallback,
            },
        )

        return ShortlistResult(
            candidates=ranked,
            used_fallback=used_fallback,
            matched_count=len(matched),
            pool_size=len(pool),
            destination=profile.destination,
        )

    def _in_destination(self, record: Record, destination: str) -> bool:
        if not destination:
            return False
        return normalize_location(record.text(self.location_field)) == destination

    def _score_pool(self, pool: List[Record], profile: UserProfile) -> List[RankedCandidate]:
        if self.max_workers and self.max_workers > 1 and len(pool) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in submission order
                return list(executor.map(lambda r: self.engine.evaluate(r, profile), pool))
        return [self.engine.evaluate(r, profile) for r in pool]


def _positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def shortlist(
    records: Iterable[Any],
    profile: Any,
    k: int = DEFAULT_TOP_K,
    engine: Optional[ScoringEngine] = None,
    fallback_pool_size: Optional[int] = None,
) -> List[RankedCandidate]:
    """Rank records for a profile and return the best k.

    Example:
        >>> top = shortlist(records, {"destination": "Lima", "maxPrice": 20}, k=3)
        >>> [c.record.text("hostel_name") for c in top]
    """
    selector = ShortlistSelector(engine=engine, top_k=k, fallback_pool_size=fallback_pool_size)
    return selector.select(records, profile).candidates
