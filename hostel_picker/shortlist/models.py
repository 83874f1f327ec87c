"""Data models for shortlist selection."""

from dataclasses import dataclass, field
from typing import Iterator, List

from hostel_picker.scoring.models import RankedCandidate


@dataclass(frozen=True)
class ShortlistResult:
    """Outcome of one shortlist selection.

    Attributes:
        candidates: Ranked candidates, best first, at most k entries
        used_fallback: True when no record matched the destination and the
            pool was taken from the head of the unfiltered input instead
        matched_count: Records whose location equals the destination
        pool_size: Records that were scored (matched set or fallback pool)
        destination: Destination the records were filtered on
    """

    candidates: List[RankedCandidate] = field(default_factory=list)
    used_fallback: bool = False
    matched_count: int = 0
    pool_size: int = 0
    destination: str = ""

    def __iter__(self) -> Iterator[RankedCandidate]:
        return iter(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    @property
    def is_empty(self) -> bool:
        return not self.candidates
