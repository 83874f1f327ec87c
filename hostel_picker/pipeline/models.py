"""Data models for pipeline run tracking."""

from dataclasses import dataclass, field
from datetime import datetime

from hostel_picker.shortlist.models import ShortlistResult


@dataclass
class ShortlistRunResult:
    """
    Results from one fetch -> parse -> select run.

    Attributes:
        run_id: Hex identifier attached to every log line of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        duration_seconds: Wall time for the run
        record_count: Records parsed from the table
        result: The shortlist produced
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    record_count: int = 0
    result: ShortlistResult = field(default_factory=ShortlistResult)
    duration_seconds: float = 0.0

    def __post_init__(self):
        if self.duration_seconds == 0.0:
            self.duration_seconds = (self.run_finished_at - self.run_started_at).total_seconds()

    @property
    def candidate_count(self) -> int:
        return len(self.result)

    @property
    def used_fallback(self) -> bool:
        return self.result.used_fallback
