"""Pipeline orchestration: fetch the table, parse it, pick the shortlist."""

import logging
from typing import Any, Optional
from uuid import uuid4

from hostel_picker.config.models import AppConfig
from hostel_picker.domain.models import UserProfile
from hostel_picker.logging import get_logger
from hostel_picker.logging.context import log_context
from hostel_picker.parsing.service import TableParser
from hostel_picker.scoring.engine import ScoringEngine
from hostel_picker.shortlist.selector import ShortlistSelector
from hostel_picker.sources.base import TableSource
from hostel_picker.utils.timestamps import utc_now

from .models import ShortlistRunResult

logger = get_logger(__name__, component="pipeline")


def build_engine(app_config: AppConfig) -> ScoringEngine:
    """ScoringEngine wired with the configured weights, keywords and columns."""
    return ScoringEngine(
        weights=app_config.scoring,
        keyword_tables=app_config.keywords,
        field_map=app_config.columns,
    )


class ShortlistPipeline:
    """
    Runs source -> parser -> selector for one profile at a time.

    The parser, engine and selector hold no per-run state, so a single
    pipeline can serve many profiles; only the source may cache.
    """

    def __init__(
        self,
        app_config: AppConfig,
        source: TableSource,
        engine: Optional[ScoringEngine] = None,
        parser: Optional[TableParser] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """
        Initialize the shortlist pipeline.

        Args:
            app_config: Application configuration
            source: Where the raw table text comes from
            engine: Scoring engine (built from app_config when omitted)
            parser: Table parser (built from app_config when omitted)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.app_config = app_config
        self.source = source
        self.engine = engine or build_engine(app_config)
        self.parser = parser or TableParser(name_field=app_config.columns.name)
        self.selector = ShortlistSelector(
            engine=self.engine,
            top_k=app_config.shortlist.top_k,
            fallback_pool_size=app_config.shortlist.fallback_pool_size,
            max_workers=app_config.shortlist.max_workers,
        )
        self.logger = logger_instance or logger

    def run(self, profile: Any, k: Optional[int] = None) -> ShortlistRunResult:
        """
        Produce a shortlist for one profile.

        Args:
            profile: UserProfile or mapping of profile fields
            k: Shortlist size (defaults to shortlist.top_k)

        Returns:
            ShortlistRunResult with counts and the ranked shortlist

        Raises:
            SourceError: If the table cannot be fetched
            TypeError: If the profile is not a mapping
        """
        profile = UserProfile.coerce(profile)
        run_started_at = utc_now()
        run_id = uuid4().hex

        with log_context(run_id=run_id):
            self.logger.info(
                "Pipeline run started",
                extra={
                    "event": "pipeline.run.started",
                    "destination": profile.destination,
                    "top_k": k or self.selector.top_k,
                },
            )

            try:
                text = self.source.fetch_table()
            except Exception as e:
                self.logger.error(
                    f"Failed to fetch table: {e}",
                    extra={"event": "pipeline.run.failed", "error_type": type(e).__name__},
                )
                raise

            records = self.parser.parse(text)
            shortlist = self.selector.select(records, profile, k=k)

            result = ShortlistRunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                record_count=len(records),
                result=shortlist,
            )

            self.logger.info(
                "Pipeline run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "duration_ms": int(result.duration_seconds * 1000),
                    "record_count": result.record_count,
                    "candidate_count": result.candidate_count,
                    "used_fallback": result.used_fallback,
                },
            )
            return result
