"""Feedback service orchestration.

Updates:
    v0.1.0 - 2024-06-10 - Exposed load, filter and metric operations over a repository.
    v0.2.0 - 2024-06-12 - Added summary payload for reporting.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable

from ..core.feedback_repository import (
    FeedbackRecord,
    FeedbackRepository,
    SatisfactionBreakdown,
)
from .feedback_analyzer import FeedbackAnalyzer, FilterSpec, PeriodKind

logger = logging.getLogger(__name__)


class FeedbackService:
    """In-process API over a feedback repository and analyzer."""

    def __init__(
        self,
        repository: FeedbackRepository,
        analyzer: FeedbackAnalyzer,
    ) -> None:
        """Initialize dependencies for feedback analysis.

        Args:
            repository (FeedbackRepository): Owner of the feedback collection.
            analyzer (FeedbackAnalyzer): Filtering and metrics engine.
        """

        self._repository = repository
        self._analyzer = analyzer

    @property
    def records(self) -> tuple[FeedbackRecord, ...]:
        return self._repository.records

    @property
    def filtered(self) -> tuple[FeedbackRecord, ...]:
        return self._repository.filtered

    @property
    def version(self) -> int:
        """Return the repository load counter."""
        return self._repository.version

    def load(self, records: Iterable[FeedbackRecord]) -> None:
        """Replace the collection; the previous filtered result is discarded."""

        self._repository.load(records)
        logger.info(
            "feedback_loaded",
            extra={
                "record_count": self._repository.total_responses(),
                "version": self._repository.version,
            },
        )

    def filter(
        self,
        period: str | PeriodKind = PeriodKind.ALL,
        roles: Iterable[str] = (),
        scores: Iterable[Any] = (),
        range_start: date | datetime | str | None = None,
        range_end: date | datetime | str | None = None,
    ) -> tuple[FeedbackRecord, ...]:
        """Filter the current collection and store the result.

        Args:
            period (str | PeriodKind): Time window name.
            roles (Iterable[str]): Roles to keep; empty keeps all.
            scores (Iterable[Any]): Scores to keep; empty keeps all.
            range_start (date | datetime | str | None): Custom range start day.
            range_end (date | datetime | str | None): Custom range end day.

        Returns:
            tuple[FeedbackRecord, ...]: The new filtered result.
        """

        spec = FilterSpec.build(period, roles, scores, range_start, range_end)
        return self.apply(spec)

    def apply(self, spec: FilterSpec) -> tuple[FeedbackRecord, ...]:
        result = self._analyzer.filter(self._repository.records, spec)
        self._repository.store_filtered(result)
        return result

    def total_responses(self) -> int:
        return self._repository.total_responses()

    def satisfaction_score(self) -> int:
        return self._repository.satisfaction_score()

    def breakdown(self) -> SatisfactionBreakdown:
        return self._repository.satisfaction_breakdown()

    def summary(self) -> dict[str, Any]:
        """Return metrics for the full collection and the filtered count.

        Returns:
            dict[str, Any]: ``total_responses``, ``satisfaction_score``,
                ``breakdown`` and ``filtered_count`` entries.
        """

        breakdown = self.breakdown()
        return {
            "total_responses": breakdown.total,
            "satisfaction_score": breakdown.score,
            "breakdown": breakdown.to_dict(),
            "filtered_count": len(self._repository.filtered),
        }
