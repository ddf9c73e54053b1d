"""In-memory feedback collection and satisfaction metrics.

Updates:
    v0.1.0 - 2024-06-10 - Added record model, repository and satisfaction scoring.
    v0.2.0 - 2024-06-12 - Track a load version and expose the score breakdown.
    v0.2.1 - 2024-06-14 - Missing and blank scores count as 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, Mapping

PROMOTER_MIN_SCORE = 9
DETRACTOR_MAX_SCORE = 6

_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "user_id": ("user_id", "userId"),
    "score": ("score",),
    "reason": ("reason",),
    "created_at": ("created_at", "createdAt"),
    "company_id": ("company_id", "companyId"),
    "role": ("role",),
}


@dataclass(slots=True, frozen=True)
class FeedbackRecord:
    """A single customer feedback response."""

    user_id: str
    score: int
    reason: str
    created_at: str
    company_id: str
    role: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FeedbackRecord":
        """Build a record from its wire representation.

        Values are passed through untouched; a malformed ``score`` or
        ``created_at`` only matters once an operation reads that field.

        Args:
            payload (Mapping[str, Any]): Record fields in snake_case or camelCase.

        Returns:
            FeedbackRecord: Immutable record instance.
        """

        values: dict[str, Any] = {}
        for name, aliases in _FIELD_ALIASES.items():
            value = next((payload[key] for key in aliases if key in payload), None)
            if value is None and name != "score":
                value = ""
            values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "score": self.score,
            "reason": self.reason,
            "created_at": self.created_at,
            "company_id": self.company_id,
            "role": self.role,
        }


@dataclass(slots=True, frozen=True)
class SatisfactionBreakdown:
    """Promoter/passive/detractor counts and the resulting score."""

    total: int
    promoters: int
    passives: int
    detractors: int
    score: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "promoters": self.promoters,
            "passives": self.passives,
            "detractors": self.detractors,
            "score": self.score,
        }


def classify_score(score: Any) -> str:
    """Return ``promoter``, ``detractor`` or ``passive`` for a raw score.

    Missing or blank scores count as 0 (detractor); other non-numeric
    scores fall into the passive bucket.
    """

    value = _numeric_score(score)
    if value is None:
        return "passive"
    if value >= PROMOTER_MIN_SCORE:
        return "promoter"
    if value <= DETRACTOR_MAX_SCORE:
        return "detractor"
    return "passive"


def round_half_up(value: Fraction) -> int:
    """Round to the nearest integer, moving halves toward positive infinity."""

    return math.floor(value + Fraction(1, 2))


def compute_breakdown(records: Iterable[FeedbackRecord]) -> SatisfactionBreakdown:
    """Classify every record and derive the satisfaction score.

    Args:
        records (Iterable[FeedbackRecord]): The full, unfiltered collection.

    Returns:
        SatisfactionBreakdown: Bucket counts and score; the score is 0 when
            there are no records.
    """

    counts = {"promoter": 0, "passive": 0, "detractor": 0}
    for record in records:
        counts[classify_score(record.score)] += 1

    total = sum(counts.values())
    if total == 0:
        score = 0
    else:
        score = round_half_up(
            Fraction((counts["promoter"] - counts["detractor"]) * 100, total)
        )
    return SatisfactionBreakdown(
        total=total,
        promoters=counts["promoter"],
        passives=counts["passive"],
        detractors=counts["detractor"],
        score=score,
    )


class FeedbackRepository:
    """Holds the current feedback collection and the last filtered result.

    Both values are tuples swapped in with a single assignment, so a reader
    sees either the previous or the new value and never a partial one.
    """

    def __init__(self, records: Iterable[FeedbackRecord] = ()) -> None:
        self._records: tuple[FeedbackRecord, ...] = tuple(records)
        self._filtered: tuple[FeedbackRecord, ...] = ()
        self._version = 0

    @property
    def records(self) -> tuple[FeedbackRecord, ...]:
        """Return the full, unfiltered collection."""
        return self._records

    @property
    def filtered(self) -> tuple[FeedbackRecord, ...]:
        """Return the result of the most recent filter call."""
        return self._filtered

    @property
    def version(self) -> int:
        """Return a counter that changes on every ``load``."""
        return self._version

    def load(self, records: Iterable[FeedbackRecord]) -> None:
        """Replace the collection and clear the stored filtered result.

        Args:
            records (Iterable[FeedbackRecord]): New collection contents.
        """

        self._records = tuple(records)
        self._filtered = ()
        self._version += 1

    def store_filtered(self, result: Iterable[FeedbackRecord]) -> None:
        self._filtered = tuple(result)

    def total_responses(self) -> int:
        return len(self._records)

    def satisfaction_score(self) -> int:
        """Return the satisfaction score over the entire collection."""
        return self.satisfaction_breakdown().score

    def satisfaction_breakdown(self) -> SatisfactionBreakdown:
        return compute_breakdown(self._records)


def _numeric_score(value: Any) -> float | None:
    # Missing and blank scores compare as 0.
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return float(text)
        except ValueError:
            return None
    return None


__all__ = [
    "DETRACTOR_MAX_SCORE",
    "FeedbackRecord",
    "FeedbackRepository",
    "PROMOTER_MIN_SCORE",
    "SatisfactionBreakdown",
    "classify_score",
    "compute_breakdown",
    "round_half_up",
]
