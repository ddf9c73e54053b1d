"""Feedback filtering and summary metrics.

Updates:
    v0.1.0 - 2024-06-10 - Added period, role and score filtering.
    v0.2.0 - 2024-06-12 - Injected clock and strict validation modes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence

from ..core.errors import InvalidFilterSpec, MalformedTimestamp
from ..core.feedback_repository import (
    FeedbackRecord,
    SatisfactionBreakdown,
    compute_breakdown,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Predicate = Callable[[FeedbackRecord], bool]
Bound = date | datetime


class PeriodKind(str, Enum):
    """Named time windows accepted by the period filter."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"


PERIOD_DAYS: dict[str, int] = {
    PeriodKind.TODAY.value: 1,
    PeriodKind.WEEK.value: 7,
    PeriodKind.MONTH.value: 30,
    PeriodKind.QUARTER.value: 90,
    PeriodKind.YEAR.value: 365,
}

KNOWN_PERIODS = frozenset(kind.value for kind in PeriodKind)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class FilterSpec:
    """Criteria for a single filter call."""

    period: str = PeriodKind.ALL.value
    roles: frozenset[str] = frozenset()
    scores: frozenset[Any] = frozenset()
    range_start: Optional[Bound] = None
    range_end: Optional[Bound] = None

    @classmethod
    def build(
        cls,
        period: str | PeriodKind = PeriodKind.ALL,
        roles: Iterable[str] = (),
        scores: Iterable[Any] = (),
        range_start: Bound | str | None = None,
        range_end: Bound | str | None = None,
    ) -> "FilterSpec":
        """Normalize loosely typed arguments into a ``FilterSpec``.

        Args:
            period (str | PeriodKind): Period name; unknown names are kept as-is.
            roles (Iterable[str] | str): Roles to keep; a single string is one
                role and empty keeps every role.
            scores (Iterable[Any]): Scores to keep; empty keeps every score.
            range_start (date | datetime | str | None): Custom range start day.
            range_end (date | datetime | str | None): Custom range end day.

        Returns:
            FilterSpec: Immutable filter criteria.

        Raises:
            InvalidFilterSpec: If a range bound is a string that is not ISO-8601.
        """

        return cls(
            period=_period_name(period),
            roles=_as_set(roles),
            scores=_as_set(scores),
            range_start=_coerce_bound(range_start),
            range_end=_coerce_bound(range_end),
        )

    @property
    def has_custom_range(self) -> bool:
        return self.range_start is not None and self.range_end is not None

    def describe(self) -> dict[str, Any]:
        """Return a JSON-friendly view of the criteria."""

        return {
            "period": self.period,
            "roles": sorted(self.roles),
            "scores": sorted(self.scores, key=str),
            "range_start": self.range_start.isoformat() if self.range_start else None,
            "range_end": self.range_end.isoformat() if self.range_end else None,
        }


def parse_timestamp(value: Any, default_tz: tzinfo | None = None) -> datetime:
    """Parse an ISO-8601 ``created_at`` value.

    Naive values are placed in ``default_tz``. When ``default_tz`` is None,
    aware values are converted to naive local time so they stay comparable.

    Raises:
        MalformedTimestamp: If the value is not a parseable ISO-8601 string.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise MalformedTimestamp(value) from exc
    else:
        raise MalformedTimestamp(value)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=default_tz) if default_tz else parsed
    if default_tz is None:
        return parsed.astimezone().replace(tzinfo=None)
    return parsed


def start_of_day(bound: Bound, default_tz: tzinfo | None = None) -> datetime:
    day, zone = _split_bound(bound, default_tz)
    return datetime.combine(day, time.min, tzinfo=zone)


def end_of_day(bound: Bound, default_tz: tzinfo | None = None) -> datetime:
    day, zone = _split_bound(bound, default_tz)
    return datetime.combine(day, time.max, tzinfo=zone)


def filter_feedback(
    collection: Sequence[FeedbackRecord],
    spec: FilterSpec,
    *,
    now: datetime,
    strict_timestamps: bool = False,
) -> tuple[FeedbackRecord, ...]:
    """Return the records that satisfy every engaged predicate of ``spec``.

    Predicates run in a fixed order (period, role, score) and the result keeps
    the collection's order. The collection itself is never modified.

    Args:
        collection (Sequence[FeedbackRecord]): Records to filter.
        spec (FilterSpec): Filter criteria.
        now (datetime): Reference instant for relative periods.
        strict_timestamps (bool): Raise on unparseable ``created_at`` values
            instead of excluding those records.

    Returns:
        tuple[FeedbackRecord, ...]: Matching records in original order.

    Raises:
        MalformedTimestamp: In strict mode, when a record's timestamp is invalid.
    """

    predicates: list[Predicate] = []
    period_predicate = _period_predicate(spec, now, strict_timestamps)
    if period_predicate is not None:
        predicates.append(period_predicate)
    if spec.roles:
        roles = spec.roles
        predicates.append(lambda record: record.role in roles)
    if spec.scores:
        scores = spec.scores
        predicates.append(lambda record: _score_in(record.score, scores))

    return tuple(
        record
        for record in collection
        if all(predicate(record) for predicate in predicates)
    )


class FeedbackAnalyzer:
    """Filters feedback collections and computes their summary metrics."""

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        strict_timestamps: bool = False,
        strict_filters: bool = False,
    ) -> None:
        """Configure the analyzer.

        Args:
            clock (Clock | None): Source of "now"; defaults to UTC wall time.
            strict_timestamps (bool): Raise ``MalformedTimestamp`` instead of
                excluding records with an unparseable ``created_at``.
            strict_filters (bool): Raise ``InvalidFilterSpec`` for unknown
                periods, incomplete custom ranges and non-integer scores.
        """

        self._clock = clock or utc_now
        self.strict_timestamps = strict_timestamps
        self.strict_filters = strict_filters

    def filter(
        self, collection: Sequence[FeedbackRecord], spec: FilterSpec
    ) -> tuple[FeedbackRecord, ...]:
        """Filter ``collection`` with ``spec``, reading the clock once."""

        if self.strict_filters:
            validate_filter_spec(spec)
        now = self._clock()
        result = filter_feedback(
            collection, spec, now=now, strict_timestamps=self.strict_timestamps
        )
        logger.debug(
            "feedback_filtered",
            extra={
                "period": spec.period,
                "input_count": len(collection),
                "result_count": len(result),
            },
        )
        return result

    def summarize(self, collection: Sequence[FeedbackRecord]) -> SatisfactionBreakdown:
        return compute_breakdown(collection)


def total_responses(collection: Sequence[FeedbackRecord]) -> int:
    return len(collection)


def satisfaction_score(collection: Sequence[FeedbackRecord]) -> int:
    return compute_breakdown(collection).score


def validate_filter_spec(spec: FilterSpec) -> None:
    """Reject criteria that the permissive default would silently ignore.

    Raises:
        InvalidFilterSpec: If the period is unknown, a custom range is missing a
            bound, or a score is not an integer.
    """

    if spec.period not in KNOWN_PERIODS:
        raise InvalidFilterSpec(f"Unknown period: {spec.period!r}")
    if spec.period == PeriodKind.CUSTOM.value and not spec.has_custom_range:
        raise InvalidFilterSpec("Custom period requires both range_start and range_end")
    for score in spec.scores:
        if isinstance(score, bool) or not isinstance(score, int):
            raise InvalidFilterSpec(f"Score filter values must be integers: {score!r}")


def _period_predicate(
    spec: FilterSpec, now: datetime, strict: bool
) -> Predicate | None:
    period = spec.period
    tz = now.tzinfo

    if period == PeriodKind.CUSTOM.value:
        if not spec.has_custom_range:
            return None
        lower = start_of_day(spec.range_start, tz)  # type: ignore[arg-type]
        upper = end_of_day(spec.range_end, tz)  # type: ignore[arg-type]
        return lambda record: _within(record, lower, upper, tz, strict)

    days = PERIOD_DAYS.get(period)
    if days is None:
        return None
    threshold = now - timedelta(days=days)
    return lambda record: _within(record, threshold, None, tz, strict)


def _within(
    record: FeedbackRecord,
    lower: datetime,
    upper: datetime | None,
    tz: tzinfo | None,
    strict: bool,
) -> bool:
    try:
        created = parse_timestamp(record.created_at, tz)
    except MalformedTimestamp as exc:
        if strict:
            exc.record = record
            raise
        logger.debug(
            "timestamp_unparseable",
            extra={"user_id": record.user_id, "created_at": str(record.created_at)},
        )
        return False
    if not _align(created, lower) > lower:
        return False
    return upper is None or _align(created, upper) < upper


def _align(moment: datetime, reference: datetime) -> datetime:
    # Mixed naive/aware comparisons raise TypeError.
    if reference.tzinfo is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    if reference.tzinfo is None and moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def _score_in(score: Any, scores: frozenset[Any]) -> bool:
    try:
        return score in scores
    except TypeError:
        return False


def _split_bound(bound: Bound, default_tz: tzinfo | None) -> tuple[date, tzinfo | None]:
    if isinstance(bound, datetime):
        return bound.date(), bound.tzinfo or default_tz
    return bound, default_tz


def _as_set(values: Iterable[Any] | str) -> frozenset[Any]:
    # A bare string is one value, not a sequence of characters.
    if isinstance(values, str):
        return frozenset((values,))
    return frozenset(values)


def _period_name(period: str | PeriodKind) -> str:
    if isinstance(period, PeriodKind):
        return period.value
    return str(period)


def _coerce_bound(value: Bound | str | None) -> Bound | None:
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidFilterSpec(f"Invalid range bound: {value!r}") from exc


__all__ = [
    "Clock",
    "FeedbackAnalyzer",
    "FilterSpec",
    "KNOWN_PERIODS",
    "PERIOD_DAYS",
    "PeriodKind",
    "end_of_day",
    "filter_feedback",
    "parse_timestamp",
    "satisfaction_score",
    "start_of_day",
    "total_responses",
    "utc_now",
    "validate_filter_spec",
]
