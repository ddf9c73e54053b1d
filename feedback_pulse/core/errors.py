"""Exception hierarchy for Feedback Pulse.

Updates:
    v0.1.0 - 2024-06-10 - Added error types for timestamps, filters and data files.
"""

from __future__ import annotations

from typing import Any


class FeedbackError(Exception):
    """Base exception for all Feedback Pulse errors."""


class MalformedTimestamp(FeedbackError, ValueError):
    """A record's ``created_at`` value could not be parsed."""

    def __init__(self, value: Any, *, record: Any = None) -> None:
        self.value = value
        self.record = record
        super().__init__(f"Unparseable created_at timestamp: {value!r}")


class InvalidFilterSpec(FeedbackError, ValueError):
    """A filter request was rejected by strict validation."""


class FeedbackDataError(FeedbackError, ValueError):
    """A feedback data file does not have the expected shape."""


__all__ = [
    "FeedbackDataError",
    "FeedbackError",
    "InvalidFilterSpec",
    "MalformedTimestamp",
]
