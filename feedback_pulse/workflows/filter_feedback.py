"""Feedback filtering workflow.

Updates:
    v0.1.0 - 2024-06-10 - Added filter dispatch with serialized results.
    v0.2.0 - 2024-06-12 - Optional strict validation per request.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.feedback_analyzer import FilterSpec, validate_filter_spec
from ..services.feedback_service import FeedbackService


@dataclass
class FilterFeedbackWorkflow:
    feedback_service: FeedbackService
    name: str = "filter_feedback"

    def run(self, context: dict) -> dict:
        """Filter the loaded collection.

        Args:
            context (dict): ``period``, ``roles``, ``scores``, ``range_start``,
                ``range_end`` and an optional ``strict`` flag.

        Returns:
            dict: Normalized criteria, match count and serialized records.

        Raises:
            InvalidFilterSpec: If ``strict`` is set and the criteria are rejected.
        """

        spec = FilterSpec.build(
            period=context.get("period", "all"),
            roles=context.get("roles") or (),
            scores=context.get("scores") or (),
            range_start=context.get("range_start"),
            range_end=context.get("range_end"),
        )
        if context.get("strict"):
            validate_filter_spec(spec)
        result = self.feedback_service.apply(spec)
        return {
            "filter": spec.describe(),
            "count": len(result),
            "records": [record.to_dict() for record in result],
        }
