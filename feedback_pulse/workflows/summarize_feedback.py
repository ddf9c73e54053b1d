"""Feedback metrics workflow.

Updates:
    v0.1.0 - 2024-06-10 - Report totals and satisfaction score.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.feedback_service import FeedbackService


@dataclass
class SummarizeFeedbackWorkflow:
    feedback_service: FeedbackService
    name: str = "summarize_feedback"

    def run(self, context: dict) -> dict:
        """Return metrics computed over the full collection."""

        return self.feedback_service.summary()
