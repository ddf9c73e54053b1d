"""Feedback loading workflow.

Updates:
    v0.1.0 - 2024-06-10 - Load records from a JSON file or an inline payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..services.data_loader import load_feedback_file, parse_feedback_payload
from ..services.feedback_service import FeedbackService


@dataclass
class LoadFeedbackWorkflow:
    feedback_service: FeedbackService
    loader: Callable = load_feedback_file
    name: str = "load_feedback"

    def run(self, context: dict) -> dict:
        """Replace the service's collection with new records.

        Args:
            context (dict): Either ``path`` to a JSON dataset or ``records``
                holding already decoded record objects.

        Returns:
            dict: Number of records now loaded.
        """

        if "records" in context:
            records = parse_feedback_payload(context["records"])
        else:
            records = self.loader(context["path"])
        self.feedback_service.load(records)
        return {"record_count": self.feedback_service.total_responses()}
