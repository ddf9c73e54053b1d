"""Workflow orchestration utilities.

Updates:
    v0.1.0 - 2024-06-10 - Named workflow registry with structured duration logging.
    v0.2.0 - 2024-06-14 - Log the collection version and record counts per run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable, Protocol

# Result keys that carry a record count, in the order they are checked.
_COUNT_KEYS = ("record_count", "count", "total_responses")


class Workflow(Protocol):
    """Protocol describing the workflow contract."""

    name: str

    def run(self, context: dict) -> dict:
        """Execute the workflow and return a response."""

        ...


@dataclass(slots=True)
class Orchestrator:
    """Dispatches feedback workflows by name.

    Every run is logged with its duration and, when ``collection_version`` is
    provided, the version of the feedback collection it ran against.
    """

    workflows: dict[str, Workflow] = field(default_factory=dict)
    collection_version: Callable[[], int] | None = None

    _logger = logging.getLogger(__name__)

    def execute(self, workflow_name: str, context: dict) -> dict:
        """Run a registered workflow with the supplied context.

        Args:
            workflow_name (str): Name of the workflow to execute.
            context (dict): Payload passed to the workflow.

        Returns:
            dict: Output produced by the workflow.

        Raises:
            KeyError: If the workflow name is unknown.
        """

        workflow = self.workflows.get(workflow_name)
        if workflow is None:
            raise KeyError(f"Workflow '{workflow_name}' is not registered.")

        started = perf_counter()
        try:
            result = workflow.run(context)
        except Exception as exc:
            self._logger.error(
                "workflow_failed",
                extra=self._run_fields(workflow_name, started, error=str(exc)),
                exc_info=True,
            )
            raise

        self._logger.info(
            "workflow_completed",
            extra=self._run_fields(
                workflow_name, started, record_count=_record_count(result)
            ),
        )
        return result

    def register(self, workflow: Workflow) -> None:
        self.workflows[workflow.name] = workflow

    def _run_fields(
        self, workflow_name: str, started: float, **fields: Any
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "workflow": workflow_name,
            "duration_ms": round((perf_counter() - started) * 1000, 2),
        }
        if self.collection_version is not None:
            payload["collection_version"] = self.collection_version()
        payload.update(fields)
        return payload


def _record_count(result: Any) -> int | None:
    if not isinstance(result, dict):
        return None
    for key in _COUNT_KEYS:
        if isinstance(result.get(key), int):
            return result[key]
    return None
