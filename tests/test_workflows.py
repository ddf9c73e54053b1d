import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from feedback_pulse.cli.runtime import build_orchestrator
from feedback_pulse.core.errors import InvalidFilterSpec
from feedback_pulse.core.orchestrator import Orchestrator
from tests.helpers.feedback import SAMPLE_PAYLOAD, make_service


@dataclass
class DummyWorkflow:
    name: str = "dummy"

    def run(self, context: dict) -> dict:
        return {"echo": context}


@dataclass
class FailingWorkflow:
    name: str = "failing"

    def run(self, context: dict) -> dict:
        raise RuntimeError("boom")


def test_orchestrator_executes_registered_workflow() -> None:
    orchestrator = Orchestrator()
    orchestrator.register(DummyWorkflow())

    result = orchestrator.execute("dummy", {"value": 42})

    assert result["echo"]["value"] == 42


def test_orchestrator_rejects_unknown_workflow() -> None:
    with pytest.raises(KeyError):
        Orchestrator().execute("missing", {})


def test_orchestrator_logs_and_reraises_failures(caplog: pytest.LogCaptureFixture) -> None:
    orchestrator = Orchestrator(workflows={"failing": FailingWorkflow()})

    with pytest.raises(RuntimeError):
        orchestrator.execute("failing", {})

    assert any(record.getMessage() == "workflow_failed" for record in caplog.records)


def test_feedback_workflows_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "feedback.json"
    path.write_text(json.dumps(SAMPLE_PAYLOAD), encoding="utf-8")
    service = make_service()
    orchestrator = build_orchestrator(service)

    loaded = orchestrator.execute("load_feedback", {"path": path})
    filtered = orchestrator.execute(
        "filter_feedback", {"period": "all", "roles": ["admin"], "scores": []}
    )
    summary = orchestrator.execute("summarize_feedback", {})

    assert loaded == {"record_count": 5}
    assert filtered["count"] == 2
    assert [item["user_id"] for item in filtered["records"]] == ["u-101", "u-104"]
    assert filtered["filter"]["roles"] == ["admin"]
    assert summary["total_responses"] == 5
    assert summary["filtered_count"] == 2


def test_load_workflow_accepts_inline_records() -> None:
    service = make_service()
    orchestrator = build_orchestrator(service)

    orchestrator.execute("load_feedback", {"records": SAMPLE_PAYLOAD[:3]})

    assert service.total_responses() == 3


def test_filter_workflow_strict_mode() -> None:
    orchestrator = build_orchestrator(make_service())

    with pytest.raises(InvalidFilterSpec):
        orchestrator.execute("filter_feedback", {"period": "fortnight", "strict": True})

    result = orchestrator.execute("filter_feedback", {"period": "fortnight"})
    assert result["count"] == 0


def test_orchestrator_logs_collection_version_and_record_count(
    caplog: pytest.LogCaptureFixture,
) -> None:
    service = make_service()
    orchestrator = build_orchestrator(service)

    with caplog.at_level("INFO", logger="feedback_pulse.core.orchestrator"):
        orchestrator.execute("load_feedback", {"records": SAMPLE_PAYLOAD})
        orchestrator.execute("filter_feedback", {"roles": ["admin"]})

    completed = [r for r in caplog.records if r.getMessage() == "workflow_completed"]
    assert [r.workflow for r in completed] == ["load_feedback", "filter_feedback"]
    assert [r.record_count for r in completed] == [5, 2]
    assert all(r.collection_version == 1 for r in completed)
