from __future__ import annotations

from feedback_pulse.cli.reporting import build_report_payload, render_report_markdown


def _payload(records: list[dict]) -> dict:
    summary = {
        "total_responses": 3,
        "satisfaction_score": -33,
        "breakdown": {"promoters": 1, "passives": 0, "detractors": 2},
    }
    filter_result = {
        "filter": {
            "period": "custom",
            "roles": ["admin"],
            "scores": [],
            "range_start": "2024-01-01",
            "range_end": "2024-01-31",
        },
        "records": records,
    }
    return build_report_payload(summary, filter_result, source="feedback.json")


def test_build_report_payload_combines_sections() -> None:
    payload = _payload([{"user_id": "u-1"}])

    assert payload["source"] == "feedback.json"
    assert payload["summary"]["satisfaction_score"] == -33
    assert payload["filter"]["period"] == "custom"
    assert payload["records"] == [{"user_id": "u-1"}]


def test_render_report_markdown_contains_sections() -> None:
    markdown = render_report_markdown(
        _payload(
            [
                {
                    "created_at": "2024-01-10T12:00:00Z",
                    "user_id": "u-1",
                    "company_id": "acme",
                    "role": "admin",
                    "score": 2,
                    "reason": "Export | import broken",
                }
            ]
        )
    )

    assert "# Customer Feedback Report" in markdown
    assert "- Satisfaction score: -33" in markdown
    assert "- Roles: admin" in markdown
    assert "- Scores: any" in markdown
    assert "- Range: 2024-01-01 to 2024-01-31" in markdown
    assert "## Responses (1)" in markdown
    assert "Export \\| import broken" in markdown


def test_render_report_markdown_without_records() -> None:
    markdown = render_report_markdown(build_report_payload({}, {}))

    assert "**Source:** N/A" in markdown
    assert "## Summary" not in markdown
    assert "No feedback matches the current filters." in markdown
