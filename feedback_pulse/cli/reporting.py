"""Utilities for assembling CLI reports."""

from __future__ import annotations

from typing import Any, Dict, Optional


def build_report_payload(
    summary: Dict[str, Any],
    filter_result: Dict[str, Any],
    *,
    source: Optional[str] = None,
) -> Dict[str, Any]:
    """Combine metrics and a filter result into a report payload."""

    return {
        "source": source,
        "summary": summary,
        "filter": filter_result.get("filter") or {},
        "records": filter_result.get("records") or [],
    }


def render_report_markdown(payload: Dict[str, Any]) -> str:
    """Render a markdown report from report payload."""

    sections: list[str] = []
    source = payload.get("source") or "N/A"
    sections.append(f"# Customer Feedback Report\n\n**Source:** {source}")

    summary_body = _render_summary(payload.get("summary") or {})
    if summary_body:
        sections.append(summary_body)

    sections.append(_render_filter(payload.get("filter") or {}))
    sections.append(_render_records(payload.get("records") or []))
    return "\n\n".join(sections) + "\n"


def _render_summary(summary: Dict[str, Any]) -> Optional[str]:
    if not summary:
        return None
    breakdown = summary.get("breakdown") or {}
    md = [
        "## Summary",
        f"- Total responses: {summary.get('total_responses', 0)}",
        f"- Satisfaction score: {summary.get('satisfaction_score', 0)}",
        f"- Promoters: {breakdown.get('promoters', 0)}",
        f"- Passives: {breakdown.get('passives', 0)}",
        f"- Detractors: {breakdown.get('detractors', 0)}",
    ]
    return "\n".join(md)


def _render_filter(criteria: Dict[str, Any]) -> str:
    md = ["## Filters", f"- Period: {criteria.get('period', 'all')}"]
    roles = criteria.get("roles") or []
    md.append(f"- Roles: {', '.join(roles) if roles else 'any'}")
    scores = criteria.get("scores") or []
    md.append(f"- Scores: {', '.join(str(s) for s in scores) if scores else 'any'}")
    if criteria.get("range_start") or criteria.get("range_end"):
        md.append(
            f"- Range: {criteria.get('range_start') or '?'} to {criteria.get('range_end') or '?'}"
        )
    return "\n".join(md)


def _render_records(records: list[Dict[str, Any]]) -> str:
    md = [f"## Responses ({len(records)})"]
    if not records:
        md.append("\nNo feedback matches the current filters.")
        return "\n".join(md)
    md.append("")
    md.append("| Created | User | Company | Role | Score | Reason |")
    md.append("| --- | --- | --- | --- | ---: | --- |")
    for record in records:
        cells = [
            record.get("created_at", ""),
            record.get("user_id", ""),
            record.get("company_id", ""),
            record.get("role", ""),
            record.get("score", ""),
            record.get("reason", ""),
        ]
        md.append("| " + " | ".join(_escape_cell(cell) for cell in cells) + " |")
    return "\n".join(md)


def _escape_cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


__all__ = ["build_report_payload", "render_report_markdown"]
