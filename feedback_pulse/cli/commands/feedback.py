"""Feedback commands for the Feedback Pulse CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer

from feedback_pulse.cli.io import console
from feedback_pulse.cli.renderers import render_feedback_table, render_summary
from feedback_pulse.cli.reporting import build_report_payload, render_report_markdown
from feedback_pulse.cli.utils import apply_log_override, parse_day
from feedback_pulse.core.errors import FeedbackError

logger = logging.getLogger(__name__)


def _cli() -> Any:
    return sys.modules["feedback_pulse.cli"]


def _execute(workflow: str, context: dict[str, Any]) -> dict[str, Any]:
    orchestrator = _cli().get_orchestrator()
    try:
        return orchestrator.execute(workflow, context)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"File not found: {exc.filename or exc}") from exc
    except FeedbackError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _filter_context(
    period: str,
    role: Optional[List[str]],
    score: Optional[List[int]],
    start: Optional[str],
    end: Optional[str],
    strict: bool,
) -> dict[str, Any]:
    return {
        "period": period,
        "roles": role or [],
        "scores": score or [],
        "range_start": parse_day("--start", start),
        "range_end": parse_day("--end", end),
        "strict": strict,
    }


DATA_FILE_ARGUMENT = typer.Argument(..., help="JSON file containing feedback records.")
PERIOD_OPTION = typer.Option(
    "all",
    "--period",
    "-p",
    help="Time window: all, today, week, month, quarter, year or custom.",
)
ROLE_OPTION = typer.Option(
    None, "--role", "-r", help="Keep only these roles (repeatable)."
)
SCORE_OPTION = typer.Option(
    None, "--score", "-s", help="Keep only these scores (repeatable)."
)
START_OPTION = typer.Option(
    None, "--start", help="Custom period start day (YYYY-MM-DD)."
)
END_OPTION = typer.Option(None, "--end", help="Custom period end day (YYYY-MM-DD).")
STRICT_OPTION = typer.Option(
    False,
    "--strict",
    help="Reject unknown periods and incomplete custom ranges instead of ignoring them.",
)
LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Override logging level for this invocation (e.g., DEBUG, INFO).",
)


def summary(
    data_file: Path = DATA_FILE_ARGUMENT,
    raw: bool = typer.Option(False, "--raw", help="Emit raw JSON."),
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """Show response totals and the satisfaction score."""

    apply_log_override(log_level)
    _execute("load_feedback", {"path": data_file})
    metrics = _execute("summarize_feedback", {})
    metrics.pop("filtered_count", None)

    if raw:
        console.print_json(data=metrics)
        return
    render_summary(metrics)


def filter_feedback(
    data_file: Path = DATA_FILE_ARGUMENT,
    period: str = PERIOD_OPTION,
    role: Optional[List[str]] = ROLE_OPTION,
    score: Optional[List[int]] = SCORE_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    strict: bool = STRICT_OPTION,
    raw: bool = typer.Option(False, "--raw", help="Emit raw JSON."),
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """List the feedback records matching the given filters."""

    apply_log_override(log_level)
    context = _filter_context(period, role, score, start, end, strict)
    _execute("load_feedback", {"path": data_file})
    result = _execute("filter_feedback", context)

    if raw:
        console.print_json(data=result)
        return
    render_feedback_table(
        result["records"], title=f"Feedback ({result['count']} matching)"
    )
    render_summary(_execute("summarize_feedback", {}))


def report(
    data_file: Path = DATA_FILE_ARGUMENT,
    period: str = PERIOD_OPTION,
    role: Optional[List[str]] = ROLE_OPTION,
    score: Optional[List[int]] = SCORE_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    strict: bool = STRICT_OPTION,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the markdown report to this file."
    ),
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """Produce a markdown report of metrics and filtered feedback."""

    apply_log_override(log_level)
    context = _filter_context(period, role, score, start, end, strict)
    _execute("load_feedback", {"path": data_file})
    result = _execute("filter_feedback", context)
    metrics = _execute("summarize_feedback", {})

    markdown = render_report_markdown(
        build_report_payload(metrics, result, source=str(data_file))
    )
    if output is None:
        console.print(markdown, markup=False, highlight=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, encoding="utf-8")
    logger.info("report_written", extra={"path": str(output)})
    console.print(f"[green]Report written to {output}[/]")


__all__ = ["filter_feedback", "report", "summary"]
