"""Feedback Pulse CLI package."""

from __future__ import annotations

import logging

import typer

from feedback_pulse.cli.commands.feedback import filter_feedback, report, summary
from feedback_pulse.cli.io import console
from feedback_pulse.cli.renderers import render_feedback_table, render_summary
from feedback_pulse.cli.runtime import (
    build_orchestrator,
    get_orchestrator,
    get_runtime,
    get_service,
    initialize_runtime,
    set_runtime,
    set_runtime_level,
)
from feedback_pulse.cli.utils import apply_log_override
from feedback_pulse.core.feedback_repository import FeedbackRepository
from feedback_pulse.core.logging_setup import configure_logging
from feedback_pulse.core.orchestrator import Orchestrator
from feedback_pulse.services.config_service import ConfigService
from feedback_pulse.services.feedback_analyzer import FeedbackAnalyzer
from feedback_pulse.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False, help="Summarize and filter customer feedback."
)

app.command("summary")(summary)
app.command("filter")(filter_feedback)
app.command("report")(report)


def main() -> None:
    """CLI entry point."""

    app()


__all__: list[str] = [
    # Typer app / entrypoint
    "app",
    "main",
    # Console & logging
    "console",
    "logger",
    "configure_logging",
    "apply_log_override",
    "set_runtime_level",
    # Runtime
    "build_orchestrator",
    "get_orchestrator",
    "get_runtime",
    "get_service",
    "initialize_runtime",
    "set_runtime",
    # Commands
    "filter_feedback",
    "report",
    "summary",
    # Renderers
    "render_feedback_table",
    "render_summary",
    # Classes re-exported so tests can substitute them
    "ConfigService",
    "FeedbackAnalyzer",
    "FeedbackRepository",
    "FeedbackService",
    "Orchestrator",
]
