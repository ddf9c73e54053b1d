"""Rich renderers for CLI outputs."""

from __future__ import annotations

from typing import Any

from rich.panel import Panel
from rich.table import Table

from feedback_pulse.cli.io import console


def render_summary(summary: dict[str, Any]) -> None:
    """Display response totals and the satisfaction score."""

    breakdown = summary.get("breakdown") or {}
    score = summary.get("satisfaction_score", 0)
    style = "green" if score > 0 else "red" if score < 0 else "yellow"

    lines = [
        f"[bold]Total responses:[/] {summary.get('total_responses', 0)}",
        f"[bold]Satisfaction score:[/] [{style}]{score}[/]",
        (
            f"Promoters: {breakdown.get('promoters', 0)}  "
            f"Passives: {breakdown.get('passives', 0)}  "
            f"Detractors: {breakdown.get('detractors', 0)}"
        ),
    ]
    filtered_count = summary.get("filtered_count")
    if filtered_count is not None:
        lines.append(f"[bold]Filtered responses:[/] {filtered_count}")

    console.print(Panel("\n".join(lines), title="Feedback Summary"))


def render_feedback_table(records: list[dict[str, Any]], *, title: str = "Feedback") -> None:
    """Render feedback records as a table."""

    if not records:
        console.print(Panel("No feedback matches the current filters.", title=title))
        return

    table = Table(title=title, show_lines=False)
    table.add_column("Created", style="bold")
    table.add_column("User")
    table.add_column("Company")
    table.add_column("Role")
    table.add_column("Score", justify="right")
    table.add_column("Reason", overflow="fold")

    for record in records:
        table.add_row(
            str(record.get("created_at", "")),
            str(record.get("user_id", "")),
            str(record.get("company_id", "")),
            str(record.get("role", "")),
            str(record.get("score", "")),
            str(record.get("reason", "")),
        )

    console.print(table)


__all__ = ["render_feedback_table", "render_summary"]
