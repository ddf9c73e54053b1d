"""Utility helpers shared across CLI command modules."""

from __future__ import annotations

import logging
import sys
from datetime import date
from typing import Optional

import typer

logger = logging.getLogger(__name__)


def _cli():
    return sys.modules["feedback_pulse.cli"]


def apply_log_override(log_level: Optional[str]) -> None:
    """Override logging level for the current invocation.

    The runtime is built first so configuring logging from ``settings.yaml``
    cannot reset the requested level afterwards.
    """

    if not log_level or not isinstance(log_level, str):
        return
    cli = _cli()
    cli.get_runtime()
    try:
        cli.set_runtime_level(log_level)
        logger.info("Log level overridden to %s", log_level.upper())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_day(label: str, value: Optional[str]) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` option value."""

    if value is None:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date for {label}: {value}") from exc


__all__ = ["apply_log_override", "parse_day"]
