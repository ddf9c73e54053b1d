"""Shared console for the Feedback Pulse CLI."""

from __future__ import annotations

from rich.console import Console

# Scores and user ids are printed verbatim; automatic number highlighting off.
console = Console(highlight=False)

__all__ = ["console"]
