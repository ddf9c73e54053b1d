"""Configuration service for Feedback Pulse.

Updates:
    v0.1.0 - 2024-06-10 - Expose app, logging and analyzer settings.
    v0.2.0 - 2024-06-12 - Expand environment references in string values.
    v0.3.0 - 2024-06-14 - Built-in defaults when no config directory is installed.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.config_loader import CONFIG_ENV_VAR, ConfigLoader

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "app": {"name": "feedback-pulse"},
    "logging": {"level": "INFO"},
    "analyzer": {
        "strict_timestamps": False,
        "strict_filters": False,
        "timezone": "UTC",
    },
}


@dataclass(slots=True, frozen=True)
class AnalyzerConfig:
    """Filtering policy settings."""

    strict_timestamps: bool = False
    strict_filters: bool = False
    timezone: str = "UTC"

    def tzinfo(self) -> tzinfo:
        """Resolve the configured timezone name.

        Raises:
            ValueError: If the name is not a known IANA timezone.
        """

        if self.timezone.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.timezone}") from exc


class ConfigService:
    """Loads and exposes configuration for Feedback Pulse components."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize configuration caches.

        Args:
            config_path (Path | None): Optional override for the configuration directory.

        Raises:
            FileNotFoundError: If an explicitly requested directory is missing.
        """

        self._settings = self._expand_env_values(self._load_settings(config_path))

    @property
    def app_metadata(self) -> dict[str, Any]:
        """Return general application metadata."""
        return self._section("app")

    @property
    def logging_config(self) -> dict[str, Any]:
        """Return logging configuration settings."""
        return self._section("logging")

    @property
    def analyzer_config(self) -> AnalyzerConfig:
        """Return the filtering policy configured for the analyzer."""

        section = self._section("analyzer")
        return AnalyzerConfig(
            strict_timestamps=_as_bool(section.get("strict_timestamps", False)),
            strict_filters=_as_bool(section.get("strict_filters", False)),
            timezone=str(section.get("timezone") or "UTC"),
        )

    @staticmethod
    def clear_cache() -> None:
        """Clear cached configuration to reflect file updates."""

        ConfigLoader.load.cache_clear()

    @staticmethod
    def _load_settings(config_path: Path | None) -> dict[str, Any]:
        explicit = config_path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
        try:
            loader = ConfigLoader(base_path=config_path)
        except FileNotFoundError as exc:
            if explicit:
                raise
            logger.warning("config_defaults_used", extra={"reason": str(exc)})
            return copy.deepcopy(DEFAULT_SETTINGS)
        return loader.load("settings")

    def _section(self, name: str) -> dict[str, Any]:
        section = self._settings.get(name, {})
        return dict(section) if isinstance(section, dict) else {}

    @staticmethod
    def _expand_env_values(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: ConfigService._expand_env_values(entry)
                for key, entry in value.items()
            }
        if isinstance(value, list):
            return [ConfigService._expand_env_values(item) for item in value]
        if isinstance(value, str):
            return os.path.expandvars(value)
        return value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
