"""Configuration loader utilities.

Updates:
    v0.1.0 - 2024-06-10 - Load YAML settings from the project config directory.
    v0.2.0 - 2024-06-14 - Default settings ship inside the package.
"""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any, Dict

import yaml

CONFIG_ENV_VAR = "FEEDBACK_PULSE_CONFIG_PATH"
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


class ConfigLoader:
    """Loads YAML configuration files from the project's config directory."""

    def __init__(self, base_path: Path | None = None) -> None:
        """Configure the loader with the base directory location.

        Args:
            base_path (Path | None): Custom configuration directory if provided.
                Falls back to ``$FEEDBACK_PULSE_CONFIG_PATH`` and then the
                package's bundled ``config`` directory.

        Raises:
            FileNotFoundError: If the resolved configuration path does not exist.
        """

        env_path = os.environ.get(CONFIG_ENV_VAR)
        self._base_path = Path(
            base_path or (Path(env_path) if env_path else DEFAULT_CONFIG_DIR)
        ).resolve()
        if not self._base_path.exists():
            raise FileNotFoundError(f"Config directory not found: {self._base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, name: str) -> Path:
        candidate = self._base_path / name
        if candidate.suffix != ".yaml":
            candidate = candidate.with_suffix(".yaml")
        if not candidate.exists():
            raise FileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    @functools.lru_cache(maxsize=None)
    def load(self, name: str) -> Dict[str, Any]:
        """Load and cache a configuration file as a dictionary.

        Args:
            name (str): Logical configuration name, with or without ``.yaml``.

        Returns:
            dict[str, Any]: Parsed YAML content; an empty file yields ``{}``.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the document is not a mapping.
        """

        path = self._resolve(name)
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data


def load_config(name: str, base_path: Path | None = None) -> Dict[str, Any]:
    """Load a configuration file without explicitly creating a loader."""

    loader = ConfigLoader(base_path=base_path)
    return loader.load(name)
