from datetime import timezone
from pathlib import Path

import pytest

from feedback_pulse.core.config_loader import DEFAULT_CONFIG_DIR, ConfigLoader, load_config
from feedback_pulse.services.config_service import AnalyzerConfig, ConfigService


def _write_settings(tmp_path: Path, body: str) -> Path:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.yaml").write_text(body, encoding="utf-8")
    return config_dir


def test_config_service_loads(tmp_path: Path) -> None:
    config_dir = _write_settings(
        tmp_path,
        "app: {name: test, version: '0.0.1'}\n"
        "logging: {level: DEBUG}\n"
        "analyzer: {strict_timestamps: true, timezone: UTC}\n",
    )

    service = ConfigService(config_path=config_dir)

    assert service.app_metadata["name"] == "test"
    assert service.logging_config == {"level": "DEBUG"}
    analyzer = service.analyzer_config
    assert analyzer.strict_timestamps is True
    assert analyzer.strict_filters is False
    assert analyzer.tzinfo() is timezone.utc


def test_config_service_defaults_when_sections_missing(tmp_path: Path) -> None:
    config_dir = _write_settings(tmp_path, "")

    service = ConfigService(config_path=config_dir)

    assert service.app_metadata == {}
    assert service.analyzer_config == AnalyzerConfig()


def test_config_service_expands_env_vars(tmp_path: Path, monkeypatch) -> None:
    config_dir = _write_settings(
        tmp_path,
        'analyzer:\n  strict_filters: "${STRICT_FILTERS}"\n  timezone: "${FEEDBACK_TZ}"\n',
    )
    monkeypatch.setenv("STRICT_FILTERS", "yes")
    monkeypatch.setenv("FEEDBACK_TZ", "utc")
    monkeypatch.setenv("FEEDBACK_PULSE_CONFIG_PATH", str(config_dir))

    analyzer = ConfigService().analyzer_config

    assert analyzer.strict_filters is True
    assert analyzer.timezone == "utc"
    assert analyzer.tzinfo() is timezone.utc


def test_unknown_timezone_raises() -> None:
    with pytest.raises(ValueError):
        AnalyzerConfig(timezone="Mars/Olympus_Mons").tzinfo()


def test_config_loader_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader(base_path=tmp_path / "absent")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_dir = _write_settings(tmp_path, "- just\n- a list\n")

    with pytest.raises(ValueError):
        load_config("settings", base_path=config_dir)


def test_bundled_settings_are_loadable(monkeypatch) -> None:
    monkeypatch.delenv("FEEDBACK_PULSE_CONFIG_PATH", raising=False)

    service = ConfigService()

    assert service.app_metadata["name"] == "feedback-pulse"
    assert service.analyzer_config.strict_timestamps is False


def test_bundled_settings_live_inside_the_package() -> None:
    assert DEFAULT_CONFIG_DIR.parent.name == "feedback_pulse"
    assert (DEFAULT_CONFIG_DIR / "settings.yaml").is_file()


def test_config_service_falls_back_to_defaults_without_config_dir(
    tmp_path: Path, monkeypatch
) -> None:
    monkeypatch.delenv("FEEDBACK_PULSE_CONFIG_PATH", raising=False)
    monkeypatch.setattr(
        "feedback_pulse.core.config_loader.DEFAULT_CONFIG_DIR", tmp_path / "absent"
    )

    service = ConfigService()

    assert service.app_metadata["name"] == "feedback-pulse"
    assert service.logging_config == {"level": "INFO"}
    assert service.analyzer_config == AnalyzerConfig()


def test_explicit_missing_config_dir_still_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigService(config_path=tmp_path / "absent")
