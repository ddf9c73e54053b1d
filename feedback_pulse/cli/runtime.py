"""Runtime wiring for the Feedback Pulse CLI."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from feedback_pulse.core.feedback_repository import FeedbackRepository
from feedback_pulse.core.logging_setup import configure_logging, set_runtime_level
from feedback_pulse.core.orchestrator import Orchestrator
from feedback_pulse.services.config_service import ConfigService
from feedback_pulse.services.feedback_analyzer import FeedbackAnalyzer
from feedback_pulse.services.feedback_service import FeedbackService
from feedback_pulse.workflows.filter_feedback import FilterFeedbackWorkflow
from feedback_pulse.workflows.load_feedback import LoadFeedbackWorkflow
from feedback_pulse.workflows.summarize_feedback import SummarizeFeedbackWorkflow

logger = logging.getLogger(__name__)

_RUNTIME_CACHE: tuple[Orchestrator, FeedbackService] | None = None

_DEFAULT_CONFIG_SERVICE = ConfigService
_DEFAULT_FEEDBACK_REPOSITORY = FeedbackRepository
_DEFAULT_FEEDBACK_ANALYZER = FeedbackAnalyzer
_DEFAULT_FEEDBACK_SERVICE = FeedbackService


def initialize_runtime() -> tuple[Orchestrator, FeedbackService]:
    """Build the feedback service and workflow orchestrator from configuration."""

    config_service_cls = _resolve_dependency("ConfigService", _DEFAULT_CONFIG_SERVICE)
    config_service = config_service_cls()
    logging_config = dict(config_service.logging_config)
    logging_config.setdefault("service", config_service.app_metadata.get("name"))
    configure_logging(logging_config)
    logger.debug("Runtime initialization starting.")

    analyzer_config = config_service.analyzer_config
    zone = analyzer_config.tzinfo()

    repository_cls = _resolve_dependency(
        "FeedbackRepository", _DEFAULT_FEEDBACK_REPOSITORY
    )
    analyzer_cls = _resolve_dependency("FeedbackAnalyzer", _DEFAULT_FEEDBACK_ANALYZER)
    service_cls = _resolve_dependency("FeedbackService", _DEFAULT_FEEDBACK_SERVICE)

    service = service_cls(
        repository=repository_cls(),
        analyzer=analyzer_cls(
            clock=lambda: datetime.now(zone),
            strict_timestamps=analyzer_config.strict_timestamps,
            strict_filters=analyzer_config.strict_filters,
        ),
    )
    orchestrator = build_orchestrator(service)
    logger.debug(
        "Runtime initialized (timezone=%s, strict_timestamps=%s, strict_filters=%s).",
        analyzer_config.timezone,
        analyzer_config.strict_timestamps,
        analyzer_config.strict_filters,
    )
    return orchestrator, service


def build_orchestrator(service: FeedbackService) -> Orchestrator:
    """Register the feedback workflows around ``service``."""

    orchestrator = Orchestrator(collection_version=lambda: service.version)
    orchestrator.register(LoadFeedbackWorkflow(feedback_service=service))
    orchestrator.register(FilterFeedbackWorkflow(feedback_service=service))
    orchestrator.register(SummarizeFeedbackWorkflow(feedback_service=service))
    return orchestrator


def get_runtime() -> tuple[Orchestrator, FeedbackService]:
    """Return the lazily-initialized orchestrator and feedback service."""

    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        _RUNTIME_CACHE = initialize_runtime()
    return _RUNTIME_CACHE


def set_runtime(runtime: tuple[Orchestrator, FeedbackService] | None) -> None:
    """Replace the cached runtime tuple."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = runtime


def get_orchestrator() -> Orchestrator:
    orchestrator, _ = get_runtime()
    return orchestrator


def get_service() -> FeedbackService:
    _, service = get_runtime()
    return service


def _resolve_dependency(name: str, default: Any) -> Any:
    """Return a dependency, preferring overrides on the cli package."""

    from sys import modules

    cli_module = modules.get("feedback_pulse.cli")
    if cli_module is not None and hasattr(cli_module, name):
        return getattr(cli_module, name)
    return default


__all__ = [
    "build_orchestrator",
    "get_orchestrator",
    "get_runtime",
    "get_service",
    "initialize_runtime",
    "set_runtime",
    "set_runtime_level",
]
