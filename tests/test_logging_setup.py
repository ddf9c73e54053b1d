from __future__ import annotations

import json
import logging
from datetime import date
from io import StringIO

import pytest

from feedback_pulse.core import logging_setup


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_includes_extra_fields() -> None:
    formatter = logging_setup.JsonFormatter(service="feedback-pulse")
    record = _record()
    record.workflow = "filter_feedback"
    record.day = date(2024, 1, 10)
    record.roles = frozenset({"admin"})

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "hello"
    assert payload["service"] == "feedback-pulse"
    assert payload["workflow"] == "filter_feedback"
    assert payload["day"] == "2024-01-10"
    assert payload["roles"] == ["admin"]
    assert "lineno" not in payload


def test_configure_logging_sets_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    stream = StringIO()

    class StubStreamHandler(logging.StreamHandler):
        def __init__(self) -> None:
            super().__init__(stream=stream)

    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(logging_setup, "_configured", False, raising=False)
    monkeypatch.setattr(logging_setup, "_handler", None, raising=False)
    monkeypatch.setattr(logging, "StreamHandler", StubStreamHandler)

    logging_setup.configure_logging({"level": "DEBUG"})

    logging.getLogger("sample").debug("test", extra={"record_count": 3})

    payload = json.loads(stream.getvalue().strip())
    assert payload["record_count"] == 3
    assert logging_setup._handler is not None


def test_set_runtime_level_updates_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = logging.StreamHandler(stream=StringIO())
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(logging_setup, "_handler", handler, raising=False)

    logging_setup.set_runtime_level("WARNING")
    assert handler.level == logging.WARNING
    assert root.level == logging.WARNING

    with pytest.raises(ValueError):
        logging_setup.set_runtime_level("not-a-level")
