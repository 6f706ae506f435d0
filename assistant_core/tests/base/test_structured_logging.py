"""JSON logging helpers and the formatter."""

from __future__ import annotations

import io
import json
import logging
from typing import Iterator

import pytest

from assistant_core.base.log_support import JsonFormatter
from assistant_core.base.logging import (
    BASE_LOGGER_NAME,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


@pytest.fixture()
def captured() -> Iterator[io.StringIO]:
    """Attach a JSON handler to the shared logger (it does not propagate)."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    base = get_logger(BASE_LOGGER_NAME)
    previous_level = base.level
    base.setLevel(logging.DEBUG)
    base.addHandler(handler)
    try:
        yield stream
    finally:
        base.removeHandler(handler)
        base.setLevel(previous_level)


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def test_get_logger_prefixes_names():
    assert get_logger("registry").name == "assistant.registry"
    assert get_logger("assistant.orchestrator").name == "assistant.orchestrator"
    assert get_logger(BASE_LOGGER_NAME).propagate is False


def test_log_event_hoists_fields_and_drops_none(captured):
    log_event(get_logger("test"), "registry.register", LogContext(provider="smart-qa"), enabled=True, note=None)
    (line,) = _lines(captured)
    assert line["event"] == "registry.register"
    assert line["provider"] == "smart-qa"
    assert line["enabled"] is True
    assert "note" not in line
    assert line["level"] == "INFO"
    assert line["logger"] == "assistant.test"


def test_normalized_event_always_has_canonical_keys(captured):
    ctx = LogContext(provider="a", request_id="r1", kind="qa", extra={"model": "m"})
    normalized_log_event(get_logger("test"), "dispatch.attempt", ctx, phase="start", attempt=None, phase_extra="x")
    (line,) = _lines(captured)
    assert line["structured"] is True
    assert line["phase"] == "start"
    assert line["attempt"] is None
    assert "error_code" not in line
    assert (line["request_id"], line["kind"], line["model"]) == ("r1", "qa", "m")


def test_extra_fields_cannot_override_canonical_keys(captured):
    normalized_log_event(get_logger("test"), "x", phase="failure", attempt=2, error_code="timeout", structured="no")
    (line,) = _lines(captured)
    assert line["structured"] is True
    assert line["error_code"] == "timeout"


def test_exception_is_attached(captured):
    try:
        raise RuntimeError("kaput")
    except RuntimeError as exc:
        log_event(get_logger("test"), "dispatch.provider_error", level=logging.ERROR, exc_info=exc)
    (line,) = _lines(captured)
    assert "RuntimeError: kaput" in line["exc"]


def test_formatter_keeps_plain_messages():
    record = logging.LogRecord("assistant.x", logging.WARNING, __file__, 1, "plain %s", ("text",), None)
    line = json.loads(JsonFormatter().format(record))
    assert line["msg"] == "plain text"
    assert line["level"] == "WARNING"


def test_configure_logger_adds_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "assistant.log"
    base = get_logger(BASE_LOGGER_NAME)
    previous_level = base.level
    try:
        configure_logger(level="INFO", file_path=str(path))
        log_event(get_logger("test"), "file.event")
        for handler in base.handlers:
            handler.flush()
        assert json.loads(path.read_text(encoding="utf-8").splitlines()[-1])["event"] == "file.event"
    finally:
        configure_logger(file_path=None)
        base.setLevel(previous_level)
    assert not any(getattr(h, "baseFilename", None) for h in base.handlers)
