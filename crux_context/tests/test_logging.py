"""Structured logging helpers and pipeline events."""

from __future__ import annotations

import json
import logging

from crux_context.base.context import trim_conversation
from crux_context.base.log_support import JsonFormatter
from crux_context.base.logging import LogContext, configure_logger, get_logger, log_event


def _events(err: str):
    out = []
    for line in err.strip().splitlines():
        try:
            out.append(json.loads(line))
        except ValueError:
            continue
    return out


def test_get_logger_namespaces_under_context():
    assert get_logger("trimmer").name == "context.trimmer"
    assert get_logger("context.trimmer").name == "context.trimmer"
    assert get_logger().name == "context"


def test_log_event_emits_json_and_drops_none(capsys):
    logger = get_logger("test.events")
    log_event(logger, "unit.event", LogContext(provider="p", model="m"), count=2, missing=None)
    (event,) = _events(capsys.readouterr().err)
    assert event["event"] == "unit.event"
    assert event["provider"] == "p"
    assert event["count"] == 2
    assert "missing" not in event
    assert event["level"] == "INFO"


def test_env_level_suppresses_info(monkeypatch, capsys):
    monkeypatch.setenv("CONTEXT_LOG_LEVEL", "ERROR")
    logger = get_logger("test.level")
    log_event(logger, "quiet.event")
    assert capsys.readouterr().err == ""
    log_event(logger, "loud.event", level=logging.ERROR)
    (event,) = _events(capsys.readouterr().err)
    assert event["event"] == "loud.event"


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "context.log"
    child = get_logger("test.file")
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(child, "file.event", level=logging.DEBUG)
        for handler in logger.handlers:
            handler.flush()
        assert "file.event" in path.read_text(encoding="utf-8")
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def test_json_formatter_hoists_payload():
    record = logging.LogRecord("context.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    data = json.loads(JsonFormatter().format(record))
    assert data["event"] == "e"
    assert data["n"] == 1
    assert data["logger"] == "context.x"


def test_trimmer_reports_its_passes(long_conversation, trim_options, capsys):
    get_logger("test.capture")  # bind the handler to the captured stderr
    trim_conversation(long_conversation, 200, trim_options)
    names = [e.get("event") for e in _events(capsys.readouterr().err)]
    assert "trim.placeholder_pass" in names
    assert "trim.removal_pass" in names


def test_log_context_bind_extends_payload():
    ctx = LogContext(provider="openai", estimator="exact").bind(max_input_tokens=8000, skipped=None)
    assert ctx.to_dict() == {"provider": "openai", "estimator": "exact", "max_input_tokens": 8000}
    assert LogContext().to_dict() == {}
