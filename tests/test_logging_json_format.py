from __future__ import annotations

import io
import json
import logging

from salesguard.core.logging.context import get_log_context, log_context
from salesguard.core.logging.json_formatter import JSONFormatter


def _capture_logger(name: str) -> tuple[logging.Logger, io.StringIO]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger(name)
    logger.handlers = []
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(handler)
    return logger, stream


def test_logging_json_line_with_context() -> None:
    logger, stream = _capture_logger("salesguard.test.json")

    with log_context(correlation_id="c1", conversation_id="conv-1", flow="combat"):
        logger.info("hello", extra={"extra_fields": {"duration_ms": 12}})

    payload = json.loads(stream.getvalue().strip())
    assert payload["msg"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "salesguard.test.json"
    assert payload["correlation_id"] == "c1"
    assert payload["conversation_id"] == "conv-1"
    assert payload["flow"] == "combat"
    assert payload["duration_ms"] == 12
    assert "ts_iso_utc" in payload


def test_nested_context_keeps_outer_values() -> None:
    with log_context(correlation_id="outer"):
        with log_context(flow="review"):
            assert get_log_context() == {"correlation_id": "outer", "flow": "review"}
        assert get_log_context() == {"correlation_id": "outer"}
    assert get_log_context() == {}


def test_bearer_tokens_are_redacted() -> None:
    logger, stream = _capture_logger("salesguard.test.redact")

    logger.info("sent Authorization: Bearer abc123")

    payload = json.loads(stream.getvalue().strip())
    assert "abc123" not in payload["msg"]
