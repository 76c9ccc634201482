import io
import json
import logging

import pytest

pytestmark = [pytest.mark.unit]


def make_test_logger(service: str) -> tuple[logging.Logger, io.StringIO]:
    """Create a logger with JsonFormatter that writes to a StringIO buffer."""
    from services.shared.logging import JsonFormatter

    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(JsonFormatter(service))
    logger = logging.getLogger(f"test_{service}_{id(buf)}")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, buf


def get_log_line(buf: io.StringIO) -> dict:
    """Parse the last JSON log line from buffer."""
    buf.seek(0)
    lines = [line.strip() for line in buf.readlines() if line.strip()]
    return json.loads(lines[-1])


def test_json_formatter_produces_valid_json():
    logger, buf = make_test_logger("relay")
    logger.info("bookmark_relayed")
    line = get_log_line(buf)
    assert line["msg"] == "bookmark_relayed"
    assert line["level"] == "INFO"
    assert line["service"] == "relay"
    assert line["ts"].endswith("Z")


def test_json_formatter_includes_extra_fields():
    logger, buf = make_test_logger("relay")
    logger.info("bookmark_relayed", extra={"url": "https://example.com", "tags": ["a"]})
    line = get_log_line(buf)
    assert line["url"] == "https://example.com"
    assert line["tags"] == ["a"]
    assert "pathname" not in line


def test_json_formatter_carries_trace_id():
    from services.shared.logging import trace_id_var

    logger, buf = make_test_logger("relay")
    token = trace_id_var.set("trace-abc")
    try:
        logger.warning("webhook_rejected")
    finally:
        trace_id_var.reset(token)
    assert get_log_line(buf)["trace_id"] == "trace-abc"


def test_log_exception_includes_cause():
    from services.linkding_relay.errors import DeliveryError
    from services.shared.logging import log_exception

    logger, buf = make_test_logger("relay")
    try:
        try:
            raise ConnectionError("refused")
        except ConnectionError as exc:
            raise DeliveryError(None, "ConnectError: refused") from exc
    except DeliveryError as exc:
        log_exception(logger, "webhook_relay_failed", exc, context={"path": "/webhook/linkding"})
    line = get_log_line(buf)
    assert line["level"] == "ERROR"
    assert line["error_type"] == "DeliveryError"
    assert line["cause_type"] == "ConnectionError"
    assert line["path"] == "/webhook/linkding"


def test_log_event_helper():
    from services.shared.logging import log_event

    logger, buf = make_test_logger("relay")
    log_event(logger, "relay_started", level="WARNING", port=3000)
    line = get_log_line(buf)
    assert line["level"] == "WARNING"
    assert line["port"] == 3000


def test_configure_logging_installs_json_handler(monkeypatch):
    from services.shared.logging import JsonFormatter, configure_logging

    monkeypatch.delenv("SERVICE_NAME", raising=False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("linkding-relay", "debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.handlers[0].formatter.service == "linkding-relay"
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_uses_given_values_over_environment(monkeypatch):
    from services.shared.logging import configure_logging

    monkeypatch.setenv("SERVICE_NAME", "from-env")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("linkding-relay", "warning")
        assert root.level == logging.WARNING
        assert root.handlers[0].formatter.service == "linkding-relay"
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
