"""Standardized JSON logging for the relay service."""
from __future__ import annotations

import json
import logging
import time
from contextvars import ContextVar
from typing import Any, Optional

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        log: dict[str, Any] = {
            "ts": f"{ts}.{int(record.msecs):03d}Z",
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "msg": record.getMessage(),
            "trace_id": trace_id_var.get(""),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                log[key] = value

        if record.exc_info:
            log["exc"] = self.formatException(record.exc_info)

        return json.dumps(log, default=str, ensure_ascii=False)


def configure_logging(service: str, level: str = "INFO") -> None:
    """Call once at service startup to configure JSON logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(service))
    root.addHandler(handler)
    root.setLevel(log_level)

    # uvicorn ships its own handlers; route its records through ours instead.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True
    logging.getLogger("uvicorn.access").disabled = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_event(logger: logging.Logger, msg: str, level: str = "INFO", **context) -> None:
    """Log a structured event with arbitrary context fields."""
    log_method = getattr(logger, level.lower(), logger.info)
    log_method(msg, extra=context)


def log_exception(
    logger: logging.Logger,
    message: str,
    exception: BaseException,
    context: Optional[dict] = None,
) -> None:
    """Log an exception as structured fields, including its direct cause if any."""
    extra = {"error_type": type(exception).__name__, "error": str(exception)}
    cause = exception.__cause__
    if cause is not None:
        extra["cause_type"] = type(cause).__name__
        extra["cause"] = str(cause)
    if context:
        extra.update(context)
    logger.error(message, extra=extra, exc_info=False)
