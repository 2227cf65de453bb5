"""
Structured logging for the momentum pipeline.

- JSON lines in production, one pretty line per record in development.
- request_id travels in a ContextVar so domain logs emitted deep inside the
  aggregator still correlate with the HTTP request that caused them.
- log_event() is the single entry point for pipeline events
  (momentum.domain_computed, momentum.domain_skipped, ...).
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Optional

LOGGER_NAME = "upraze"

request_id_ctx_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# (upper bound in ms, label); the last bucket is open-ended
LATENCY_BUCKETS = (
    (10, "<10ms"),
    (100, "10-100ms"),
    (500, "100-500ms"),
    (1000, "500-1000ms"),
)

# Pipeline fields copied from the record into structured output
CONTEXT_FIELDS = ("domain", "event_type", "phase", "score", "samples", "error_code", "status", "path")


def get_request_id(default: Optional[str] = None) -> Optional[str]:
    rid = request_id_ctx_var.get()
    return rid if rid is not None else default


def latency_bucket_ms(latency_ms: Optional[float]) -> str:
    if latency_ms is None:
        return "unknown"
    for bound, label in LATENCY_BUCKETS:
        if latency_ms < bound:
            return label
    return ">=1000ms"


def _utc_timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z")


def _context_fields(record: logging.LogRecord) -> Dict[str, object]:
    fields = {}
    for key in CONTEXT_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            fields[key] = value
    return fields


class RequestIdFilter(logging.Filter):
    """Fill in request_id from context when the caller did not pass one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": _utc_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(_context_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class PrettyFormatter(logging.Formatter):
    """`<ts> LEVEL [upraze] [rid=..] [domain=..] message`"""

    def format(self, record: logging.LogRecord) -> str:
        parts = [_utc_timestamp(record), record.levelname, f"[{LOGGER_NAME}]"]
        rid = getattr(record, "request_id", None)
        if rid:
            parts.append(f"[rid={rid}]")
        domain = getattr(record, "domain", None)
        if domain:
            parts.append(f"[domain={domain}]")
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(env: str = "development", level: str = "INFO") -> None:
    """Install one stdout handler on the upraze logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if env.lower() == "production" else PrettyFormatter())
    handler.addFilter(RequestIdFilter())

    logger.handlers = [handler]
    # Keep propagation so pytest's caplog sees pipeline events
    logger.propagate = True

    logging.getLogger("uvicorn").propagate = False
    logging.getLogger("uvicorn.error").propagate = False


def _safe_truncate(value, limit: int = 500) -> str:
    try:
        text = str(value)
    except Exception:
        return "<unserializable>"
    if len(text) <= limit:
        return text
    return text[:limit] + "...<truncated>"


def log_event(
    level: str,
    msg: str,
    *,
    request_id: Optional[str] = None,
    domain: Optional[str] = None,
    event_type: Optional[str] = None,
    error_code: Optional[str] = None,
    extra: Optional[Dict[str, object]] = None,
):
    """Emit a pipeline event; extra values are stringified and truncated."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        configure_logging(os.getenv("ENV", "development"), os.getenv("LOG_LEVEL", "INFO"))

    fields: Dict[str, object] = {"request_id": request_id or get_request_id(), "domain": domain}
    if event_type:
        fields["event_type"] = event_type
    if error_code:
        fields["error_code"] = error_code
    for key, value in (extra or {}).items():
        fields[key] = _safe_truncate(value)

    getattr(logger, level, logger.info)(msg, extra=fields)
