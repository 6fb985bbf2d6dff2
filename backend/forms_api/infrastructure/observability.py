"""Structured Logging — JSON formatter, env profiles and request-scoped loggers.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (request_id, op, error_code, ...) surfaced when present
    - local → text/DEBUG, dev → JSON/DEBUG, prod and anything unknown → JSON/INFO
    - Request context travels as an explicit LoggerAdapter, never as global state

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan; replaces root handlers
      so repeated startups (tests, reloads) do not duplicate output
"""

import json
import logging
from datetime import datetime, timezone

from forms_api.core.domain_types import Environment

_EXTRA_KEYS = (
    "request_id", "op", "error_code", "schema_id", "field_id", "count",
    "method", "path", "status_code", "duration_ms", "detail",
)

_PROFILES = {
    Environment.LOCAL: ("DEBUG", "text"),
    Environment.DEV: ("DEBUG", "json"),
    Environment.PROD: ("INFO", "json"),
}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def logging_profile(
    env: str, level: str | None = None, fmt: str | None = None,
) -> tuple[str, str]:
    """Resolve (level, format) for env; explicit values win over the profile."""
    default_level, default_fmt = _PROFILES[Environment.parse(env)]
    return (level or default_level).upper(), (fmt or default_fmt).lower()


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
            defaults={"request_id": "-"},
        ))
    logging.root.handlers[:] = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Merges the bound request fields with per-call extra."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def request_logger(
    op: str, request_id: str | None, logger: logging.Logger | None = None,
) -> RequestLoggerAdapter:
    """Logger bound to one operation of one request."""
    return RequestLoggerAdapter(
        logger or logging.getLogger("forms_api.handlers"),
        {"op": op, "request_id": request_id},
    )
