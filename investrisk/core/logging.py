"""Structured logging with request ID tracking and risk pipeline context.

Pipeline code passes its identifiers as ``extra`` so they come out as
fields rather than being buried in the message:

    logger.info(
        "Score stored",
        extra={"investment_id": investment_id, "score": 12, "fallback": False},
    )

Only the keys in ``CONTEXT_FIELDS`` are emitted.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import settings


request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Record attributes promoted to structured fields, in output order
CONTEXT_FIELDS = (
    "investment_id",
    "risk_indicators_id",
    "asset_type",
    "asset_code",
    "data_points",
    "returns_count",
    "computed",
    "score",
    "risk_category",
    "fallback",
    "error_code",
    "upstream_status",
    "status",
    "profile",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


def context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Pipeline context attached to a record through ``extra``."""
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        log_data.update(context_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if settings.debug:
            log_data["location"] = f"{record.filename}:{record.lineno}"

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text for local development, context as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        request_id = request_id_var.get()
        rid = f"[{request_id[:8]}] " if request_id else ""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} {record.levelname:8} {rid}{record.name}: {record.getMessage()}"

        fields = context_fields(record)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class SensitiveDataFilter(logging.Filter):
    """Redact credentials and bearer tokens in log messages."""

    SENSITIVE_KEYS = ("api_key", "openai_api_key", "auth_secret", "authorization", "token")
    _BEARER = re.compile(r"(bearer\s+)[A-Za-z0-9._\-]+", re.IGNORECASE)

    def filter(self, record: logging.LogRecord) -> bool:
        text = str(record.msg)
        lowered = text.lower()
        if "bearer" in lowered:
            text = self._BEARER.sub(r"\1[REDACTED]", text)
        for key in self.SENSITIVE_KEYS:
            if key in lowered:
                text = re.sub(
                    rf"""(['"]?{key}['"]?\s*[=:]\s*)[^\s,}}\]]+""",
                    r"\1[REDACTED]",
                    text,
                    flags=re.IGNORECASE,
                )
        record.msg = text
        return True


def setup_logging() -> None:
    """Install the stdout handler on the root logger."""
    level = getattr(logging, settings.log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter() if settings.log_format == "json" else TextFormatter())
    handler.addFilter(SensitiveDataFilter())
    root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "httpx", "httpcore", "openai", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``investrisk`` namespace."""
    return logging.getLogger(f"investrisk.{name}")
