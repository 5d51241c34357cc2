"""Tests for log formatting and service settings."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from pydantic import ValidationError

from investrisk.core.config import DEV_AUTH_SECRET, Settings
from investrisk.core.logging import (
    SensitiveDataFilter,
    StructuredFormatter,
    TextFormatter,
    context_fields,
    request_id_var,
)


def _record(msg: str, extra: dict | None = None, level: int = logging.INFO) -> logging.LogRecord:
    logger = logging.getLogger("investrisk.test")
    return logger.makeRecord(
        logger.name, level, __file__, 10, msg, None, None, extra=extra
    )


class TestContextFields:

    def test_picks_known_extras(self):
        record = _record("x", {"investment_id": "inv-1", "fallback": False, "color": "blue"})
        assert context_fields(record) == {"investment_id": "inv-1", "fallback": False}

    def test_none_is_dropped(self):
        record = _record("x", {"investment_id": None, "risk_indicators_id": 3})
        assert context_fields(record) == {"risk_indicators_id": 3}


class TestStructuredFormatter:

    def test_emits_pipeline_context(self):
        record = _record(
            "Score stored",
            {"investment_id": "inv-1", "risk_indicators_id": 42, "score": 8, "fallback": True},
        )

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "Score stored"
        assert data["level"] == "INFO"
        assert data["logger"] == "investrisk.test"
        assert data["investment_id"] == "inv-1"
        assert data["risk_indicators_id"] == 42
        assert data["score"] == 8
        assert data["fallback"] is True

    def test_includes_request_id(self):
        token = request_id_var.set("req-abc")
        try:
            data = json.loads(StructuredFormatter().format(_record("hello")))
        finally:
            request_id_var.reset(token)

        assert data["request_id"] == "req-abc"

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.getLogger("investrisk.test").makeRecord(
                "investrisk.test", logging.ERROR, __file__, 1, "failed", None,
                exc_info=sys.exc_info(),
            )

        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:

    def test_appends_context(self):
        record = _record("Indicators stored", {"asset_type": "debenture", "computed": False})

        line = TextFormatter().format(record)

        assert "investrisk.test: Indicators stored" in line
        assert line.endswith("| asset_type=debenture computed=False")

    def test_plain_message_without_context(self):
        line = TextFormatter().format(_record("Starting"))
        assert "|" not in line


class TestSensitiveDataFilter:

    def test_redacts_bearer_token(self):
        record = _record("Rejected Authorization: Bearer eyJhbGciOi.abc.def")

        assert SensitiveDataFilter().filter(record) is True
        assert "eyJhbGciOi" not in record.getMessage()
        assert "[REDACTED]" in record.getMessage()

    def test_redacts_key_value(self):
        record = _record("client config openai_api_key=sk-live-123 model=gemini")

        SensitiveDataFilter().filter(record)

        assert "sk-live-123" not in record.getMessage()
        assert "model=gemini" in record.getMessage()

    def test_leaves_plain_messages(self):
        record = _record("Score stored")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "Score stored"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.environment == "development"
        assert settings.is_production is False

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_cors_origins_from_comma_string(self):
        settings = Settings(_env_file=None, cors_origins="https://a.test, https://b.test")
        assert settings.cors_origins == ["https://a.test", "https://b.test"]

    def test_wildcard_cors_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cors_origins=["*"])

    def test_pool_bounds_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, db_pool_min_size=10, db_pool_max_size=5)

    def test_production_requires_private_secret(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="production", auth_secret=DEV_AUTH_SECRET)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="production", auth_secret="x" * 20)

        settings = Settings(_env_file=None, environment="production", auth_secret="s" * 40)
        assert settings.is_production is True
