"""
Tests for the logging module.

Tests verify:
- configure_logging builds the JSON or console processor chain
- Unknown levels are rejected
- Service metadata and ECS field renaming
- Context binding helpers
"""

import pytest
import structlog

from featurespine.core.errors import InvalidConfigError
from featurespine.core.logging import (
    LogContext,
    _add_service_metadata,
    _elasticsearch_compatible,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)
from featurespine.core.settings import FeatureSpineSettings


def _processors() -> list:
    return structlog.get_config()["processors"]


class TestConfigureLogging:
    def test_json_renderer(self):
        configure_logging(level="INFO", json_format=True, cache_logger=False)
        assert isinstance(_processors()[-1], structlog.processors.JSONRenderer)
        assert _elasticsearch_compatible in _processors()

    def test_console_renderer(self):
        configure_logging(level="DEBUG", json_format=False, cache_logger=False)
        assert isinstance(_processors()[-1], structlog.dev.ConsoleRenderer)
        assert _elasticsearch_compatible not in _processors()

    def test_timestamp_optional(self):
        configure_logging(json_format=True, add_timestamp=False, cache_logger=False)
        assert not any(isinstance(p, structlog.processors.TimeStamper) for p in _processors())

    def test_level_is_case_insensitive(self):
        configure_logging(level="warning", json_format=True, cache_logger=False)

    def test_unknown_level(self):
        with pytest.raises(InvalidConfigError, match="Unknown log level"):
            configure_logging(level="LOUD")

    def test_cache_logger_flag(self):
        configure_logging(json_format=True, cache_logger=False)
        assert structlog.get_config()["cache_logger_on_first_use"] is False

    def test_from_settings(self):
        settings = FeatureSpineSettings(log_level="ERROR", log_format="json", service_name="flags")
        configure_from_settings(settings)
        assert isinstance(_processors()[-1], structlog.processors.JSONRenderer)

    def test_from_settings_console(self):
        configure_from_settings(FeatureSpineSettings(log_format="console"))
        assert isinstance(_processors()[-1], structlog.dev.ConsoleRenderer)


class TestProcessors:
    def test_service_metadata(self):
        configure_logging(json_format=True, service="flags", cache_logger=False)
        event = _add_service_metadata(None, "info", {"event": "x"})
        assert event["service.name"] == "flags"

    def test_service_metadata_keeps_explicit_value(self):
        event = _add_service_metadata(None, "info", {"service.name": "other"})
        assert event["service.name"] == "other"

    def test_elasticsearch_compatible(self):
        event = _elasticsearch_compatible(
            None, "info", {"timestamp": "t", "level": "info", "event": "x"}
        )
        assert event == {"@timestamp": "t", "log.level": "info", "event": "x"}


class TestContext:
    def test_bind_and_unbind(self):
        bind_context(request_id="r1", user="u1")
        assert structlog.contextvars.get_contextvars() == {"request_id": "r1", "user": "u1"}
        unbind_context("user")
        assert structlog.contextvars.get_contextvars() == {"request_id": "r1"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_scoped(self):
        with LogContext(request_id="r2"):
            assert structlog.contextvars.get_contextvars()["request_id"] == "r2"
        assert "request_id" not in structlog.contextvars.get_contextvars()

    def test_context_reaches_log_events(self):
        capture = structlog.testing.LogCapture()
        structlog.configure(
            processors=[structlog.contextvars.merge_contextvars, capture],
            cache_logger_on_first_use=False,
        )
        logger = get_logger("featurespine.test")
        with LogContext(request_id="r3"):
            logger.info("request.started")
        assert capture.entries[0]["request_id"] == "r3"
        assert capture.entries[0]["event"] == "request.started"
