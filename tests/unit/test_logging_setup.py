"""Tests for structlog configuration."""

from __future__ import annotations

import json
from unittest.mock import patch

import structlog

from alt_conncache.cache import ConnectionCache
from alt_conncache.utils.logging import configure_logging


def test_json_output(capsys):
    configure_logging("INFO", "json")
    cache = ConnectionCache(1, debug=True)
    cache.deposit("http", "a", "c1")
    cache.deposit("http", "b", "c2")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "dropping connection"
    assert payload["level"] == "info"
    assert payload["reason"] == "Total capacity exceeded"
    assert payload["component"] == "conn_cache"
    assert "timestamp" in payload


def test_level_filters_debug_events(capsys):
    configure_logging("INFO", "json")
    cache = ConnectionCache(None, debug=True)
    cache.deposit("http", "a", "c1")
    cache.drop(lambda *args: 1 / 0)

    assert capsys.readouterr().out == ""


def test_console_renderer_selected():
    configure_logging("debug", "console")
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_unknown_level_falls_back_to_info():
    configure_logging("verbose", "json")
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(20)


def test_defaults_come_from_settings():
    with patch.dict("os.environ", {"CONN_CACHE_LOG_LEVEL": "WARNING", "CONN_CACHE_LOG_FORMAT": "console"}, clear=True):
        configure_logging()

    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)
    assert config["wrapper_class"] is structlog.make_filtering_bound_logger(30)


def test_explicit_arguments_override_settings():
    with patch.dict("os.environ", {"CONN_CACHE_LOG_FORMAT": "console"}, clear=True):
        configure_logging("INFO", "json")

    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
