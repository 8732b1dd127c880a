"""Tests for structlog configuration."""

import json

import pytest
import structlog

from hookhttp.core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(json_logs=False, log_level_name="DEBUG")


def test_json_logs(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(json_logs=True, log_level_name="INFO")

    get_logger("tests").info("http_request_created", method="GET")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "http_request_created"
    assert record["method"] == "GET"
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filters_lower_levels(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(json_logs=True, log_level_name="WARNING")

    logger = get_logger("tests")
    logger.info("dropped")
    logger.warning("kept")

    err = capsys.readouterr().err
    assert "dropped" not in err
    assert "kept" in err


def test_console_renderer(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(json_logs=False, log_level_name="DEBUG")

    get_logger("tests").debug("listener_registered", hook_event="REQUEST_CREATE")

    err = capsys.readouterr().err
    assert "listener_registered" in err
    assert "REQUEST_CREATE" in err


def test_get_logger_returns_structlog_logger() -> None:
    assert hasattr(get_logger(__name__), "bind")
    assert structlog.is_configured()
