"""Tests for structlog configuration."""

import json
import logging

import pytest
from rich.logging import RichHandler

from regaudit.config import LoggingSettings, get_settings
from regaudit.core.logging import configure_logging, get_logger, setup_logging
from regaudit.services.chain import create_default_chain


@pytest.fixture
def restore_logging():
    yield
    setup_logging(json_logs=False, log_level_name="DEBUG")


def test_json_logs_render_event_and_context(
    capsys: pytest.CaptureFixture[str], restore_logging: None
) -> None:
    setup_logging(json_logs=True, log_level_name="INFO")

    get_logger("regaudit.test").info("detector_registered", detector="npm")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "detector_registered"
    assert record["detector"] == "npm"
    assert record["level"] == "info"
    assert record["logger"] == "regaudit.test"


def test_level_filters_debug(
    capsys: pytest.CaptureFixture[str], restore_logging: None
) -> None:
    setup_logging(json_logs=True, log_level_name="WARNING")

    get_logger("regaudit.test").debug("detector_matched", detector="npm")

    assert capsys.readouterr().out == ""


def test_configure_logging_uses_settings(
    capsys: pytest.CaptureFixture[str], restore_logging: None
) -> None:
    configure_logging(LoggingSettings(level="error", format="json"))

    logger = get_logger("regaudit.test")
    logger.warning("detection_no_hit", errors=[])
    logger.error("registry_detection_unavailable", error="no detectors")

    lines = capsys.readouterr().out.strip().splitlines()
    assert logging.getLogger().level == logging.ERROR
    assert [json.loads(line)["event"] for line in lines] == [
        "registry_detection_unavailable"
    ]


def test_default_chain_applies_logging_environment(
    monkeypatch: pytest.MonkeyPatch, restore_logging: None
) -> None:
    monkeypatch.setenv("REGAUDIT_LOGGING__LEVEL", "WARNING")
    monkeypatch.setenv("REGAUDIT_LOGGING__FORMAT", "json")
    get_settings.cache_clear()

    try:
        create_default_chain()
    finally:
        get_settings.cache_clear()

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert not isinstance(root.handlers[0], RichHandler)
