import pytest
from loguru import logger

from duet import logging_utils
from duet.config import get_settings
from duet.logging_utils import configure_logging


@pytest.fixture
def fresh_logging(monkeypatch):
    previous = logging_utils._sink_id
    monkeypatch.setattr(logging_utils, "_sink_id", None)
    monkeypatch.setattr(logging_utils, "_configured", None)
    yield
    if logging_utils._sink_id not in (None, previous):
        logger.remove(logging_utils._sink_id)


@pytest.fixture
def app_sink():
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)


def test_configure_logging_keeps_application_sinks(fresh_logging, app_sink) -> None:
    configure_logging(level="debug")
    configure_logging(profile="chat", level="warning")

    logger.info("app.event after reconfigure")

    assert any("app.event after reconfigure" in message for message in app_sink)


def test_configure_logging_swaps_its_own_sink(fresh_logging) -> None:
    configure_logging(level="info")
    first = logging_utils._sink_id

    configure_logging(profile="chat", level="info")

    assert logging_utils._sink_id != first
    with pytest.raises(ValueError):
        logger.remove(first)


def test_configure_logging_is_idempotent_per_profile_and_level(fresh_logging) -> None:
    configure_logging(level="info")
    first = logging_utils._sink_id

    configure_logging(level="INFO")

    assert logging_utils._sink_id == first
    assert logging_utils._configured == ("default", "INFO")


def test_level_falls_back_to_environment(fresh_logging, monkeypatch) -> None:
    monkeypatch.setenv("DUET_LOG_LEVEL", "error")

    configure_logging()

    assert logging_utils._configured == ("default", "ERROR")


def test_get_settings_leaves_logging_alone(fresh_logging, app_sink) -> None:
    get_settings(log_level="ERROR")

    logger.info("app.event after settings")

    assert logging_utils._sink_id is None
    assert any("app.event after settings" in message for message in app_sink)
