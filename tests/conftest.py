"""Shared test fixtures and configuration.

Keeps the log file, config.json and state.json inside tmp_path, and
replaces the alert sinks with mocks so no test shells out or plays sound.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import pytest

from pomoterm.core.app import PomodoroApp
from pomoterm.core.dispatcher import InlineDispatcher
from pomoterm.models.config_models import AppConfig, TimerSettings
from pomoterm.models.snapshot import Snapshot
from pomoterm.services.config_service import ConfigService, get_config_service
from pomoterm.services.persistence import PersistenceGateway
from pomoterm.services.task_store import TaskStore


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send every log record to a file under tmp_path."""
    import pomoterm.utils.logger as logger_mod

    logger_mod._logger = None
    named = logging.getLogger("pomoterm")
    for handler in list(named.handlers):
        named.removeHandler(handler)
        handler.close()

    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield

    for handler in list(named.handlers):
        named.removeHandler(handler)
        handler.close()
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def clear_config_cache():
    get_config_service.cache_clear()
    yield
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture()
def config_service(tmp_path):
    """A real ConfigService backed by a temporary directory."""
    return ConfigService(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture()
def gateway(config_service):
    return PersistenceGateway(config_service)


@pytest.fixture()
def settings():
    """Classic 25/5/15 timings with a long break every 4 pomodoros."""
    return TimerSettings(
        work_duration=1500,
        short_break_duration=300,
        long_break_duration=900,
        long_break_interval=4,
    )


@pytest.fixture()
def store():
    return TaskStore()


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


@pytest.fixture()
def notifier():
    return MagicMock(name="notifier")


@pytest.fixture()
def audio():
    return MagicMock(name="audio")


@pytest.fixture()
def make_app(settings, notifier, audio):
    """Factory for a PomodoroApp running side effects inline with mock sinks."""

    def _make(snapshot: Snapshot | None = None, gateway=None) -> PomodoroApp:
        snapshot = snapshot or Snapshot(config=AppConfig(timer=settings))
        return PomodoroApp(
            snapshot,
            gateway=gateway,
            dispatcher=InlineDispatcher(),
            notifier=notifier,
            audio=audio,
        )

    return _make


@pytest.fixture()
def app(make_app):
    return make_app()
