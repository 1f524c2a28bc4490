"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import threading
from unittest.mock import patch


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from pomoterm.utils.logger import get_logger

        logger = get_logger()

    assert (tmp_path / "pomoterm.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.propagate is False


def test_get_logger_returns_singleton(tmp_path):
    """Repeated calls return the same logger instance."""
    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from pomoterm.utils.logger import get_logger

        assert get_logger() is get_logger()


def test_records_name_the_thread(tmp_path):
    """Records from the dispatcher thread can be told apart in the file."""
    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from pomoterm.utils.logger import get_logger

        logger = get_logger()
        worker = threading.Thread(
            target=lambda: logger.warning("from worker"), name="pomoterm-io_0"
        )
        worker.start()
        worker.join()

    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "pomoterm.log").read_text().splitlines()
    assert any("[pomoterm-io_0]" in line and "from worker" in line for line in lines)


def test_get_logger_creates_parent_dirs(tmp_path):
    """Logger creates nested directories if they do not exist."""
    nested = tmp_path / "a" / "b" / "c"
    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(nested)):
        from pomoterm.utils.logger import get_logger

        get_logger()

    assert nested.is_dir()


def test_level_from_environment(tmp_path, monkeypatch):
    """POMOTERM_LOG_LEVEL raises the threshold; bad values fall back to DEBUG."""
    monkeypatch.setenv("POMOTERM_LOG_LEVEL", "warning")
    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from pomoterm.utils.logger import get_logger

        assert get_logger().level == logging.WARNING


def test_unknown_level_falls_back(monkeypatch):
    from pomoterm.utils.logger import _level

    monkeypatch.setenv("POMOTERM_LOG_LEVEL", "chatty")

    assert _level() == logging.DEBUG


def test_log_path(tmp_path):
    with patch("pomoterm.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from pomoterm.utils.logger import log_path

        assert log_path() == tmp_path / "pomoterm.log"
