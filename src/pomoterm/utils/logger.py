"""File logging for pomoterm.

The full-screen timer owns the terminal, so records never go to stdout or
stderr: everything lands in a rotating file under platformdirs'
user_log_dir. Set ``POMOTERM_LOG_LEVEL`` (e.g. ``INFO``) to quieten it.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomoterm"
_LOG_FILE = "pomoterm.log"
_LEVEL_ENV = "POMOTERM_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(module)s: %(message)s"

_logger: logging.Logger | None = None


def log_path() -> Path:
    """Where the log file lives on this machine."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _level() -> int:
    name = os.environ.get(_LEVEL_ENV, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """The shared ``pomoterm`` logger, configured on first use.

    Records carry the thread name, since alerts and saves are logged from
    the dispatcher's worker thread.
    """
    global _logger
    if _logger is not None:
        return _logger

    path = log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_level())
    logger.propagate = False
    if not logger.handlers:
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)

    _logger = logger
    return _logger
