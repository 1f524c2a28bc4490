"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from pomoterm.core.exceptions import PersistenceFailure, TaskNotFoundError
from pomoterm.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_PERSISTENCE,
)
from pomoterm.utils.logger import get_logger
from pomoterm.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(func: Callable):
    """Log the command, and map known errors to messages and exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except (typer.Exit, typer.Abort):
            # Typer's own exits (--help, explicit Exit, declined confirm)
            raise

        except AppError as e:
            logger.error("command failed: %s - %s", cmd, e)
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except ValidationError as e:
            message = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            logger.error("command failed: %s - %s", cmd, message)
            format_error(message)
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e

        except TaskNotFoundError as e:
            logger.error("command failed: %s - %s", cmd, e)
            format_error(str(e))
            raise typer.Exit(code=ERROR_NOT_FOUND) from e

        except PersistenceFailure as e:
            logger.error("command failed: %s - %s", cmd, e)
            format_error(str(e))
            raise typer.Exit(code=ERROR_PERSISTENCE) from e

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
