"""Custom exceptions for pomoterm.

None of these is fatal: the application core catches them, logs them and
turns them into a message for the UI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pomoterm.models.snapshot import Snapshot


class PomotermError(Exception):
    """Base exception for all pomoterm errors."""


class InvalidTransition(PomotermError):
    """Raised when a command is not valid for the current phase.

    The session state is left unchanged.
    """


class InvalidTaskReference(PomotermError):
    """Raised when a timer is started for a task that is not active.

    The session has already started, unbound, when this is raised.
    """

    def __init__(self, task_id: int):
        super().__init__(f"Task #{task_id} is not an active task")
        self.task_id = task_id


class TaskNotFoundError(PomotermError):
    """Raised when a task operation references a task that does not exist."""

    def __init__(self, task_id: int, where: str = "tasks"):
        super().__init__(f"Task #{task_id} not found in {where}")
        self.task_id = task_id


class PersistenceFailure(PomotermError):
    """Raised when settings or state cannot be loaded or saved.

    On load, ``fallback`` carries the default snapshot the caller should
    continue with.
    """

    def __init__(self, message: str, fallback: Snapshot | None = None):
        super().__init__(message)
        self.fallback = fallback


class SinkFailure(PomotermError):
    """Raised when a notification or audio alert cannot be delivered."""
