"""Task store - sole owner of the active and completed task lists.

Every change to a Task record goes through this class. Other components
hold task ids only and look tasks up here when they need them.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pomoterm.core.exceptions import TaskNotFoundError
from pomoterm.models.task import Task
from pomoterm.utils.logger import get_logger


class TaskStore:
    """Ordered active tasks plus the completed/archived list."""

    def __init__(
        self,
        active: list[Task] | None = None,
        completed: list[Task] | None = None,
        next_id: int = 1,
    ):
        self._active: list[Task] = list(active or [])
        self._completed: list[Task] = list(completed or [])
        known = [t.id for t in self._active + self._completed]
        self._next_id = max([next_id, *(i + 1 for i in known)])
        for task in self._completed:
            task.order = None
        self._renumber()
        self.logger = get_logger()

    @classmethod
    def from_records(
        cls, active: list[Task], completed: list[Task], next_id: int = 1
    ) -> TaskStore:
        """Build a store from persisted records, which it then owns."""
        return cls(active, completed, next_id)

    def to_records(self) -> tuple[list[Task], list[Task], int]:
        """Copies of both lists plus the next id, for a snapshot."""
        return (
            [t.model_copy() for t in self._active],
            [t.model_copy() for t in self._completed],
            self._next_id,
        )

    # -------------------- queries --------------------
    @property
    def active(self) -> list[Task]:
        """Active tasks in order. The list is a copy; the tasks are not."""
        return list(self._active)

    @property
    def completed(self) -> list[Task]:
        return list(self._completed)

    @property
    def next_id(self) -> int:
        return self._next_id

    def get(self, task_id: int) -> Task | None:
        """Find a task in either list."""
        return self.get_active(task_id) or self._find(self._completed, task_id)

    def get_active(self, task_id: int) -> Task | None:
        return self._find(self._active, task_id)

    def is_active(self, task_id: int | None) -> bool:
        return task_id is not None and self.get_active(task_id) is not None

    def index_of(self, task_id: int) -> int:
        """Position of an active task."""
        for index, task in enumerate(self._active):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id, "active tasks")

    # -------------------- mutations --------------------
    def create(self, title: str) -> Task:
        """Append a new task to the end of the active list.

        Raises:
            ValueError: If the title is empty
        """
        task = Task(
            id=self._next_id,
            title=title,
            order=len(self._active),
            created_at=datetime.now(UTC),
        )
        self._next_id += 1
        self._active.append(task)
        self.logger.info("task created: #%d %r", task.id, task.title)
        return task

    def reorder(self, task_id: int, new_index: int) -> Task:
        """Move an active task to ``new_index``, shifting the others.

        Out-of-range indices are clamped rather than rejected.
        """
        index = self.index_of(task_id)
        target = max(0, min(new_index, len(self._active) - 1))
        task = self._active.pop(index)
        self._active.insert(target, task)
        self._renumber()
        return task

    def move_up(self, task_id: int) -> Task:
        return self.reorder(task_id, self.index_of(task_id) - 1)

    def move_down(self, task_id: int) -> Task:
        return self.reorder(task_id, self.index_of(task_id) + 1)

    def complete(self, task_id: int) -> Task:
        """Move an active task to the completed list."""
        index = self.index_of(task_id)
        task = self._active.pop(index)
        task.order = None
        task.completed_at = datetime.now(UTC)
        self._completed.append(task)
        self._renumber()
        self.logger.info("task completed: #%d", task_id)
        return task

    def uncomplete(self, task_id: int) -> Task:
        """Move a completed task back to the end of the active list."""
        task = self._find(self._completed, task_id)
        if task is None:
            raise TaskNotFoundError(task_id, "completed tasks")
        self._completed.remove(task)
        task.completed_at = None
        self._active.append(task)
        self._renumber()
        self.logger.info("task reopened: #%d", task_id)
        return task

    def delete(self, task_id: int) -> Task:
        """Remove a task from whichever list holds it. Irreversible."""
        for tasks in (self._active, self._completed):
            task = self._find(tasks, task_id)
            if task is not None:
                tasks.remove(task)
                task.order = None
                self._renumber()
                self.logger.info("task deleted: #%d", task_id)
                return task
        raise TaskNotFoundError(task_id)

    def record_session(self, task_id: int, focused_seconds: float) -> bool:
        """Credit one completed Work session to a task.

        Completed tasks are still credited. Returns False, without raising,
        when the task no longer exists.
        """
        if focused_seconds < 0:
            raise ValueError("focused_seconds must be non-negative")
        task = self.get(task_id)
        if task is None:
            self.logger.info("session for deleted task #%d not credited", task_id)
            return False
        task.completed_pomodoros += 1
        task.focused_seconds += focused_seconds
        return True

    # -------------------- helpers --------------------
    def _renumber(self) -> None:
        for index, task in enumerate(self._active):
            task.order = index

    @staticmethod
    def _find(tasks: list[Task], task_id: int) -> Task | None:
        for task in tasks:
            if task.id == task_id:
                return task
        return None
