"""Translate key presses into commands for the current view.

The router keeps the cursor positions and the new-task text buffer; it
reads the app but never mutates it.
"""

from __future__ import annotations

from typing import get_args

from pomoterm.core.app import PomodoroApp
from pomoterm.models.commands import (
    VIEWS,
    AdjustSetting,
    CloseSettings,
    Command,
    CompleteTask,
    CreateTask,
    DeleteTask,
    MoveTask,
    OpenSettings,
    PauseResume,
    Quit,
    ResetTimer,
    SettingField,
    ShowView,
    SkipPhase,
    StartTimer,
    UncompleteTask,
)
from pomoterm.models.session import Phase

SETTING_FIELDS: tuple[SettingField, ...] = get_args(SettingField)


class InputRouter:
    """Key handling for the timer, tasks, statistics and settings views."""

    def __init__(self, app: PomodoroApp):
        self.app = app
        self.selected_task = 0
        self.selected_completed = 0
        self.selected_setting = 0
        self.editing = False
        self.buffer = ""

    def route(self, key: str) -> list[Command]:
        """Commands for one key press, possibly none."""
        if self.editing:
            return self._route_editing(key)
        if key == "q":
            return [Quit()]
        if key == "o" and self.app.view != "settings":
            return [OpenSettings()]

        handler = {
            "timer": self._route_timer,
            "tasks": self._route_tasks,
            "statistics": self._route_statistics,
            "settings": self._route_settings,
        }[self.app.view]
        return handler(key)

    # -------------------- selection helpers --------------------
    def selected_task_id(self) -> int | None:
        active = self.app.tasks.active
        if not active:
            return None
        self.selected_task = min(self.selected_task, len(active) - 1)
        return active[self.selected_task].id

    def selected_completed_id(self) -> int | None:
        completed = self.app.tasks.completed
        if not completed:
            return None
        self.selected_completed = min(self.selected_completed, len(completed) - 1)
        return completed[self.selected_completed].id

    @staticmethod
    def _cycle(index: int, step: int, size: int) -> int:
        return (index + step) % size if size else 0

    def _next_view(self) -> Command:
        return ShowView(VIEWS[(VIEWS.index(self.app.view) + 1) % len(VIEWS)])

    # -------------------- views --------------------
    def _route_timer(self, key: str) -> list[Command]:
        if key == "tab":
            return [self._next_view()]
        if key == " ":
            if self.app.engine.phase is Phase.IDLE:
                return [StartTimer(self.selected_task_id())]
            return [PauseResume()]
        if key == "r":
            return [ResetTimer()]
        if key == "s":
            return [SkipPhase()]
        return []

    def _route_tasks(self, key: str) -> list[Command]:
        size = len(self.app.tasks.active)
        task_id = self.selected_task_id()
        if key == "tab":
            return [self._next_view()]
        if key == "n":
            self.editing = True
            self.buffer = ""
            return []
        if key in ("j", "down"):
            self.selected_task = self._cycle(self.selected_task, 1, size)
            return []
        if key in ("k", "up"):
            self.selected_task = self._cycle(self.selected_task, -1, size)
            return []
        if task_id is None:
            return []
        if key in ("J", "K"):
            step = 1 if key == "J" else -1
            self.selected_task = max(0, min(self.selected_task + step, size - 1))
            return [MoveTask(task_id, step)]
        if key == "enter":
            return [CompleteTask(task_id)]
        if key in ("d", "delete"):
            return [DeleteTask(task_id)]
        if key == " ":
            if self.app.engine.phase is Phase.IDLE:
                return [StartTimer(task_id), ShowView("timer")]
            return [ShowView("timer")]
        return []

    def _route_statistics(self, key: str) -> list[Command]:
        size = len(self.app.tasks.completed)
        if key == "tab":
            return [self._next_view()]
        if key in ("j", "down"):
            self.selected_completed = self._cycle(self.selected_completed, 1, size)
            return []
        if key in ("k", "up"):
            self.selected_completed = self._cycle(self.selected_completed, -1, size)
            return []
        task_id = self.selected_completed_id()
        if task_id is None:
            return []
        if key in ("d", "delete"):
            return [DeleteTask(task_id)]
        if key == "u":
            return [UncompleteTask(task_id)]
        return []

    def _route_settings(self, key: str) -> list[Command]:
        size = len(SETTING_FIELDS)
        if key in ("tab", "esc"):
            return [CloseSettings()]
        if key in ("j", "down"):
            self.selected_setting = self._cycle(self.selected_setting, 1, size)
        elif key in ("k", "up"):
            self.selected_setting = self._cycle(self.selected_setting, -1, size)
        elif key in ("l", "right", "h", "left"):
            field = SETTING_FIELDS[self.selected_setting]
            return [AdjustSetting(field, increase=key in ("l", "right"))]
        return []

    def _route_editing(self, key: str) -> list[Command]:
        if key == "enter":
            title, self.buffer, self.editing = self.buffer, "", False
            return [CreateTask(title)] if title.strip() else []
        if key == "esc":
            self.buffer, self.editing = "", False
        elif key == "backspace":
            self.buffer = self.buffer[:-1]
        elif len(key) == 1 and key.isprintable():
            self.buffer += key
        return []
