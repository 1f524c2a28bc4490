"""Commands accepted by the application core.

The input router turns key presses into these values; tests and the CLI
build them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SettingField = Literal[
    "work_duration",
    "short_break_duration",
    "long_break_duration",
    "long_break_interval",
    "theme",
    "desktop_notifications",
    "sound",
    "auto_cycle",
]

ViewName = Literal["timer", "tasks", "statistics", "settings"]
VIEWS: tuple[ViewName, ...] = ("timer", "tasks", "statistics")


@dataclass(frozen=True)
class StartTimer:
    task_id: int | None = None


@dataclass(frozen=True)
class PauseResume:
    pass


@dataclass(frozen=True)
class SkipPhase:
    pass


@dataclass(frozen=True)
class ResetTimer:
    pass


@dataclass(frozen=True)
class CreateTask:
    title: str


@dataclass(frozen=True)
class CompleteTask:
    task_id: int


@dataclass(frozen=True)
class UncompleteTask:
    task_id: int


@dataclass(frozen=True)
class DeleteTask:
    task_id: int


@dataclass(frozen=True)
class ReorderTask:
    task_id: int
    new_index: int


@dataclass(frozen=True)
class MoveTask:
    """Shift an active task one place up (step -1) or down (step 1)."""

    task_id: int
    step: int


@dataclass(frozen=True)
class OpenSettings:
    pass


@dataclass(frozen=True)
class CloseSettings:
    pass


@dataclass(frozen=True)
class AdjustSetting:
    """Step a setting: minutes for durations, +-1 for the interval,
    next/previous for the theme, toggle for booleans."""

    field: SettingField
    increase: bool = True


@dataclass(frozen=True)
class ShowView:
    view: ViewName


@dataclass(frozen=True)
class Quit:
    pass


Command = (
    StartTimer
    | PauseResume
    | SkipPhase
    | ResetTimer
    | CreateTask
    | CompleteTask
    | UncompleteTask
    | DeleteTask
    | ReorderTask
    | MoveTask
    | OpenSettings
    | CloseSettings
    | AdjustSetting
    | ShowView
    | Quit
)

# Commands that change persisted state and therefore trigger a save.
MUTATING_COMMANDS: tuple[type, ...] = (
    StartTimer,
    PauseResume,
    SkipPhase,
    ResetTimer,
    CreateTask,
    CompleteTask,
    UncompleteTask,
    DeleteTask,
    ReorderTask,
    MoveTask,
    AdjustSetting,
)
