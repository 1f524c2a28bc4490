"""pomoterm domain models.

Pydantic models for everything that is persisted, dataclasses for the
in-memory session state and the values passed between components.
"""

from .config_models import THEMES, AppConfig, ThemeName, TimerSettings, UIConfig
from .session import Phase, SessionState, Transition
from .snapshot import SessionRecord, Snapshot, StateFile
from .stats import StatsAggregate
from .task import Task

__all__ = [
    "AppConfig",
    "Phase",
    "SessionRecord",
    "SessionState",
    "Snapshot",
    "StateFile",
    "StatsAggregate",
    "Task",
    "THEMES",
    "ThemeName",
    "TimerSettings",
    "Transition",
    "UIConfig",
]
