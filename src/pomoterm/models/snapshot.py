"""Everything that is persisted between runs."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .config_models import AppConfig
from .session import Phase, SessionState
from .stats import StatsAggregate
from .task import Task


class SessionRecord(BaseModel):
    """Serialisable form of SessionState."""

    phase: Phase = Phase.IDLE
    remaining: float = Field(default=0.0, ge=0)
    elapsed: float = Field(default=0.0, ge=0)
    paused: bool = False
    bound_task_id: int | None = None
    carried_task_id: int | None = None
    work_cycles_completed: int = Field(default=0, ge=0)

    @classmethod
    def from_state(cls, state: SessionState) -> SessionRecord:
        return cls.model_validate(state.to_dict())

    def to_state(self) -> SessionState:
        return SessionState.from_dict(self.model_dump())


class StateFile(BaseModel):
    """Contents of state.json."""

    version: int = 1
    next_task_id: int = Field(default=1, ge=1)
    active_tasks: list[Task] = Field(default_factory=list)
    completed_tasks: list[Task] = Field(default_factory=list)
    stats: StatsAggregate = Field(default_factory=StatsAggregate)
    session: SessionRecord = Field(default_factory=SessionRecord)

    @field_validator("active_tasks")
    @classmethod
    def validate_active_order(cls, v: list[Task]) -> list[Task]:
        """The list position is authoritative; order is derived from it."""
        for index, task in enumerate(v):
            task.order = index
        return v


class Snapshot(BaseModel):
    """Config plus state, as loaded at startup and saved on every change."""

    config: AppConfig = Field(default_factory=AppConfig)
    state: StateFile = Field(default_factory=StateFile)
