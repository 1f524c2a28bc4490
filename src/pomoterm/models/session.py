"""Session state and phase transition records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class Phase(StrEnum):
    """Phases of the Pomodoro state machine."""

    IDLE = "idle"
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        return {
            Phase.IDLE: "Idle",
            Phase.WORK: "Pomodoro",
            Phase.SHORT_BREAK: "Short Break",
            Phase.LONG_BREAK: "Long Break",
        }[self]


@dataclass
class SessionState:
    """Represents the timer's session state.

    ``remaining`` and ``elapsed`` are seconds. ``bound_task_id`` is only set
    during Work; ``carried_task_id`` remembers the last Work task across a
    break. Both are plain ids resolved against TaskStore when used.
    """

    phase: Phase = Phase.IDLE
    remaining: float = 0.0
    elapsed: float = 0.0
    paused: bool = False
    bound_task_id: int | None = None
    carried_task_id: int | None = None
    work_cycles_completed: int = 0

    @property
    def is_running(self) -> bool:
        return self.phase is not Phase.IDLE and not self.paused

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = asdict(self)
        data["phase"] = self.phase.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SessionState:
        """Create from dictionary."""
        data = dict(data)
        data["phase"] = Phase(data.get("phase", Phase.IDLE))
        return cls(**data)


@dataclass(frozen=True)
class Transition:
    """One completed phase, handed to every subscriber in order."""

    from_phase: Phase
    to_phase: Phase
    bound_task_id: int | None
    actual_duration: float
    skipped: bool = False
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def completed_work(self) -> bool:
        return self.from_phase is Phase.WORK
