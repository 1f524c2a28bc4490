"""Task data models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class Task(BaseModel):
    """A task on the list.

    Active tasks carry ``order``; completed tasks carry ``completed_at``.
    Only TaskStore mutates these records.
    """

    id: int = Field(..., ge=1)
    title: str
    order: int | None = Field(default=None, ge=0)
    completed_pomodoros: int = Field(default=0, ge=0)
    focused_seconds: float = Field(default=0.0, ge=0)
    created_at: datetime
    completed_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Titles are non-empty once surrounding whitespace is stripped."""
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None
