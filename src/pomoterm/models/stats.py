"""Process-lifetime statistics."""

from pydantic import BaseModel, Field


class StatsAggregate(BaseModel):
    """Totals across all completed Work sessions. Never decrease."""

    total_sessions_completed: int = Field(default=0, ge=0)
    total_focused_seconds: float = Field(default=0.0, ge=0)
