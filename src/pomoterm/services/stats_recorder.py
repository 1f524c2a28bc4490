"""Statistics recorder - exactly-once accounting of completed Work phases."""

from __future__ import annotations

from pomoterm.models.session import Transition
from pomoterm.models.stats import StatsAggregate
from pomoterm.services.task_store import TaskStore
from pomoterm.utils.logger import get_logger


class StatsRecorder:
    """Owns the global StatsAggregate.

    Skipped and naturally finished Work phases arrive as the same kind of
    Transition, so both are counted through the single ``handle`` path.
    """

    def __init__(self, tasks: TaskStore, stats: StatsAggregate | None = None):
        self.tasks = tasks
        self.stats = stats or StatsAggregate()
        self.logger = get_logger()

    def handle(self, transition: Transition) -> None:
        """Apply one transition. Breaks have no statistical effect."""
        if not transition.completed_work:
            return

        self.stats.total_sessions_completed += 1
        self.stats.total_focused_seconds += transition.actual_duration

        if transition.bound_task_id is not None:
            self.tasks.record_session(
                transition.bound_task_id, transition.actual_duration
            )

        self.logger.info(
            "session recorded: total=%d focused=%.0fs",
            self.stats.total_sessions_completed,
            self.stats.total_focused_seconds,
        )
