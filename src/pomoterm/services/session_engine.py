"""Session engine - the Pomodoro state machine.

Phases: IDLE -> WORK -> SHORT_BREAK/LONG_BREAK -> WORK -> ...

The engine never calls its subscribers. Every method that completes a phase
returns the resulting ``Transition`` and the application core hands it on.
"""

from __future__ import annotations

from dataclasses import replace

from pomoterm.core.exceptions import InvalidTaskReference, InvalidTransition
from pomoterm.models.config_models import TimerSettings
from pomoterm.models.session import Phase, SessionState, Transition
from pomoterm.services.task_store import TaskStore
from pomoterm.utils.logger import get_logger


class SessionEngine:
    """Owns SessionState and advances it on ticks and commands."""

    def __init__(self, settings: TimerSettings, tasks: TaskStore):
        self.settings = settings
        self.tasks = tasks
        self._state = SessionState()
        self.logger = get_logger()

    @property
    def state(self) -> SessionState:
        """A copy of the current state; mutate through the engine only."""
        return replace(self._state)

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def remaining(self) -> float:
        return self._state.remaining

    @property
    def bound_task_id(self) -> int | None:
        return self._state.bound_task_id

    @property
    def paused(self) -> bool:
        return self._state.paused

    def duration_of(self, phase: Phase) -> int:
        """Configured duration of a phase in seconds."""
        return {
            Phase.IDLE: 0,
            Phase.WORK: self.settings.work_duration,
            Phase.SHORT_BREAK: self.settings.short_break_duration,
            Phase.LONG_BREAK: self.settings.long_break_duration,
        }[phase]

    # -------------------- commands --------------------
    def start(self, task_id: int | None = None) -> None:
        """Start a Work phase, optionally bound to an active task.

        Without ``task_id`` the task carried over from the previous cycle is
        bound again if it is still active.

        Raises:
            InvalidTransition: If the timer is not idle
            InvalidTaskReference: If ``task_id`` is not an active task. The
                session has started unbound when this is raised.
        """
        state = self._state
        if state.phase is not Phase.IDLE:
            raise InvalidTransition(f"Cannot start: {state.phase.label} in progress")

        bad_reference = None
        if task_id is None:
            task_id = state.carried_task_id
            if not self.tasks.is_active(task_id):
                task_id = None
        elif not self.tasks.is_active(task_id):
            bad_reference, task_id = task_id, None

        self._enter(Phase.WORK, task_id)
        self.logger.info("work started (task=%s)", task_id)
        if bad_reference is not None:
            raise InvalidTaskReference(bad_reference)

    def tick(self, elapsed: float) -> Transition | None:
        """Advance the countdown by ``elapsed`` seconds.

        Ticks are ignored while idle or paused. Time beyond the end of the
        phase is dropped, so one tick completes at most one phase.
        """
        if elapsed < 0:
            raise ValueError("elapsed must be non-negative")
        state = self._state
        if not state.is_running:
            return None
        step = min(elapsed, state.remaining)
        state.remaining -= step
        state.elapsed += step
        if state.remaining <= 0:
            state.remaining = 0.0
            return self._complete_phase(skipped=False)
        return None

    def pause(self) -> None:
        self._require_session("pause")
        self._state.paused = True

    def resume(self) -> None:
        self._require_session("resume")
        self._state.paused = False

    def toggle_pause(self) -> bool:
        """Pause a running timer or resume a paused one. Returns ``paused``."""
        if self._state.paused:
            self.resume()
        else:
            self.pause()
        return self._state.paused

    def reset(self) -> None:
        """Abort the current session. Nothing is counted."""
        state = self._state
        if state.phase is not Phase.IDLE:
            self.logger.info(
                "%s reset with %.0fs remaining", state.phase.value, state.remaining
            )
        state.phase = Phase.IDLE
        state.remaining = 0.0
        state.elapsed = 0.0
        state.paused = False
        state.bound_task_id = None
        state.carried_task_id = None

    def skip(self) -> Transition:
        """Finish the current phase now; counts exactly like running out."""
        self._require_session("skip")
        self._state.remaining = 0.0
        return self._complete_phase(skipped=True)

    def apply_settings(self, settings: TimerSettings) -> None:
        """Use new durations. A running phase keeps its remaining time."""
        state = self._state
        untouched = state.phase is not Phase.IDLE and state.paused and (
            state.remaining == self.duration_of(state.phase)
        )
        self.settings = settings
        if untouched:
            state.remaining = float(self.duration_of(state.phase))

    def restore(self, state: SessionState) -> None:
        """Reinstate a persisted session. Sessions always come back paused."""
        restored = replace(state)
        if restored.phase is Phase.IDLE:
            restored.remaining = 0.0
            restored.elapsed = 0.0
            restored.paused = False
            restored.bound_task_id = None
        else:
            restored.paused = True
            if restored.remaining <= 0:
                restored.remaining = float(self.duration_of(restored.phase))
                restored.elapsed = 0.0
            if restored.phase is not Phase.WORK:
                restored.bound_task_id = None
            elif self.tasks.get(restored.bound_task_id) is None:
                restored.bound_task_id = None
        self._state = restored

    # -------------------- internals --------------------
    def _require_session(self, action: str) -> None:
        if self._state.phase is Phase.IDLE:
            raise InvalidTransition(f"Cannot {action}: timer is idle")

    def _enter(self, phase: Phase, task_id: int | None = None) -> None:
        state = self._state
        state.phase = phase
        state.remaining = float(self.duration_of(phase))
        state.elapsed = 0.0
        state.paused = False
        state.bound_task_id = task_id if phase is Phase.WORK else None

    def _complete_phase(self, skipped: bool) -> Transition:
        state = self._state
        finished = state.phase
        bound = state.bound_task_id
        actual = state.elapsed

        if finished is Phase.WORK:
            state.work_cycles_completed += 1
            state.carried_task_id = bound
            if state.work_cycles_completed >= self.settings.long_break_interval:
                state.work_cycles_completed = 0
                self._enter(Phase.LONG_BREAK)
            else:
                self._enter(Phase.SHORT_BREAK)
        elif self.settings.auto_cycle:
            carried = state.carried_task_id
            self._enter(Phase.WORK, carried if self.tasks.is_active(carried) else None)
        else:
            self._enter(Phase.IDLE)

        transition = Transition(
            from_phase=finished,
            to_phase=state.phase,
            bound_task_id=bound,
            actual_duration=actual,
            skipped=skipped,
        )
        self.logger.info(
            "%s complete%s -> %s (task=%s, %.1fs, cycle %d/%d)",
            finished.value,
            " (skipped)" if skipped else "",
            state.phase.value,
            bound,
            actual,
            state.work_cycles_completed,
            self.settings.long_break_interval,
        )
        return transition
