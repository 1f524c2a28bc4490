"""Application core.

Applies commands and clock ticks to the engine and the task store, hands
every Transition to the subscribers in a fixed order, and schedules saves.
Everything here runs on the event loop's thread.
"""

from __future__ import annotations

from collections import deque
from functools import partial

from pydantic import ValidationError

from pomoterm.core.dispatcher import Dispatcher, InlineDispatcher
from pomoterm.core.exceptions import (
    InvalidTaskReference,
    InvalidTransition,
    PersistenceFailure,
    TaskNotFoundError,
)
from pomoterm.models.commands import (
    MUTATING_COMMANDS,
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
    ReorderTask,
    ResetTimer,
    ShowView,
    SkipPhase,
    StartTimer,
    UncompleteTask,
    ViewName,
)
from pomoterm.models.config_models import THEMES, AppConfig, TimerSettings
from pomoterm.models.session import Transition
from pomoterm.models.snapshot import SessionRecord, Snapshot, StateFile
from pomoterm.services.persistence import PersistenceGateway
from pomoterm.services.session_engine import SessionEngine
from pomoterm.services.sinks import AudioSink, NotificationSink
from pomoterm.services.stats_recorder import StatsRecorder
from pomoterm.services.task_store import TaskStore
from pomoterm.utils.logger import get_logger

_DURATION_FIELDS = ("work_duration", "short_break_duration", "long_break_duration")
_MINUTE = 60
_MAX_MESSAGES = 5

# Errors a command may raise that are reported to the user, not propagated
RECOVERABLE_ERRORS = (
    InvalidTransition,
    InvalidTaskReference,
    TaskNotFoundError,
    ValidationError,
    ValueError,
)


class PomodoroApp:
    """Timer, tasks and statistics behind one command interface."""

    def __init__(
        self,
        snapshot: Snapshot | None = None,
        gateway: PersistenceGateway | None = None,
        dispatcher: Dispatcher | None = None,
        notifier: NotificationSink | None = None,
        audio: AudioSink | None = None,
    ):
        snapshot = snapshot or Snapshot()
        state = snapshot.state
        self.config: AppConfig = snapshot.config
        self.gateway = gateway
        self.dispatcher = dispatcher or InlineDispatcher()
        self.logger = get_logger()

        self.tasks = TaskStore.from_records(
            state.active_tasks, state.completed_tasks, state.next_task_id
        )
        self.engine = SessionEngine(self.config.timer, self.tasks)
        self.engine.restore(state.session.to_state())
        self.recorder = StatsRecorder(self.tasks, state.stats)

        timer = self.config.timer
        self.notifier = notifier or NotificationSink(enabled=timer.desktop_notifications)
        self.audio = audio or AudioSink(enabled=timer.sound)

        # Fixed delivery order: statistics first so the saved snapshot
        # already contains them.
        self.subscribers = (
            self.recorder.handle,
            self._notify,
            self._play_sound,
            self._persist_transition,
        )

        self.view: ViewName = "tasks"
        self.previous_view: ViewName = "tasks"
        self.messages: deque[str] = deque(maxlen=_MAX_MESSAGES)
        self.should_quit = False

    @classmethod
    def load(
        cls,
        gateway: PersistenceGateway,
        dispatcher: Dispatcher | None = None,
        **sinks,
    ) -> PomodoroApp:
        """Build the app from disk. A failed load starts from defaults."""
        warning = None
        try:
            snapshot = gateway.load()
        except PersistenceFailure as e:
            snapshot = e.fallback or Snapshot()
            warning = f"Could not load saved data, starting fresh: {e}"
        app = cls(snapshot, gateway=gateway, dispatcher=dispatcher, **sinks)
        if warning:
            app.notice(warning)
        return app

    @property
    def stats(self):
        return self.recorder.stats

    # -------------------- inputs --------------------
    def handle(self, command: Command) -> Transition | None:
        """Apply one command. Invalid commands are rejected with a notice."""
        transition = None
        try:
            transition = self._apply(command)
        except InvalidTaskReference as e:
            # The session did start, unbound
            self.logger.warning("%s: %s", type(command).__name__, e)
            self.notice(f"{e}; timer started without a task")
        except RECOVERABLE_ERRORS as e:
            self.logger.warning("%s rejected: %s", type(command).__name__, e)
            self.notice(_describe(e))
            return None

        if transition is not None:
            self.publish(transition)
        elif isinstance(command, MUTATING_COMMANDS):
            self.persist()
        return transition

    def tick(self, elapsed: float) -> Transition | None:
        """Feed one clock tick to the engine."""
        transition = self.engine.tick(elapsed)
        if transition is not None:
            self.publish(transition)
        return transition

    def publish(self, transition: Transition) -> None:
        """Hand a transition to every subscriber, in order."""
        for subscriber in self.subscribers:
            subscriber(transition)

    # -------------------- outputs --------------------
    def snapshot(self) -> Snapshot:
        """A deep copy of everything persisted, safe to hand to a worker."""
        active, completed, next_id = self.tasks.to_records()
        return Snapshot(
            config=self.config.model_copy(deep=True),
            state=StateFile(
                next_task_id=next_id,
                active_tasks=active,
                completed_tasks=completed,
                stats=self.stats.model_copy(),
                session=SessionRecord.from_state(self.engine.state),
            ),
        )

    def persist(self) -> None:
        """Schedule a save of the current snapshot."""
        if self.gateway is None:
            return
        self.dispatcher.submit("save", partial(self.gateway.save, self.snapshot()))

    def notice(self, message: str) -> None:
        """Queue a message for the UI."""
        self.messages.append(message)

    def collect_warnings(self) -> None:
        """Move warnings from background jobs into the UI messages."""
        for warning in self.dispatcher.drain_warnings():
            self.notice(warning)

    def shutdown(self) -> None:
        """Save one last time and wait for pending side effects."""
        self.persist()
        self.dispatcher.shutdown(wait=True)
        self.logger.info("shutdown complete")

    # -------------------- command handlers --------------------
    def _apply(self, command: Command) -> Transition | None:
        match command:
            case StartTimer(task_id=task_id):
                self.engine.start(task_id)
            case PauseResume():
                self.engine.toggle_pause()
            case SkipPhase():
                return self.engine.skip()
            case ResetTimer():
                self.engine.reset()
            case CreateTask(title=title):
                self.tasks.create(title)
            case CompleteTask(task_id=task_id):
                self.tasks.complete(task_id)
            case UncompleteTask(task_id=task_id):
                self.tasks.uncomplete(task_id)
            case DeleteTask(task_id=task_id):
                self.tasks.delete(task_id)
            case ReorderTask(task_id=task_id, new_index=new_index):
                self.tasks.reorder(task_id, new_index)
            case MoveTask(task_id=task_id, step=step):
                if step < 0:
                    self.tasks.move_up(task_id)
                else:
                    self.tasks.move_down(task_id)
            case OpenSettings():
                if self.view != "settings":
                    self.previous_view = self.view
                self.view = "settings"
            case CloseSettings():
                self.view = self.previous_view
            case AdjustSetting(field=field, increase=increase):
                self._adjust_setting(field, increase)
            case ShowView(view=view):
                self.view = view
            case Quit():
                self.should_quit = True
            case _:
                raise ValueError(f"Unknown command: {command!r}")
        return None

    def _adjust_setting(self, field: str, increase: bool) -> None:
        timer = self.config.timer
        current = getattr(timer, field)
        step = 1 if increase else -1

        if field in _DURATION_FIELDS:
            minutes = max(1, current // _MINUTE + step)
            value = minutes * _MINUTE
        elif field == "long_break_interval":
            value = max(1, current + step)
        elif field == "theme":
            value = THEMES[(THEMES.index(current) + step) % len(THEMES)]
        else:
            value = not current

        self.apply_timer_settings(
            TimerSettings.model_validate({**timer.model_dump(), field: value})
        )

    def apply_timer_settings(self, settings: TimerSettings) -> None:
        """Switch to new timer settings; saved with the next snapshot."""
        self.config.timer = settings
        self.engine.apply_settings(settings)
        self.notifier.enabled = settings.desktop_notifications
        self.audio.enabled = settings.sound

    # -------------------- subscribers --------------------
    def _notify(self, transition: Transition) -> None:
        self.dispatcher.submit(
            "notification",
            partial(self.notifier.notify, transition.from_phase, transition.to_phase),
        )

    def _play_sound(self, transition: Transition) -> None:
        self.dispatcher.submit("sound", partial(self.audio.play, transition.from_phase))

    def _persist_transition(self, transition: Transition) -> None:
        self.persist()


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(e["msg"] for e in error.errors())
    return str(error)
