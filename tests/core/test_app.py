"""Tests for the application core."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from pomoterm.core.app import PomodoroApp
from pomoterm.core.exceptions import PersistenceFailure
from pomoterm.models.commands import (
    AdjustSetting,
    CloseSettings,
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
)
from pomoterm.models.config_models import AppConfig
from pomoterm.models.session import Phase
from pomoterm.models.snapshot import SessionRecord, Snapshot, StateFile


@pytest.fixture()
def mock_gateway():
    return MagicMock(name="gateway")


@pytest.fixture()
def saving_app(make_app, mock_gateway):
    return make_app(gateway=mock_gateway)


def saved_snapshots(gateway) -> list[Snapshot]:
    return [c.args[0] for c in gateway.save.call_args_list]


# ---------------------------------------------------------------------------
# Full sessions
# ---------------------------------------------------------------------------


class TestSessions:
    def test_work_session_credits_task(self, app):
        app.handle(CreateTask("T1"))
        app.handle(StartTimer(1))

        transition = app.tick(1500)

        assert transition.from_phase is Phase.WORK
        assert app.stats.total_sessions_completed == 1
        assert app.stats.total_focused_seconds == 1500
        assert app.tasks.get(1).completed_pomodoros == 1
        assert app.tasks.get(1).focused_seconds == 1500

    def test_task_completed_while_bound(self, app):
        app.handle(CreateTask("T1"))
        app.handle(StartTimer(1))
        app.tick(600)

        app.handle(CompleteTask(1))
        app.tick(900)

        task = app.tasks.get(1)
        assert task.is_completed
        assert task.completed_pomodoros == 1
        assert task.focused_seconds == 1500
        assert app.stats.total_sessions_completed == 1

        app.tick(300)

        assert app.engine.phase is Phase.WORK
        assert app.engine.bound_task_id is None

    def test_task_deleted_while_bound(self, app):
        app.handle(CreateTask("T1"))
        app.handle(StartTimer(1))

        app.handle(DeleteTask(1))
        app.tick(1500)

        assert app.tasks.get(1) is None
        assert app.stats.total_sessions_completed == 1
        assert app.stats.total_focused_seconds == 1500
        assert list(app.messages) == []

    def test_skip_counts_like_completion(self, app):
        app.handle(StartTimer())
        app.tick(100)

        transition = app.handle(SkipPhase())

        assert transition.skipped is True
        assert app.stats.total_sessions_completed == 1
        assert app.stats.total_focused_seconds == 100

    def test_reset_counts_nothing(self, app):
        app.handle(StartTimer())
        app.tick(100)

        assert app.handle(ResetTimer()) is None
        assert app.engine.phase is Phase.IDLE
        assert app.stats.total_sessions_completed == 0


# ---------------------------------------------------------------------------
# Subscribers
# ---------------------------------------------------------------------------


class TestSubscribers:
    def test_fixed_order(self, app):
        assert app.subscribers == (
            app.recorder.handle,
            app._notify,
            app._play_sound,
            app._persist_transition,
        )

    def test_alerts_fired_once_per_transition(self, app, notifier, audio):
        app.handle(StartTimer())

        app.tick(1500)

        notifier.notify.assert_called_once_with(Phase.WORK, Phase.SHORT_BREAK)
        audio.play.assert_called_once_with(Phase.WORK)

    def test_saved_snapshot_includes_stats(self, saving_app, mock_gateway):
        saving_app.handle(StartTimer())
        mock_gateway.save.reset_mock()

        saving_app.tick(1500)

        (snapshot,) = saved_snapshots(mock_gateway)
        assert snapshot.state.stats.total_sessions_completed == 1
        assert snapshot.state.session.phase is Phase.SHORT_BREAK

    def test_sink_failure_does_not_stop_delivery(self, app, notifier, audio):
        from pomoterm.core.exceptions import SinkFailure

        notifier.notify.side_effect = SinkFailure("no notify-send")
        app.handle(StartTimer())

        app.tick(1500)

        audio.play.assert_called_once()
        assert app.engine.phase is Phase.SHORT_BREAK


# ---------------------------------------------------------------------------
# Commands and persistence
# ---------------------------------------------------------------------------


class TestCommands:
    @pytest.mark.parametrize(
        "command",
        [
            CreateTask("a"),
            StartTimer(),
            ReorderTask(1, 0),
            MoveTask(1, 1),
            AdjustSetting("sound"),
        ],
    )
    def test_mutating_commands_save(self, saving_app, mock_gateway, command):
        saving_app.tasks.create("existing")

        saving_app.handle(command)

        assert mock_gateway.save.call_count == 1

    @pytest.mark.parametrize("command", [ShowView("timer"), OpenSettings(), Quit()])
    def test_view_commands_do_not_save(self, saving_app, mock_gateway, command):
        saving_app.handle(command)

        mock_gateway.save.assert_not_called()

    def test_rejected_command_leaves_notice(self, saving_app, mock_gateway):
        result = saving_app.handle(PauseResume())

        assert result is None
        assert "idle" in saving_app.messages[-1]
        mock_gateway.save.assert_not_called()

    def test_unknown_task_leaves_notice(self, app):
        app.handle(CompleteTask(99))
        app.handle(UncompleteTask(99))

        assert len(app.messages) == 2
        assert "#99" in app.messages[0]

    def test_empty_title_leaves_notice(self, app):
        app.handle(CreateTask("   "))

        assert app.tasks.active == []
        assert "empty" in app.messages[-1]

    def test_start_with_bad_task_still_starts(self, saving_app, mock_gateway):
        saving_app.handle(StartTimer(7))

        assert saving_app.engine.phase is Phase.WORK
        assert "#7" in saving_app.messages[-1]
        assert mock_gateway.save.call_count == 1

    def test_messages_are_bounded(self, app):
        for _ in range(20):
            app.handle(SkipPhase())

        assert len(app.messages) == 5

    def test_quit(self, app):
        app.handle(Quit())

        assert app.should_quit is True


class TestViews:
    def test_settings_returns_to_previous_view(self, app):
        app.handle(ShowView("statistics"))
        app.handle(OpenSettings())

        assert app.view == "settings"

        app.handle(OpenSettings())
        app.handle(CloseSettings())

        assert app.view == "statistics"


class TestAdjustSetting:
    def test_duration_steps_in_minutes(self, app):
        app.handle(AdjustSetting("work_duration"))

        assert app.config.timer.work_duration == 1560

    def test_duration_floor_is_one_minute(self, app):
        app.config.timer.short_break_duration = 60

        app.handle(AdjustSetting("short_break_duration", increase=False))

        assert app.config.timer.short_break_duration == 60

    def test_interval_floor(self, app):
        app.config.timer.long_break_interval = 1

        app.handle(AdjustSetting("long_break_interval", increase=False))

        assert app.config.timer.long_break_interval == 1

    def test_theme_cycles(self, app):
        app.handle(AdjustSetting("theme", increase=False))

        assert app.config.timer.theme == "nord"

    def test_toggles_update_sinks(self, app, notifier, audio):
        app.handle(AdjustSetting("desktop_notifications"))
        app.handle(AdjustSetting("sound"))

        assert app.config.timer.desktop_notifications is False
        assert notifier.enabled is False
        assert audio.enabled is False

    def test_engine_sees_new_durations(self, app):
        app.handle(AdjustSetting("long_break_interval", increase=False))
        app.handle(StartTimer())
        for _ in range(4):
            app.handle(SkipPhase())

        assert app.handle(SkipPhase()).to_phase is Phase.LONG_BREAK


class TestLifecycle:
    def test_restores_session_paused(self, make_app):
        snapshot = Snapshot(
            state=StateFile(session=SessionRecord(phase=Phase.WORK, remaining=500, elapsed=1000))
        )

        app = make_app(snapshot)

        assert app.engine.phase is Phase.WORK
        assert app.engine.paused is True
        assert app.engine.remaining == 500

    def test_load_falls_back_on_failure(self):
        gateway = MagicMock()
        fallback = Snapshot(config=AppConfig())
        gateway.load.side_effect = PersistenceFailure("bad state.json", fallback=fallback)

        app = PomodoroApp.load(gateway, notifier=MagicMock(), audio=MagicMock())

        assert app.config == fallback.config
        assert "bad state.json" in app.messages[-1]

    def test_snapshot_is_a_copy(self, app):
        app.handle(CreateTask("a"))
        snapshot = app.snapshot()

        app.handle(CreateTask("b"))
        app.tasks.get(1).completed_pomodoros = 3

        assert len(snapshot.state.active_tasks) == 1
        assert snapshot.state.active_tasks[0].completed_pomodoros == 0
        assert snapshot.state.next_task_id == 2

    def test_shutdown_saves_and_closes(self, saving_app, mock_gateway):
        saving_app.shutdown()

        mock_gateway.save.assert_called_once()
        saving_app.handle(CreateTask("after"))
        mock_gateway.save.assert_called_once()

    def test_collect_warnings(self, app):
        app.dispatcher.warnings.put("Could not save: read-only")

        app.collect_warnings()

        assert list(app.messages) == ["Could not save: read-only"]
