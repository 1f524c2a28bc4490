"""Tests for the notification and audio sinks."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pomoterm.core.exceptions import SinkFailure
from pomoterm.models.session import Phase
from pomoterm.services.sinks import AudioSink, NotificationSink


class TestNotificationSink:
    @pytest.mark.parametrize(
        "phase, next_phase, expected",
        [
            (Phase.WORK, Phase.SHORT_BREAK, ("Pomodoro Finished!", "Time for your Short Break.")),
            (Phase.WORK, Phase.LONG_BREAK, ("Pomodoro Finished!", "Time for your Long Break.")),
            (Phase.SHORT_BREAK, Phase.WORK, ("Short Break Finished!", "Time for your Pomodoro.")),
        ],
    )
    def test_message_for(self, phase, next_phase, expected):
        assert NotificationSink.message_for(phase, next_phase) == expected

    def test_message_when_timer_stops(self):
        summary, body = NotificationSink.message_for(Phase.LONG_BREAK, Phase.IDLE)

        assert summary == "Long Break Finished!"
        assert "stopped" in body

    def test_linux_command(self):
        sink = NotificationSink(platform="linux")

        assert sink.build_command("Title", "Body") == [
            "notify-send",
            "--icon=dialog-information",
            "Title",
            "Body",
        ]

    def test_macos_command_escapes_quotes(self):
        sink = NotificationSink(platform="darwin")

        command = sink.build_command('Say "hi"', "Body")

        assert command[:2] == ["osascript", "-e"]
        assert 'with title "Say \\"hi\\""' in command[2]

    def test_unsupported_platform(self):
        with pytest.raises(SinkFailure):
            NotificationSink(platform="win32").build_command("a", "b")

    @patch("pomoterm.services.sinks.subprocess.run")
    def test_disabled_does_nothing(self, mock_run):
        NotificationSink(enabled=False, platform="linux").notify(Phase.WORK, Phase.SHORT_BREAK)

        mock_run.assert_not_called()

    @patch("pomoterm.services.sinks.shutil.which", return_value="/usr/bin/notify-send")
    @patch("pomoterm.services.sinks.subprocess.run")
    def test_notify_runs_command(self, mock_run, _which):
        NotificationSink(platform="linux").notify(Phase.WORK, Phase.SHORT_BREAK)

        args, kwargs = mock_run.call_args
        assert args[0][0] == "notify-send"
        assert "Pomodoro Finished!" in args[0]
        assert kwargs["check"] is True
        assert kwargs["timeout"] > 0

    @patch("pomoterm.services.sinks.shutil.which", return_value=None)
    @patch("pomoterm.services.sinks.subprocess.run")
    def test_missing_tool(self, mock_run, _which):
        with pytest.raises(SinkFailure, match="not found"):
            NotificationSink(platform="linux").notify(Phase.WORK, Phase.SHORT_BREAK)

        mock_run.assert_not_called()

    @patch("pomoterm.services.sinks.shutil.which", return_value="/usr/bin/notify-send")
    @patch(
        "pomoterm.services.sinks.subprocess.run",
        side_effect=subprocess.CalledProcessError(1, "notify-send"),
    )
    def test_command_failure(self, _run, _which):
        with pytest.raises(SinkFailure):
            NotificationSink(platform="linux").notify(Phase.WORK, Phase.SHORT_BREAK)


class TestAudioSink:
    def test_frequencies(self):
        assert AudioSink.frequencies_for(Phase.WORK) == (440.0, 660.0)
        assert AudioSink.frequencies_for(Phase.SHORT_BREAK) == (660.0, 440.0)

    def test_build_chime(self):
        np = pytest.importorskip("numpy")

        chime = AudioSink().build_chime(Phase.WORK)

        assert chime.dtype == np.float32
        assert len(chime) == 2 * AudioSink.SAMPLE_RATE * AudioSink.TONE_MS // 1000
        assert float(abs(chime).max()) <= AudioSink.AMPLITUDE + 1e-6

    def test_disabled_does_nothing(self):
        sink = AudioSink(enabled=False)
        with patch.object(sink, "build_chime") as mock_build:
            sink.play(Phase.WORK)

        mock_build.assert_not_called()

    @patch("pomoterm.services.sinks.SOUNDDEVICE_AVAILABLE", False)
    def test_missing_dependencies(self):
        with pytest.raises(SinkFailure, match="sounddevice"):
            AudioSink().play(Phase.WORK)

    @patch("pomoterm.services.sinks.NUMPY_AVAILABLE", True)
    @patch("pomoterm.services.sinks.SOUNDDEVICE_AVAILABLE", True)
    def test_play(self):
        sink = AudioSink()
        mock_sd = MagicMock()
        with patch("pomoterm.services.sinks.sd", mock_sd, create=True), patch.object(
            sink, "build_chime", return_value="samples"
        ):
            sink.play(Phase.WORK)

        mock_sd.play.assert_called_once_with("samples", samplerate=AudioSink.SAMPLE_RATE)
        mock_sd.wait.assert_called_once()

    @patch("pomoterm.services.sinks.NUMPY_AVAILABLE", True)
    @patch("pomoterm.services.sinks.SOUNDDEVICE_AVAILABLE", True)
    def test_device_error(self):
        sink = AudioSink()
        mock_sd = MagicMock()
        mock_sd.play.side_effect = RuntimeError("no output device")
        with patch("pomoterm.services.sinks.sd", mock_sd, create=True), patch.object(
            sink, "build_chime", return_value="samples"
        ):
            with pytest.raises(SinkFailure, match="no output device"):
                sink.play(Phase.WORK)
