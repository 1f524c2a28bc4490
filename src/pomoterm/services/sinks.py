"""Alert sinks fired once per completed phase.

Both sinks raise SinkFailure when delivery fails. They run on the
dispatcher's worker thread, which logs the failure and moves on.
"""

from __future__ import annotations

import shutil
import subprocess
import sys

from pomoterm.core.exceptions import SinkFailure
from pomoterm.models.session import Phase

SOUNDDEVICE_AVAILABLE = False
NUMPY_AVAILABLE = False

try:
    import sounddevice as sd

    SOUNDDEVICE_AVAILABLE = True
except (ImportError, OSError):
    # OSError: sounddevice is installed but PortAudio is missing
    pass

try:
    import numpy as np

    NUMPY_AVAILABLE = True
except ImportError:
    pass

_NOTIFY_TIMEOUT = 5  # seconds


def check_audio_dependencies() -> tuple[bool, str]:
    """Check if audio dependencies are available."""
    if not SOUNDDEVICE_AVAILABLE:
        return False, "sounddevice not installed. Run: pip install sounddevice"
    if not NUMPY_AVAILABLE:
        return False, "numpy not installed. Run: pip install numpy"
    return True, ""


class NotificationSink:
    """Desktop notifications through the platform's own tool."""

    def __init__(self, enabled: bool = True, platform: str | None = None):
        self.enabled = enabled
        self.platform = platform or sys.platform

    @staticmethod
    def message_for(phase: Phase, next_phase: Phase | None = None) -> tuple[str, str]:
        """Return (summary, body) for a finished phase."""
        summary = f"{phase.label} Finished!"
        if next_phase is None or next_phase is Phase.IDLE:
            body = "Timer stopped. Press start when you are ready."
        else:
            body = f"Time for your {next_phase.label}."
        return summary, body

    def build_command(self, summary: str, body: str) -> list[str]:
        """Command line that shows the notification on this platform."""
        if self.platform == "darwin":
            script = (
                f"display notification {_applescript_str(body)} "
                f"with title {_applescript_str(summary)}"
            )
            return ["osascript", "-e", script]
        if self.platform.startswith("linux"):
            return ["notify-send", "--icon=dialog-information", summary, body]
        raise SinkFailure(f"Desktop notifications not supported on {self.platform}")

    def notify(self, phase: Phase, next_phase: Phase | None = None) -> None:
        if not self.enabled:
            return
        summary, body = self.message_for(phase, next_phase)
        command = self.build_command(summary, body)
        if shutil.which(command[0]) is None:
            raise SinkFailure(f"{command[0]} not found on PATH")
        try:
            subprocess.run(
                command,
                check=True,
                timeout=_NOTIFY_TIMEOUT,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise SinkFailure(f"Notification failed: {e}") from e


class AudioSink:
    """Two short sine tones; rising after Work, falling after a break."""

    SAMPLE_RATE = 44100
    TONE_MS = 150
    AMPLITUDE = 0.20

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    @staticmethod
    def frequencies_for(phase: Phase) -> tuple[float, float]:
        if phase is Phase.WORK:
            return 440.0, 660.0
        return 660.0, 440.0

    def build_chime(self, phase: Phase):
        """Samples for the chime as a float32 numpy array."""
        samples = int(self.SAMPLE_RATE * self.TONE_MS / 1000)
        t = np.arange(samples, dtype=np.float32) / self.SAMPLE_RATE
        tones = [
            self.AMPLITUDE * np.sin(2 * np.pi * freq * t)
            for freq in self.frequencies_for(phase)
        ]
        return np.concatenate(tones).astype(np.float32)

    def play(self, phase: Phase) -> None:
        if not self.enabled:
            return
        ok, reason = check_audio_dependencies()
        if not ok:
            raise SinkFailure(reason)
        try:
            sd.play(self.build_chime(phase), samplerate=self.SAMPLE_RATE)
            sd.wait()
        except Exception as e:
            raise SinkFailure(f"Audio playback failed: {e}") from e


def _applescript_str(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
