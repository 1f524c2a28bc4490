"""Terminal keyboard input for the full-screen timer."""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from collections import deque
from typing import TYPE_CHECKING

from pomoterm.models.commands import Command

if TYPE_CHECKING:
    from pomoterm.ui.input_router import InputRouter

# Escape sequences sent by arrow keys, mapped to the names InputRouter uses
_ESCAPES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[3~": "delete",
}
_SPECIAL = {"\t": "tab", "\r": "enter", "\n": "enter", "\x7f": "backspace", "\x08": "backspace"}


class KeyboardHandler:
    """Non-blocking keyboard input in cbreak mode."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.fd = self.stream.fileno()
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Setup terminal for unbuffered input."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # Not a TTY (piped input)
            self.old_settings = None

    def _ready(self, timeout: float) -> bool:
        return bool(select.select([self.fd], [], [], max(0.0, timeout))[0])

    def get_key(self, timeout: float = 0.0) -> str | None:
        """Wait up to ``timeout`` seconds for a key.

        Returns a single character, or a name such as "up", "tab" or "esc"
        for special keys; None if nothing was pressed.
        """
        if not self._ready(timeout):
            return None
        char = os.read(self.fd, 1).decode("utf-8", errors="ignore")
        if char == "\x1b":
            sequence = char
            while len(sequence) < 4 and self._ready(0.01):
                sequence += os.read(self.fd, 1).decode("utf-8", errors="ignore")
                if sequence in _ESCAPES:
                    return _ESCAPES[sequence]
            return "esc" if sequence == "\x1b" else None
        return _SPECIAL.get(char, char)

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None


class KeyboardInput:
    """InputSource reading the keyboard and translating keys to commands.

    A key that maps to several commands is delivered one command per poll.
    """

    def __init__(self, keyboard: KeyboardHandler, router: InputRouter):
        self.keyboard = keyboard
        self.router = router
        self._pending: deque[Command] = deque()

    def poll(self, timeout: float) -> Command | None:
        if self._pending:
            return self._pending.popleft()
        key = self.keyboard.get_key(timeout)
        if key is None:
            return None
        self._pending.extend(self.router.route(key))
        return self._pending.popleft() if self._pending else None
