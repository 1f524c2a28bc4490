"""Single-consumer event loop.

Clock ticks and user commands are two independent producers. The loop
waits on both at once (``InputSource.poll`` with the time left until the
next tick as timeout) and processes at most one event per iteration: a due
tick first, otherwise the command that arrived, if any.
"""

from __future__ import annotations

import queue
from collections.abc import Callable
from typing import Protocol

from pomoterm.core.app import PomodoroApp
from pomoterm.core.clock import Clock
from pomoterm.models.commands import Command
from pomoterm.utils.logger import get_logger


class InputSource(Protocol):
    """Anything that can wait up to ``timeout`` seconds for a command."""

    def poll(self, timeout: float) -> Command | None: ...


class QueueInput:
    """Commands pushed from any thread through a queue."""

    def __init__(self):
        self._queue: queue.Queue[Command] = queue.Queue()

    def put(self, command: Command) -> None:
        self._queue.put(command)

    def poll(self, timeout: float) -> Command | None:
        try:
            if timeout > 0:
                return self._queue.get(timeout=timeout)
            return self._queue.get_nowait()
        except queue.Empty:
            return None


class EventLoop:
    """Runs the app until a Quit command arrives."""

    def __init__(
        self,
        app: PomodoroApp,
        source: InputSource,
        clock: Clock | None = None,
        render: Callable[[PomodoroApp], None] | None = None,
    ):
        self.app = app
        self.source = source
        self.clock = clock or Clock(app.config.ui.tick_interval)
        self.render = render
        self.logger = get_logger()

    def step(self) -> None:
        """One iteration: process a tick or at most one command."""
        if self.clock.is_due():
            self.app.tick(self.clock.tick())
        else:
            command = self.source.poll(self.clock.time_until_tick())
            if command is not None:
                self.app.handle(command)
        self.app.collect_warnings()
        if self.render is not None:
            self.render(self.app)

    def run(self) -> None:
        """Loop until quit, then save and drain side effects."""
        self.logger.info("event loop started")
        try:
            while not self.app.should_quit:
                self.step()
        finally:
            self.app.shutdown()
            self.logger.info("event loop stopped")
