"""pomoterm - a terminal Pomodoro timer with a prioritized task list."""

__version__ = "0.1.0"
