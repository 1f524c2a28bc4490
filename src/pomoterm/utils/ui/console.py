"""Shared rich Console for pomoterm.

One Console, carrying the named styles used by the message helpers, serves
both the one-shot commands and the full-screen timer.
"""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "hint": "dim",
        "accent": "bold cyan",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """The process-wide Console, one per ``highlight`` setting."""
    return Console(theme=THEME, highlight=highlight)
