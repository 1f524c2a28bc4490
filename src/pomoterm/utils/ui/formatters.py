"""One-line status messages for the one-shot commands."""

from .console import get_console


def format_error(message: str) -> None:
    get_console().print(f"[error]Error:[/error] {message}")


def format_success(message: str) -> None:
    get_console().print(f"[success]✓[/success] {message}")


def format_warning(message: str) -> None:
    get_console().print(f"[warning]Warning:[/warning] {message}")


def format_hint(message: str) -> None:
    """A dimmed follow-up line, e.g. what to run next."""
    get_console().print(f"[hint]{message}[/hint]")
