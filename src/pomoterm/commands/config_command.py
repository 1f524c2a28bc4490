"""Settings commands."""

import typer
from rich.table import Table

from pomoterm.models.config_models import TimerSettings
from pomoterm.services.config_service import get_config_service
from pomoterm.utils.exit_codes import ERROR_INVALID_ARGS
from pomoterm.utils.ui.console import get_console
from pomoterm.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="View and change timer settings")

_DURATION_KEYS = ("work_duration", "short_break_duration", "long_break_duration")


@app.command("show")
@command_wrapper
def show_config():
    """Show the current settings."""
    svc = get_config_service()
    timer = svc.load_config().timer

    table = Table(title="Settings", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in timer.model_dump().items():
        if key in _DURATION_KEYS:
            value = f"{value // 60} min"
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"[dim]{svc.config_path}[/dim]")


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Setting name, e.g. work_duration"),
    value: str = typer.Argument(..., help="New value; durations in minutes"),
):
    """Change one setting."""
    if key not in TimerSettings.model_fields:
        raise AppError(
            f"Unknown setting '{key}'. Valid: {', '.join(TimerSettings.model_fields)}",
            exit_code=ERROR_INVALID_ARGS,
        )

    parsed: object = value
    if key in _DURATION_KEYS:
        try:
            parsed = int(value) * 60
        except ValueError as e:
            raise AppError(
                f"{key} must be a whole number of minutes", exit_code=ERROR_INVALID_ARGS
            ) from e

    svc = get_config_service()
    config = svc.load_config()
    config.timer = TimerSettings.model_validate({**config.timer.model_dump(), key: parsed})
    svc.save_config(config)
    format_success(f"{key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Restore the default settings."""
    if not yes:
        typer.confirm("Reset all settings to defaults?", abort=True)
    get_config_service().reset_config()
    format_success("Settings reset to defaults")
