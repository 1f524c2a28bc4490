"""Interactive full-screen timer."""

import typer
from rich.live import Live

from pomoterm.core.app import PomodoroApp
from pomoterm.core.dispatcher import Dispatcher
from pomoterm.core.loop import EventLoop
from pomoterm.models.commands import StartTimer
from pomoterm.models.config_models import TimerSettings
from pomoterm.services.sinks import check_audio_dependencies
from pomoterm.ui.display import AppDisplay, format_duration
from pomoterm.ui.input_router import InputRouter
from pomoterm.ui.keyboard import KeyboardHandler, KeyboardInput
from pomoterm.utils.ui.console import get_console
from pomoterm.utils.ui.formatters import format_warning

from .decorators import command_wrapper
from .utils import get_gateway

console = get_console()


def apply_overrides(
    app: PomodoroApp,
    work: int | None = None,
    short: int | None = None,
    long: int | None = None,
    interval: int | None = None,
) -> None:
    """Replace stored timer settings with command-line values, in minutes."""
    overrides = {
        "work_duration": work * 60 if work is not None else None,
        "short_break_duration": short * 60 if short is not None else None,
        "long_break_duration": long * 60 if long is not None else None,
        "long_break_interval": interval,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return
    settings = TimerSettings.model_validate(
        {**app.config.timer.model_dump(), **overrides}
    )
    app.apply_timer_settings(settings)


def run_app(app: PomodoroApp) -> None:
    """Drive the app from the keyboard until the user quits."""
    router = InputRouter(app)
    display = AppDisplay(router, console=console)
    keyboard = KeyboardHandler()

    try:
        with Live(
            display.create_layout(),
            console=console,
            refresh_per_second=4,
            screen=True,
        ) as live:
            loop = EventLoop(
                app,
                KeyboardInput(keyboard, router),
                render=lambda _: live.update(display.create_layout()),
            )
            loop.run()
    except KeyboardInterrupt:
        # EventLoop.run has already saved on the way out
        pass
    finally:
        keyboard.stop()


@command_wrapper
def run(
    work: int = typer.Option(None, "--work", "-w", help="Pomodoro length in minutes"),
    short: int = typer.Option(None, "--short", "-s", help="Short break in minutes"),
    long: int = typer.Option(None, "--long", "-l", help="Long break in minutes"),
    interval: int = typer.Option(
        None, "--interval", "-i", help="Pomodoros before a long break"
    ),
    task_id: int = typer.Option(None, "--task", "-t", help="Start right away on this task"),
):
    """Open the full-screen Pomodoro timer."""
    app = PomodoroApp.load(get_gateway(), dispatcher=Dispatcher())
    apply_overrides(app, work, short, long, interval)

    if app.config.timer.sound:
        available, reason = check_audio_dependencies()
        if not available:
            format_warning(f"Sound is on but unavailable: {reason}")

    if task_id is not None:
        app.handle(StartTimer(task_id))
        app.view = "timer"

    run_app(app)

    stats = app.stats
    console.print(
        f"[bold green]🍅 {stats.total_sessions_completed} pomodoros[/bold green] "
        f"[dim]· {format_duration(stats.total_focused_seconds)} focused[/dim]"
    )
