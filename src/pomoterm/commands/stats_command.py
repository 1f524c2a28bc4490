"""Statistics command."""

import typer
from rich.table import Table

from pomoterm.ui.display import format_duration
from pomoterm.utils.ui.console import get_console

from .decorators import command_wrapper
from .utils import open_app

console = get_console()


@command_wrapper
def show_stats(
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show totals and per-task focus time."""
    pomodoro = open_app()
    stats = pomodoro.stats
    tasks = pomodoro.tasks.active + pomodoro.tasks.completed

    if output == "json":
        console.print_json(
            data={
                "total_sessions_completed": stats.total_sessions_completed,
                "total_focused_seconds": stats.total_focused_seconds,
                "tasks": [
                    t.model_dump(mode="json", include={"id", "title", "completed_pomodoros", "focused_seconds", "completed_at"})
                    for t in tasks
                ],
            }
        )
        return

    console.print("\n[bold cyan]📊 Statistics[/bold cyan]\n")
    console.print(f"Total Pomodoros: [bold]{stats.total_sessions_completed}[/bold]")
    console.print(f"Total Time Focused: [bold]{format_duration(stats.total_focused_seconds)}[/bold]")

    credited = [t for t in tasks if t.completed_pomodoros]
    if not credited:
        console.print("\n[dim]No sessions recorded for any task yet[/dim]\n")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Task")
    table.add_column("🍅", justify="right")
    table.add_column("Focused", justify="right")
    table.add_column("Status", justify="center")
    for task in sorted(credited, key=lambda t: t.focused_seconds, reverse=True):
        table.add_row(
            str(task.id),
            task.title,
            str(task.completed_pomodoros),
            format_duration(task.focused_seconds),
            "[green]✓[/green]" if task.is_completed else "○",
        )
    console.print()
    console.print(table)
