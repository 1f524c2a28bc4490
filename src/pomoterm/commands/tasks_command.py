"""Task list commands."""

import typer
from rich.table import Table

from pomoterm.ui.display import format_duration
from pomoterm.utils.ui.console import get_console
from pomoterm.utils.ui.formatters import format_hint, format_success

from .decorators import command_wrapper
from .utils import open_app, save

console = get_console()
app = typer.Typer(help="Manage the task list")


@app.command("list")
@command_wrapper
def list_tasks(
    all_tasks: bool = typer.Option(
        False, "--all", "-a", help="Include completed tasks"
    ),
):
    """List active tasks in priority order."""
    pomodoro = open_app()

    table = Table(title="Tasks", show_header=True)
    table.add_column("Pos", justify="right")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Task")
    table.add_column("🍅", justify="right")
    table.add_column("Focused", justify="right")
    table.add_column("Status", justify="center")

    for task in pomodoro.tasks.active:
        table.add_row(
            str(task.order + 1),
            str(task.id),
            task.title,
            str(task.completed_pomodoros),
            format_duration(task.focused_seconds),
            "○",
        )
    if all_tasks:
        for task in pomodoro.tasks.completed:
            table.add_row(
                "-",
                str(task.id),
                f"[dim]{task.title}[/dim]",
                str(task.completed_pomodoros),
                format_duration(task.focused_seconds),
                "[green]✓[/green]",
            )

    if not table.row_count:
        console.print("[yellow]No tasks found[/yellow]")
        return
    console.print(table)


@app.command("add")
@command_wrapper
def add_task(title: str = typer.Argument(..., help="Task title")):
    """Add a task to the end of the list."""
    pomodoro = open_app()
    task = pomodoro.tasks.create(title)
    save(pomodoro)
    format_success(f"Added task #{task.id}: {task.title}")
    format_hint(f"Start it with: pomoterm run --task {task.id}")


@app.command("done")
@command_wrapper
def complete_task(task_id: int = typer.Argument(..., help="Task ID")):
    """Mark a task as completed."""
    pomodoro = open_app()
    task = pomodoro.tasks.complete(task_id)
    save(pomodoro)
    format_success(f"Completed task #{task.id}: {task.title}")


@app.command("undo")
@command_wrapper
def uncomplete_task(task_id: int = typer.Argument(..., help="Task ID")):
    """Move a completed task back to the active list."""
    pomodoro = open_app()
    task = pomodoro.tasks.uncomplete(task_id)
    save(pomodoro)
    format_success(f"Reopened task #{task.id}: {task.title}")


@app.command("rm")
@command_wrapper
def delete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a task permanently."""
    pomodoro = open_app()
    task = pomodoro.tasks.get(task_id)
    if task is not None and not yes:
        typer.confirm(f"Delete task #{task.id} '{task.title}'?", abort=True)
    deleted = pomodoro.tasks.delete(task_id)
    save(pomodoro)
    format_success(f"Deleted task #{deleted.id}")


@app.command("move")
@command_wrapper
def move_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    position: int = typer.Argument(..., help="New position, starting at 1"),
):
    """Move an active task to a new position."""
    pomodoro = open_app()
    task = pomodoro.tasks.reorder(task_id, position - 1)
    save(pomodoro)
    format_success(f"Moved task #{task.id} to position {task.order + 1}")
