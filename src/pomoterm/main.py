"""Main entry point for pomoterm."""

import typer

from pomoterm import __version__
from pomoterm.commands import config_command, run_command, stats_command, tasks_command
from pomoterm.utils.logger import log_path
from pomoterm.utils.typer_helpers import SuggestingGroup
from pomoterm.utils.ui.console import get_console

app = typer.Typer(
    name="pomoterm",
    cls=SuggestingGroup,
    help="A terminal Pomodoro timer with a task list and statistics",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks_command.app, name="tasks", help="Task management commands")
app.add_typer(config_command.app, name="config", help="Timer settings")
app.command("run")(run_command.run)
app.command("stats")(stats_command.show_stats)


@app.command()
def version() -> None:
    """Show version information and where the log file is."""
    console.print(f"[accent]pomoterm[/accent] version {__version__}")
    console.print(f"[hint]Log file: {log_path()}[/hint]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
