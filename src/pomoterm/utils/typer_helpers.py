"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from pomoterm.utils.ui.console import get_console


def suggest_commands(attempted: str, known: list[str]) -> list[str]:
    """Commands the user probably meant: prefix matches first, then typos."""
    prefixed = [name for name in known if name.startswith(attempted)]
    if prefixed:
        return sorted(prefixed)
    return get_close_matches(attempted, known, n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """A command group that answers unknown commands with suggestions."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = suggest_commands(attempted, sorted(self.commands))
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[error]Error:[/error] unknown command "{attempted}" for "{ctx.info_name}"\n'
            )
            heading = "Did you mean this?" if len(suggestions) == 1 else "Did you mean one of these?"
            console.print(f"[warning]{heading}[/warning]")
            for suggestion in suggestions:
                console.print(f"    {ctx.info_name} {suggestion}")
            raise typer.Exit(2) from e
