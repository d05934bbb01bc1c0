"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from todo_cli.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Custom Typer group for unknown commands.

    Prints the attempted name, close matches ("Did you mean this?") and the
    help, then exits with status 0 without running anything.
    """

    def resolve_command(self, ctx, args):
        """Override to provide command suggestions on errors."""
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            from todo_cli.commands.help_command import show_help

            attempted = args[0]
            # Hidden aliases are valid targets for suggestions too
            available_commands = list(self.commands.keys())
            suggestions = get_close_matches(
                attempted, available_commands, n=3, cutoff=0.6
            )

            console = get_console()
            console.print(f"[red]Unknown command:[/red] {escape(attempted)}")
            if suggestions:
                if len(suggestions) == 1:
                    console.print("[yellow]Did you mean this?[/yellow]")
                else:
                    console.print("[yellow]Did you mean one of these?[/yellow]")
                for suggestion in suggestions:
                    console.print(f"        {suggestion}")
            console.print()
            show_help()
            raise typer.Exit(0) from e
