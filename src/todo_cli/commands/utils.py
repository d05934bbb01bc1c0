"""Shared argument handling for commands."""

import typer

from todo_cli.utils import exit_codes
from todo_cli.utils.ui.console import get_console

console = get_console()


def print_usage(usage: str) -> None:
    """Print a one-line usage hint for a command invoked without arguments."""
    console.print(f"Usage: {usage}", highlight=False, markup=False)


def parse_task_id(value: str) -> int:
    """Parse a todo id given on the command line."""
    try:
        return int(value)
    except ValueError:
        console.print("[red]Invalid ID. Please provide a number.[/red]")
        raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from None


def join_words(words: list[str] | None) -> str:
    """Join a variadic trailing argument back into one string."""
    return " ".join(words) if words else ""
