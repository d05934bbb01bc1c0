"""Command 'add' of todo-cli"""

from datetime import date

import typer

from todo_cli.exceptions import ValidationError
from todo_cli.services.context_manager import open_repository
from todo_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import join_words, print_usage

USAGE = "todo add <title> [description]"


def parse_due_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` due date; empty means no due date."""
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(
            f"Invalid due date '{value}'. Use the YYYY-MM-DD format."
        ) from None


@command_wrapper
def add(
    title: str | None = typer.Argument(None, help="Todo title"),
    description: list[str] | None = typer.Argument(
        None, help="Optional description (remaining words)"
    ),
    priority: str = typer.Option(
        "low", "--priority", "-p", help="Priority: low, medium, high (or 1-3)"
    ),
    category: str = typer.Option("", "--category", "-c", help="Category label"),
    due: str | None = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
) -> None:
    """
    Add a new todo.

    Examples:
      todo add "Buy groceries" "Get milk and bread"
      todo add "Pay rent" --priority high --due 2026-11-01 --category home
    """
    if title is None:
        print_usage(USAGE)
        return

    due_date = parse_due_date(due)
    repository = open_repository()
    task = repository.add(
        title,
        join_words(description),
        priority=priority,
        category=category,
        due_date=due_date,
    )
    format_success(f"Added todo #{task.id}: {task.title}")
