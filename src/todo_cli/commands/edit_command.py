"""Command 'edit' of todo-cli"""

import typer

from todo_cli.services.context_manager import open_repository
from todo_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import join_words, parse_task_id, print_usage


@command_wrapper
def edit(
    task_id: str | None = typer.Argument(None, help="Todo ID"),
    title: str | None = typer.Argument(None, help="New title"),
    description: list[str] | None = typer.Argument(
        None, help="New description (remaining words)"
    ),
) -> None:
    """
    Edit a todo's title and description.

    The description is replaced as well; leaving it out clears it.
    """
    if task_id is None or title is None:
        print_usage("todo edit <id> <new_title> [new_description]")
        return

    task_id_value = parse_task_id(task_id)
    repository = open_repository()
    old_title = repository.get(task_id_value).title
    task = repository.edit(task_id_value, title, join_words(description))
    format_success(f"Updated todo #{task.id}: {old_title} → {task.title}")
