"""Command 'delete' of todo-cli"""

import typer

from todo_cli.services.context_manager import open_repository
from todo_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import parse_task_id, print_usage


@command_wrapper
def delete(
    task_id: str | None = typer.Argument(None, help="Todo ID"),
) -> None:
    """Delete a todo."""
    if task_id is None:
        print_usage("todo delete <id>")
        return

    repository = open_repository()
    task = repository.delete(parse_task_id(task_id))
    format_success(f"Deleted todo #{task.id}: {task.title}")
