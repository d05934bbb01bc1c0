"""Command 'list' of todo-cli"""

import typer

from todo_cli.services.config_service import get_config_service
from todo_cli.services.context_manager import open_repository
from todo_cli.utils.ui.formatters import format_json, format_tasks_table

from .decorators import command_wrapper


@command_wrapper
def list_todos(
    pending: bool = typer.Option(False, "--pending", help="Only show pending todos"),
    completed: bool = typer.Option(
        False, "--completed", help="Only show completed todos"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List all todos."""
    repository = open_repository()
    tasks = repository.tasks
    if pending and not completed:
        tasks = [task for task in tasks if not task.completed]
    elif completed and not pending:
        tasks = [task for task in tasks if task.completed]

    if json_opt:
        format_json([task.model_dump(mode="json", exclude_none=True) for task in tasks])
        return

    ui = get_config_service().config.ui
    format_tasks_table(tasks, date_format=ui.date_format, due_soon_hours=ui.due_soon_hours)
