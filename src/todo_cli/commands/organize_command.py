"""Commands 'sort' and 'categories' of todo-cli"""

from todo_cli.services.context_manager import open_repository
from todo_cli.utils.ui.formatters import format_category_summary, format_info

from .decorators import command_wrapper


@command_wrapper
def sort() -> None:
    """Sort todos by status, priority, due date and age."""
    repository = open_repository()
    repository.sort()
    format_info("Todos sorted by priority and due date")


@command_wrapper
def categories() -> None:
    """Show how many todos each category holds."""
    repository = open_repository()
    format_category_summary(repository.category_summary())
