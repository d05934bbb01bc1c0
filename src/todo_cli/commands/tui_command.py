"""Command 'tui' of todo-cli"""

from todo_cli.services.config_service import get_config_service

from .decorators import command_wrapper


@command_wrapper
def tui() -> None:
    """Open the interactive terminal UI."""
    # Lazy import keeps Textual out of plain CLI invocations
    from todo_cli.ui.app import run_tui

    run_tui(get_config_service().storage_path)
