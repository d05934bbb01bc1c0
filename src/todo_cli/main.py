"""Main entry point for todo-cli."""

from pathlib import Path

import typer

from todo_cli.commands import (
    add_command,
    complete_command,
    config,
    delete_command,
    drive_command,
    edit_command,
    help_command,
    list_command,
    organize_command,
    sync,
    tui_command,
)
from todo_cli.services.config_service import get_config_service
from todo_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="todo",
    cls=SuggestingGroup,
    help="A command-line todo manager with network and Google Drive sync",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        envvar="TODO_FILE",
        help="Todo file to use instead of the configured storage.path",
    ),
) -> None:
    """A command-line todo manager with network and Google Drive sync."""
    get_config_service().override_storage_path(file)
    if ctx.invoked_subcommand is None:
        help_command.show_help()


def _register(func, name: str, *aliases: str) -> None:
    app.command(name)(func)
    for alias in aliases:
        app.command(alias, hidden=True)(func)


# Local operations
_register(add_command.add, "add", "a")
_register(list_command.list_todos, "list", "l")
_register(complete_command.complete, "complete", "c")
_register(delete_command.delete, "delete", "d")
_register(edit_command.edit, "edit", "e")
_register(organize_command.sort, "sort")
_register(organize_command.categories, "categories", "cat")
_register(tui_command.tui, "tui")

# Network operations
_register(sync.save, "save", "s")
_register(sync.load, "load", "ld")
_register(sync.sync, "sync")

# Cloud operations
_register(drive_command.upload, "upload", "up")
_register(drive_command.download, "download", "down")

# Utility
_register(help_command.help_command, "help", "h")
app.add_typer(config.app, name="config", help="Configuration management")


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
