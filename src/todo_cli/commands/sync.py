"""Network commands: save, load and sync with a generic HTTP endpoint."""

import typer

from todo_cli.services.context_manager import http_remote, open_repository
from todo_cli.services.sync_service import SyncService
from todo_cli.utils.ui.formatters import (
    format_error,
    format_info,
    format_progress,
    format_success,
)

from .decorators import command_wrapper
from .utils import print_usage

URL_HELP = "Server URL, e.g. http://localhost:8080"


@command_wrapper
def save(
    server_url: str | None = typer.Argument(None, help=URL_HELP),
    username: str | None = typer.Argument(None, help="Basic auth username"),
    password: str | None = typer.Argument(None, help="Basic auth password"),
) -> None:
    """Save todos to a network endpoint."""
    if server_url is None:
        print_usage("todo save <server_url> [username] [password]")
        return

    repository = open_repository()
    with http_remote(server_url, username, password) as remote:
        result = SyncService(repository, remote).push()
    format_success(f"Successfully saved {result.tasks_total} todos to {server_url}")


@command_wrapper
def load(
    server_url: str | None = typer.Argument(None, help=URL_HELP),
    username: str | None = typer.Argument(None, help="Basic auth username"),
    password: str | None = typer.Argument(None, help="Basic auth password"),
) -> None:
    """Load todos from a network endpoint, replacing the local list."""
    if server_url is None:
        print_usage("todo load <server_url> [username] [password]")
        return

    repository = open_repository()
    with http_remote(server_url, username, password) as remote:
        result = SyncService(repository, remote).pull()
    format_success(f"Successfully loaded {result.tasks_total} todos from {server_url}")


@command_wrapper
def sync(
    server_url: str | None = typer.Argument(None, help=URL_HELP),
    username: str | None = typer.Argument(None, help="Basic auth username"),
    password: str | None = typer.Argument(None, help="Basic auth password"),
) -> None:
    """
    Sync with a network endpoint.

    Remote todos missing locally are merged in (local copies win on the same
    id), the result is saved locally and uploaded. If the remote cannot be
    reached, the local todos are uploaded unchanged. A remote document that
    cannot be decoded is reported and left untouched.
    """
    if server_url is None:
        print_usage("todo sync <server_url> [username] [password]")
        return

    format_progress("Syncing with network...")
    repository = open_repository()
    with http_remote(server_url, username, password) as remote:
        result = SyncService(repository, remote).sync()

    if result.fell_back:
        format_error(f"Error loading from network: {result.fetch_error}")
        format_info("Saved local todos to network instead")
        format_success(f"Successfully saved {result.tasks_total} todos to {server_url}")
        return

    format_success(f"Successfully synced {result.tasks_total} todos with {server_url}")
    if result.tasks_new:
        format_info(f"{result.tasks_new} todos added from the network")
