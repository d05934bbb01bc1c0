"""Cloud commands: upload and download the todo list with Google Drive."""

from todo_cli.services.context_manager import drive_remote, open_repository
from todo_cli.services.sync_service import SyncService
from todo_cli.utils.ui.formatters import format_progress, format_success

from .decorators import command_wrapper


@command_wrapper
def upload() -> None:
    """Upload todos to Google Drive."""
    format_progress("Uploading todos to Google Drive...")
    repository = open_repository()
    remote = drive_remote()
    SyncService(repository, remote).push()
    format_success(
        f"{remote.last_action.capitalize()} file '{remote.file_name}' "
        f"in Google Drive (ID: {remote.last_file_id})"
    )


@command_wrapper
def download() -> None:
    """Download todos from Google Drive, replacing the local list."""
    format_progress("Downloading todos from Google Drive...")
    repository = open_repository()
    result = SyncService(repository, drive_remote()).pull()
    format_success(f"Downloaded and saved {result.tasks_total} todos from Google Drive")
