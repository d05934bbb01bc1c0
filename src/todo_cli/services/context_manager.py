"""Wiring for commands: the repository and the remote stores.

Usage Pattern:
    from todo_cli.services.context_manager import open_repository

    repository = open_repository()
    repository.add("Buy milk")

Commands never build stores themselves, so tests can patch these helpers.
"""

from __future__ import annotations

from todo_cli.adapters.json_store import JsonTaskStore
from todo_cli.adapters.remote import DriveRemoteStore, HttpRemoteStore
from todo_cli.adapters.remote.drive_auth import build_drive_service
from todo_cli.repositories import TaskRepository
from todo_cli.services.config_service import get_config_service
from todo_cli.utils.ui.formatters import format_warning


def open_repository() -> TaskRepository:
    """Open the task repository for the configured storage path.

    Load problems (corrupted or unreadable file) are shown as a warning and
    the session continues with an empty list.
    """
    config_svc = get_config_service()
    repository = TaskRepository.open(
        JsonTaskStore(config_svc.storage_path),
        backup_corrupt=config_svc.config.storage.backup_corrupt,
    )
    if repository.load_warning:
        format_warning(repository.load_warning)
    return repository


def http_remote(
    server_url: str, username: str | None = None, password: str | None = None
) -> HttpRemoteStore:
    """Build the generic HTTP remote store from the network settings."""
    network = get_config_service().config.network
    return HttpRemoteStore(
        server_url,
        username,
        password,
        timeout=network.timeout,
        endpoint=network.endpoint,
    )


def drive_remote() -> DriveRemoteStore:
    """Authenticate with Google Drive and build the Drive remote store."""
    drive = get_config_service().config.drive
    service = build_drive_service(drive.credentials_file, drive.token_file, drive.scopes)
    return DriveRemoteStore(service, drive.file_name)
