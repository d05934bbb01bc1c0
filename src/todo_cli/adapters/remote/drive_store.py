"""Google Drive remote store.

The collection lives in a single file with a well-known name. Storing
updates that file in place when it exists and creates it otherwise.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload
from pydantic import ValidationError as PydanticValidationError

from todo_cli.adapters.remote.base import RemoteStore
from todo_cli.exceptions import RemoteDecodeError, RemoteNotFoundError, TransportError
from todo_cli.models import TaskCollection

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "todos-backup.json"


class DriveRemoteStore(RemoteStore):
    """Stores the collection as one JSON file in Google Drive.

    Args:
        service: An authenticated Drive v3 resource, see
            :func:`todo_cli.adapters.remote.drive_auth.build_drive_service`.
        file_name: Name of the backup file in Drive.
    """

    def __init__(self, service: Any, file_name: str = DEFAULT_FILE_NAME):
        self.service = service
        self.file_name = file_name
        self.last_file_id: str | None = None
        self.last_action: str | None = None

    def describe(self) -> str:
        return f"Google Drive ({self.file_name})"

    def find_file_id(self) -> str | None:
        """Return the id of the first file named ``file_name``, if any."""
        escaped = self.file_name.replace("\\", "\\\\").replace("'", "\\'")
        try:
            result = (
                self.service.files()
                .list(
                    q=f"name='{escaped}' and trashed=false",
                    spaces="drive",
                    fields="files(id, name)",
                )
                .execute()
            )
        except HttpError as e:
            raise TransportError(
                f"Failed to search Google Drive: {e}", status_code=e.resp.status
            ) from e

        files = result.get("files", [])
        return files[0]["id"] if files else None

    def fetch(self) -> TaskCollection:
        file_id = self.find_file_id()
        if file_id is None:
            raise RemoteNotFoundError(f"File '{self.file_name}' not found in Google Drive")

        try:
            content = self.service.files().get_media(fileId=file_id).execute()
        except HttpError as e:
            raise TransportError(
                f"Failed to download file: {e}", status_code=e.resp.status
            ) from e

        self.last_file_id = file_id
        try:
            return TaskCollection.from_json(content)
        except PydanticValidationError as e:
            raise RemoteDecodeError(f"Failed to parse '{self.file_name}': {e}") from e

    def store(self, collection: TaskCollection) -> None:
        file_id = self.find_file_id()
        media = MediaIoBaseUpload(
            io.BytesIO(collection.to_json(indent=2).encode("utf-8")),
            mimetype="application/json",
            resumable=False,
        )
        metadata = {"name": self.file_name}

        try:
            if file_id is not None:
                result = (
                    self.service.files()
                    .update(fileId=file_id, body=metadata, media_body=media, fields="id")
                    .execute()
                )
                self.last_action = "updated"
            else:
                result = (
                    self.service.files()
                    .create(body=metadata, media_body=media, fields="id")
                    .execute()
                )
                self.last_action = "created"
        except HttpError as e:
            raise TransportError(
                f"Failed to upload file: {e}", status_code=e.resp.status
            ) from e

        self.last_file_id = result.get("id", file_id)
        logger.info(
            "%s %s in Google Drive (id %s)",
            self.last_action,
            self.file_name,
            self.last_file_id,
        )
