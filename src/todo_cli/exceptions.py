"""Exception hierarchy for todo-cli.

Every error carries the exit code the CLI should terminate with, so command
functions can simply raise and let ``command_wrapper`` do the reporting.
"""

from __future__ import annotations

from todo_cli.utils import exit_codes


class TodoError(Exception):
    """Base class for all expected todo-cli errors."""

    exit_code = exit_codes.ERROR_GENERAL

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(TodoError):
    """Input was rejected (e.g. an empty title)."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class TaskNotFoundError(TodoError):
    """No task with the requested id exists."""

    exit_code = exit_codes.ERROR_NOT_FOUND

    def __init__(self, task_id: int):
        super().__init__(f"Todo #{task_id} not found")
        self.task_id = task_id


class TaskAlreadyCompletedError(TodoError):
    """The task is already marked as completed."""

    exit_code = exit_codes.SUCCESS

    def __init__(self, task_id: int):
        super().__init__(f"Todo #{task_id} is already completed")
        self.task_id = task_id


class StorageError(TodoError):
    """Reading or writing the local task file failed."""

    exit_code = exit_codes.ERROR_STORAGE


class CorruptStoreError(StorageError):
    """The local task file exists but could not be decoded."""

    def __init__(self, path, reason: str):
        super().__init__(f"Task file {path} is corrupted: {reason}")
        self.path = path
        self.reason = reason


class TransportError(TodoError):
    """A remote store could not be reached or answered with an error."""

    exit_code = exit_codes.ERROR_NETWORK

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteNotFoundError(TransportError):
    """The remote store holds no task document."""

    exit_code = exit_codes.ERROR_NOT_FOUND


class RemoteDecodeError(TodoError):
    """The remote store answered with a document that is not a valid collection.

    Not a transport failure: the remote holds data, so it must never be
    overwritten by a fallback push.
    """

    exit_code = exit_codes.ERROR_NETWORK


class DriveAuthError(TransportError):
    """Google Drive credentials are missing or the consent flow failed."""

    exit_code = exit_codes.ERROR_AUTH_FAILURE
