"""Sync service for exchanging the task collection with a remote store.

Handles push, pull and sync. Sync reconciles both sides with a
union-by-id merge in which the local copy of a task always wins.
"""

from __future__ import annotations

import logging
import time
from typing import Literal

from todo_cli.adapters.remote.base import RemoteStore
from todo_cli.exceptions import TransportError
from todo_cli.models import TaskCollection
from todo_cli.repositories import TaskRepository

logger = logging.getLogger(__name__)

SyncAction = Literal["push", "pull", "sync"]


def merge_collections(local: TaskCollection, remote: TaskCollection) -> TaskCollection:
    """Union of two collections keyed by task id.

    Local tasks keep their order and come first, followed by remote tasks
    whose id is unknown locally, in remote order. When both sides have the
    same id the local task is kept unchanged; fields are never mixed.
    """
    local_ids = {task.id for task in local.todos}
    todos = [task.model_copy(deep=True) for task in local.todos]
    todos.extend(
        task.model_copy(deep=True) for task in remote.todos if task.id not in local_ids
    )
    return TaskCollection(todos=todos, next_id=max(local.next_id, remote.next_id))


class SyncResult:
    """Result of a push, pull or sync operation."""

    def __init__(self, action: SyncAction):
        """Initialize sync result."""
        self.action = action
        self.tasks_local = 0
        self.tasks_remote = 0
        self.tasks_new = 0
        self.tasks_total = 0

        self.fell_back = False
        self.fetch_error: str | None = None
        self.success = False
        self.duration: float = 0.0


class SyncService:
    """Moves the repository's collection to and from a remote store."""

    def __init__(self, repository: TaskRepository, remote: RemoteStore):
        """Initialize sync service.

        Args:
            repository: Local task repository
            remote: Remote store to exchange the collection with
        """
        self.repository = repository
        self.remote = remote

    def push(self) -> SyncResult:
        """Upload the local collection as-is."""
        result = SyncResult("push")
        start = time.monotonic()
        collection = self.repository.collection

        self.remote.store(collection)

        result.tasks_local = result.tasks_total = len(collection.todos)
        result.success = True
        result.duration = time.monotonic() - start
        logger.info("pushed %d todos to %s", result.tasks_total, self.remote.describe())
        return result

    def pull(self) -> SyncResult:
        """Replace the local collection with the remote one."""
        result = SyncResult("pull")
        start = time.monotonic()

        remote = self.remote.fetch()
        self.repository.replace(remote)

        result.tasks_remote = result.tasks_total = len(remote.todos)
        result.success = True
        result.duration = time.monotonic() - start
        logger.info("pulled %d todos from %s", result.tasks_total, self.remote.describe())
        return result

    def sync(self) -> SyncResult:
        """Fetch, merge, save locally, then upload the merged collection.

        If the fetch fails the local collection is pushed unmodified instead;
        the result then has ``fell_back`` set and carries the fetch error.
        A ``RemoteDecodeError`` propagates without any upload.
        """
        start = time.monotonic()
        try:
            remote = self.remote.fetch()
        except TransportError as e:
            logger.warning(
                "fetch from %s failed, pushing local todos instead: %s",
                self.remote.describe(),
                e,
            )
            result = self.push()
            result.action = "sync"
            result.fell_back = True
            result.fetch_error = str(e)
            result.duration = time.monotonic() - start
            return result

        result = SyncResult("sync")
        local = self.repository.collection
        merged = merge_collections(local, remote)
        self.repository.replace(merged)
        self.remote.store(merged)

        result.tasks_local = len(local.todos)
        result.tasks_remote = len(remote.todos)
        result.tasks_total = len(merged.todos)
        result.tasks_new = result.tasks_total - result.tasks_local
        result.success = True
        result.duration = time.monotonic() - start
        logger.info(
            "synced %d todos with %s (%d new from remote)",
            result.tasks_total,
            self.remote.describe(),
            result.tasks_new,
        )
        return result
