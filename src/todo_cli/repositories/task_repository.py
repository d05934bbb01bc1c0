"""In-memory task collection with persistence after every mutation.

The repository owns the single TaskCollection for the lifetime of a command
or TUI session. Each public mutation validates, changes the collection and
saves the whole document before returning. If the save fails the change is
rolled back, so memory and disk never disagree.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from datetime import date, datetime

from todo_cli.adapters.json_store import JsonTaskStore
from todo_cli.exceptions import (
    CorruptStoreError,
    StorageError,
    TaskAlreadyCompletedError,
    TaskNotFoundError,
    ValidationError,
)
from todo_cli.models import Priority, Task, TaskCollection

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone()


def sort_key(task: Task) -> tuple:
    """Composite ordering key used by :meth:`TaskRepository.sort`.

    Incomplete before completed, then priority high to low, then tasks with a
    due date (earliest first) before tasks without, then newest first.
    """
    return (
        task.completed,
        -task.priority.rank,
        task.due_date is None,
        task.due_date or date.max,
        -task.created_at.timestamp(),
    )


class TaskRepository:
    """Task operations over one TaskCollection backed by a JsonTaskStore."""

    def __init__(
        self,
        store: JsonTaskStore,
        collection: TaskCollection | None = None,
        clock: Callable[[], datetime] = _now,
    ):
        self.store = store
        self._collection = collection if collection is not None else TaskCollection()
        self._clock = clock
        self.load_warning: str | None = None

    @classmethod
    def open(
        cls,
        store: JsonTaskStore,
        *,
        backup_corrupt: bool = True,
        clock: Callable[[], datetime] = _now,
    ) -> TaskRepository:
        """Load the collection from ``store``, degrading to an empty one.

        A corrupted file is copied to ``<file>.bak`` first (when
        ``backup_corrupt`` is set) so the next save does not destroy it.
        Any problem is recorded in ``load_warning`` for the caller to show.
        """
        warning = None
        try:
            collection = store.load()
        except CorruptStoreError as e:
            logger.warning("%s", e)
            warning = f"{e}. Starting with an empty list."
            if backup_corrupt:
                try:
                    backup = store.backup_corrupt()
                    warning = f"{e}. A copy was saved to {backup}."
                except StorageError as backup_error:
                    logger.warning("%s", backup_error)
            collection = TaskCollection()
        except StorageError as e:
            logger.warning("%s", e)
            warning = f"{e}. Starting with an empty list."
            collection = TaskCollection()

        repository = cls(store, collection, clock=clock)
        repository.load_warning = warning
        return repository

    # -- read access -------------------------------------------------------

    @property
    def collection(self) -> TaskCollection:
        return self._collection

    @property
    def tasks(self) -> list[Task]:
        return list(self._collection.todos)

    @property
    def next_id(self) -> int:
        return self._collection.next_id

    def get(self, task_id: int) -> Task:
        return self._collection.todos[self._index_of(task_id)]

    def stats(self) -> tuple[int, int, int]:
        """Return ``(total, completed, pending)``."""
        total = len(self._collection.todos)
        completed = sum(1 for task in self._collection.todos if task.completed)
        return total, completed, total - completed

    def category_summary(self) -> dict[str, int]:
        """Count todos per non-empty category, ordered by category name."""
        counts = Counter(
            task.category for task in self._collection.todos if task.category
        )
        return dict(sorted(counts.items()))

    # -- mutations ---------------------------------------------------------

    def add(
        self,
        title: str,
        description: str = "",
        priority: Priority | str = Priority.LOW,
        category: str = "",
        due_date: date | None = None,
    ) -> Task:
        title = _require_title(title)
        try:
            priority = Priority.parse(priority)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        task = Task(
            id=self._collection.next_id,
            title=title,
            description=description or "",
            created_at=self._clock(),
            priority=priority,
            category=(category or "").strip(),
            due_date=due_date,
        )
        updated = self._collection.model_copy(
            update={
                "todos": [*self._collection.todos, task],
                "next_id": self._collection.next_id + 1,
            }
        )
        self._commit(updated)
        logger.info("added todo #%d", task.id)
        return task

    def edit(self, task_id: int, title: str, description: str | None = None) -> Task:
        title = _require_title(title)
        index = self._index_of(task_id)
        changes: dict = {"title": title}
        if description is not None:
            changes["description"] = description
        task = self._collection.todos[index].model_copy(update=changes)
        self._replace_at(index, task)
        logger.info("edited todo #%d", task_id)
        return task

    def toggle_complete(self, task_id: int) -> Task:
        index = self._index_of(task_id)
        current = self._collection.todos[index]
        if current.completed:
            task = current.model_copy(update={"completed": False, "completed_at": None})
        else:
            task = current.model_copy(
                update={"completed": True, "completed_at": self._clock()}
            )
        self._replace_at(index, task)
        logger.info("toggled todo #%d -> completed=%s", task_id, task.completed)
        return task

    def complete(self, task_id: int) -> Task:
        index = self._index_of(task_id)
        if self._collection.todos[index].completed:
            raise TaskAlreadyCompletedError(task_id)
        return self.toggle_complete(task_id)

    def delete(self, task_id: int) -> Task:
        index = self._index_of(task_id)
        todos = list(self._collection.todos)
        removed = todos.pop(index)
        self._commit(self._collection.model_copy(update={"todos": todos}))
        logger.info("deleted todo #%d", task_id)
        return removed

    def sort(self) -> None:
        todos = sorted(self._collection.todos, key=sort_key)
        self._commit(self._collection.model_copy(update={"todos": todos}))

    def replace(self, collection: TaskCollection) -> None:
        """Swap in a whole collection, e.g. one pulled from a remote store."""
        self._commit(collection)
        logger.info("replaced collection with %d todos", len(collection.todos))

    # -- internals ---------------------------------------------------------

    def _index_of(self, task_id: int) -> int:
        for index, task in enumerate(self._collection.todos):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    def _replace_at(self, index: int, task: Task) -> None:
        todos = list(self._collection.todos)
        todos[index] = task
        self._commit(self._collection.model_copy(update={"todos": todos}))

    def _commit(self, collection: TaskCollection) -> None:
        # Save first; memory only changes once the document is on disk.
        self.store.save(collection)
        self._collection = collection


def _require_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title cannot be empty")
    return title
