"""Local JSON file storage for the task collection.

The whole collection is read and written as one document. Writes go to a
temporary file in the same directory which is then renamed over the target,
so a crash mid-write never leaves a truncated file behind.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from todo_cli.exceptions import CorruptStoreError, StorageError
from todo_cli.models import TaskCollection

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """Loads and saves a TaskCollection as pretty-printed UTF-8 JSON."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JsonTaskStore({str(self.path)!r})"

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".bak")

    def load(self) -> TaskCollection:
        """Read the collection from disk.

        Returns:
            The stored collection, or an empty one (next_id=1) when the file
            does not exist or is empty.

        Raises:
            CorruptStoreError: The file exists but is not a valid document.
            StorageError: The file could not be read.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no task file at %s, starting empty", self.path)
            return TaskCollection()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e

        if not raw.strip():
            return TaskCollection()

        try:
            collection = TaskCollection.from_json(raw)
        except PydanticValidationError as e:
            raise CorruptStoreError(self.path, _summarize(e)) from e

        logger.debug("loaded %d todos from %s", len(collection.todos), self.path)
        return collection

    def save(self, collection: TaskCollection) -> None:
        """Overwrite the file with the full collection.

        Raises:
            StorageError: The document could not be written.
        """
        data = collection.to_json(indent=2) + "\n"
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write {self.path}: {e}") from e

        logger.debug("saved %d todos to %s", len(collection.todos), self.path)

    def backup_corrupt(self) -> Path:
        """Copy the current file next to itself with a ``.bak`` suffix."""
        try:
            shutil.copy2(self.path, self.backup_path)
        except OSError as e:
            raise StorageError(f"Could not back up {self.path}: {e}") from e
        logger.warning("backed up unreadable task file to %s", self.backup_path)
        return self.backup_path


def _summarize(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "document"
    return f"{location}: {first.get('msg', 'invalid value')}"
