"""Remote store interface.

A remote store keeps exactly one serialized TaskCollection. Push, pull and
sync are written once against this interface, whatever the backend is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todo_cli.models import TaskCollection


class RemoteStore(ABC):
    """Abstract base class for remote collection storage."""

    @abstractmethod
    def fetch(self) -> TaskCollection:
        """Download the whole remote collection.

        Raises:
            TransportError: The remote could not be reached or refused.
            RemoteNotFoundError: No collection is stored remotely yet.
            RemoteDecodeError: The remote document is not a valid collection.
        """
        raise NotImplementedError("RemoteStore.fetch() must be implemented by adapter")

    @abstractmethod
    def store(self, collection: TaskCollection) -> None:
        """Upload the whole collection, replacing the remote copy.

        Raises:
            TransportError: The upload failed.
        """
        raise NotImplementedError("RemoteStore.store() must be implemented by adapter")

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable name of the remote, used in messages."""
        raise NotImplementedError(
            "RemoteStore.describe() must be implemented by adapter"
        )

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> RemoteStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
