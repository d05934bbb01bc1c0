"""Remote stores holding one whole task collection."""

from .base import RemoteStore
from .drive_store import DriveRemoteStore
from .http_store import HttpRemoteStore

__all__ = ["DriveRemoteStore", "HttpRemoteStore", "RemoteStore"]
