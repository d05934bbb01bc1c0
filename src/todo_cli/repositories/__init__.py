"""Task repository: the in-memory collection and its mutations."""

from .task_repository import TaskRepository

__all__ = ["TaskRepository"]
