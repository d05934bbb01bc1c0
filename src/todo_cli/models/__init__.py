"""todo-cli domain models.

Pydantic models for the task document and the application configuration.
"""

from .config_models import AppConfig
from .task import Priority, Task, TaskCollection

__all__ = [
    "AppConfig",
    "Priority",
    "Task",
    "TaskCollection",
]
