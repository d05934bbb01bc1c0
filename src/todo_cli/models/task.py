"""Task data models."""

from __future__ import annotations

import json
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class Priority(str, Enum):
    """Task priority, ordered low < medium < high."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: str | int | None) -> Priority:
        """Parse user input: a name, a 1-3 shortcut or a Priority.

        Raises:
            ValueError: If the value is not a known priority.
        """
        if isinstance(value, Priority):
            return value
        text = str(value).strip().lower() if value is not None else ""
        if text in _SHORTCUTS:
            return _SHORTCUTS[text]
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"Unknown priority '{value}'. Use low, medium, high (or 1-3)."
            ) from None


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}
_SHORTCUTS = {"1": Priority.LOW, "2": Priority.MEDIUM, "3": Priority.HIGH}


class Task(BaseModel):
    """A single todo item."""

    id: int
    title: str
    description: str = ""
    completed: bool = False
    created_at: datetime
    priority: Priority = Priority.LOW
    category: str = ""
    due_date: date | None = None
    completed_at: datetime | None = None

    @field_validator("description", "category", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("priority", mode="before")
    @classmethod
    def _lenient_priority(cls, value):
        # Documents written before priorities existed have none or junk here.
        try:
            return Priority.parse(value) if value not in (None, "") else Priority.LOW
        except ValueError:
            return Priority.LOW

    @field_validator("due_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        # Older files stored the due date as a full timestamp.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        if value == "":
            return None
        return value


class TaskCollection(BaseModel):
    """The whole task list plus the id counter; the unit of persistence."""

    todos: list[Task] = Field(default_factory=list)
    next_id: int = Field(default=1, ge=1)

    @field_validator("todos", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _check_ids(self) -> TaskCollection:
        seen: set[int] = set()
        for task in self.todos:
            if task.id in seen:
                raise ValueError(f"duplicate todo id {task.id}")
            seen.add(task.id)
        highest = max(seen, default=0)
        if self.next_id <= highest:
            self.next_id = highest + 1
        return self

    def ids(self) -> list[int]:
        return [task.id for task in self.todos]

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize with stable key order; unset optional fields are omitted."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str | bytes) -> TaskCollection:
        return cls.model_validate_json(data)
