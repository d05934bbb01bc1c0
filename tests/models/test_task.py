"""Unit tests for the Task and TaskCollection models."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from todo_cli.models import Priority, Task, TaskCollection

_NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _task(task_id: int, **kwargs) -> Task:
    return Task(id=task_id, title=f"Task {task_id}", created_at=_NOW, **kwargs)


# ---------------------------------------------------------------------------
# Priority
# ---------------------------------------------------------------------------


class TestPriority:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("low", Priority.LOW),
            ("HIGH", Priority.HIGH),
            (" medium ", Priority.MEDIUM),
            ("1", Priority.LOW),
            ("2", Priority.MEDIUM),
            (3, Priority.HIGH),
            (Priority.MEDIUM, Priority.MEDIUM),
        ],
    )
    def test_parse(self, value, expected):
        assert Priority.parse(value) is expected

    @pytest.mark.parametrize("value", ["urgent", "4", "", None])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(ValueError, match="Unknown priority"):
            Priority.parse(value)

    def test_rank_orders_priorities(self):
        assert Priority.LOW.rank < Priority.MEDIUM.rank < Priority.HIGH.rank


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------


class TestTask:
    def test_defaults(self):
        task = _task(1)
        assert task.description == ""
        assert task.completed is False
        assert task.priority is Priority.LOW
        assert task.category == ""
        assert task.due_date is None
        assert task.completed_at is None

    def test_missing_priority_in_old_documents_defaults_to_low(self):
        task = Task.model_validate(
            {"id": 1, "title": "Old", "created_at": "2024-01-01T00:00:00Z", "priority": None}
        )
        assert task.priority is Priority.LOW

    def test_unknown_priority_falls_back_to_low(self):
        task = Task.model_validate(
            {"id": 1, "title": "Old", "created_at": "2024-01-01T00:00:00Z", "priority": "urgent"}
        )
        assert task.priority is Priority.LOW

    def test_due_date_accepts_full_timestamp(self):
        task = Task.model_validate(
            {
                "id": 1,
                "title": "Old",
                "created_at": "2024-01-01T00:00:00Z",
                "due_date": "2024-02-03T00:00:00Z",
            }
        )
        assert task.due_date == date(2024, 2, 3)

    def test_null_description_becomes_empty(self):
        task = Task.model_validate(
            {"id": 1, "title": "x", "created_at": "2024-01-01T00:00:00Z", "description": None}
        )
        assert task.description == ""


# ---------------------------------------------------------------------------
# TaskCollection
# ---------------------------------------------------------------------------


class TestTaskCollection:
    def test_empty_collection(self):
        collection = TaskCollection()
        assert collection.todos == []
        assert collection.next_id == 1

    def test_null_todos_is_empty(self):
        collection = TaskCollection.from_json('{"todos": null, "next_id": 4}')
        assert collection.todos == []
        assert collection.next_id == 4

    def test_next_id_raised_above_highest_id(self):
        collection = TaskCollection(todos=[_task(1), _task(7)], next_id=3)
        assert collection.next_id == 8

    def test_next_id_kept_when_already_higher(self):
        collection = TaskCollection(todos=[_task(1)], next_id=10)
        assert collection.next_id == 10

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="duplicate todo id 2"):
            TaskCollection(todos=[_task(2), _task(2)])

    def test_next_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            TaskCollection(next_id=0)

    def test_ids_in_order(self):
        collection = TaskCollection(todos=[_task(3), _task(1)])
        assert collection.ids() == [3, 1]

    def test_to_json_omits_unset_optional_fields(self):
        collection = TaskCollection(todos=[_task(1)], next_id=2)
        data = json.loads(collection.to_json())
        todo = data["todos"][0]
        assert "due_date" not in todo
        assert "completed_at" not in todo
        assert todo["priority"] == "low"
        assert data["next_id"] == 2

    def test_to_json_keeps_unicode(self):
        collection = TaskCollection(
            todos=[Task(id=1, title="Café ☕", created_at=_NOW)], next_id=2
        )
        assert "Café ☕" in collection.to_json()

    def test_json_round_trip_preserves_fields(self):
        original = TaskCollection(
            todos=[
                _task(
                    1,
                    description="two words",
                    completed=True,
                    completed_at=_NOW,
                    priority=Priority.HIGH,
                    category="home",
                    due_date=date(2026, 3, 5),
                )
            ],
            next_id=2,
        )
        assert TaskCollection.from_json(original.to_json()) == original
