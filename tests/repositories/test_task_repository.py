"""Unit tests for TaskRepository.

Covers every mutation, persistence after each of them, rollback when the
save fails, the sort order and the load fallbacks of ``open``.
"""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import patch

import pytest

from todo_cli.adapters.json_store import JsonTaskStore
from todo_cli.exceptions import (
    StorageError,
    TaskAlreadyCompletedError,
    TaskNotFoundError,
    ValidationError,
)
from todo_cli.models import Priority, TaskCollection
from todo_cli.repositories import TaskRepository
from todo_cli.repositories.task_repository import sort_key


def _saved(todo_file) -> dict:
    return json.loads(todo_file.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_first_add_gets_id_1(self, repository, todo_file):
        task = repository.add("Buy milk")

        assert task.id == 1
        assert task.title == "Buy milk"
        assert task.completed is False
        assert repository.next_id == 2
        data = _saved(todo_file)
        assert data["next_id"] == 2
        assert data["todos"][0]["title"] == "Buy milk"

    def test_all_fields(self, repository):
        task = repository.add(
            "  Pay rent ",
            description=" monthly ",
            priority="3",
            category=" home ",
            due_date=date(2026, 4, 1),
        )
        assert task.title == "Pay rent"
        assert task.description == " monthly "
        assert task.priority is Priority.HIGH
        assert task.category == "home"
        assert task.due_date == date(2026, 4, 1)

    def test_uses_clock_for_created_at(self, repository, clock):
        expected = clock.now
        task = repository.add("a")
        assert task.created_at == expected

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_empty_title_rejected_without_change(self, repository, todo_file, title):
        with pytest.raises(ValidationError, match="Title cannot be empty"):
            repository.add(title)
        assert repository.tasks == []
        assert repository.next_id == 1
        assert not todo_file.exists()

    def test_invalid_priority_rejected(self, repository):
        with pytest.raises(ValidationError, match="Unknown priority"):
            repository.add("a", priority="urgent")
        assert repository.tasks == []

    def test_ids_are_never_reused(self, repository):
        repository.add("a")
        second = repository.add("b")
        repository.delete(second.id)
        third = repository.add("c")
        assert third.id == 3

    def test_failed_save_rolls_back(self, repository):
        repository.add("kept")
        with patch.object(
            repository.store, "save", side_effect=StorageError("disk full")
        ):
            with pytest.raises(StorageError):
                repository.add("lost")
        assert [task.title for task in repository.tasks] == ["kept"]
        assert repository.next_id == 2


# ---------------------------------------------------------------------------
# edit / toggle / complete / delete
# ---------------------------------------------------------------------------


class TestEdit:
    def test_changes_title_and_description(self, repository):
        repository.add("Old", "old text")
        task = repository.edit(1, "New", "new text")
        assert task.title == "New"
        assert task.description == "new text"
        assert repository.get(1).title == "New"

    def test_none_description_keeps_current(self, repository):
        repository.add("Old", "keep me")
        task = repository.edit(1, "New")
        assert task.description == "keep me"

    def test_description_stored_exactly(self, repository, todo_file):
        repository.add("Old")
        task = repository.edit(1, "  New ", "  indented note \n")
        assert task.title == "New"
        assert task.description == "  indented note \n"
        assert _saved(todo_file)["todos"][0]["description"] == "  indented note \n"

    def test_preserves_other_fields(self, repository):
        original = repository.add("Old", priority="high", category="work")
        task = repository.edit(1, "New")
        assert task.created_at == original.created_at
        assert task.priority is Priority.HIGH
        assert task.category == "work"

    def test_empty_title_rejected(self, repository):
        repository.add("Old")
        with pytest.raises(ValidationError):
            repository.edit(1, "  ")
        assert repository.get(1).title == "Old"

    def test_unknown_id_leaves_file_untouched(self, repository, todo_file):
        repository.add("a")
        before = todo_file.read_bytes()
        with pytest.raises(TaskNotFoundError, match="Todo #99 not found"):
            repository.edit(99, "b")
        assert todo_file.read_bytes() == before


class TestToggleAndComplete:
    def test_toggle_sets_and_clears_completed_at(self, repository, clock):
        repository.add("a")
        done = repository.toggle_complete(1)
        assert done.completed is True
        assert done.completed_at is not None

        reopened = repository.toggle_complete(1)
        assert reopened.completed is False
        assert reopened.completed_at is None

    def test_toggle_twice_restores_document(self, repository, todo_file):
        repository.add("a")
        before = todo_file.read_bytes()
        repository.toggle_complete(1)
        repository.toggle_complete(1)
        assert todo_file.read_bytes() == before

    def test_complete_marks_done(self, repository):
        repository.add("a")
        assert repository.complete(1).completed is True

    def test_complete_twice_raises(self, repository):
        repository.add("a")
        repository.complete(1)
        with pytest.raises(TaskAlreadyCompletedError):
            repository.complete(1)

    def test_unknown_id(self, repository):
        with pytest.raises(TaskNotFoundError):
            repository.toggle_complete(5)


class TestDelete:
    def test_returns_removed_task(self, repository):
        repository.add("a")
        repository.add("b")
        removed = repository.delete(1)
        assert removed.title == "a"
        assert [task.id for task in repository.tasks] == [2]
        assert repository.next_id == 3

    def test_unknown_id_leaves_file_untouched(self, repository, todo_file):
        repository.add("a")
        before = todo_file.read_bytes()
        with pytest.raises(TaskNotFoundError):
            repository.delete(42)
        assert todo_file.read_bytes() == before


# ---------------------------------------------------------------------------
# sort
# ---------------------------------------------------------------------------


class TestSort:
    def test_order(self, repository):
        repository.add("done high", priority="high")
        repository.complete(1)
        repository.add("low no due")
        repository.add("high late due", priority="high", due_date=date(2026, 5, 1))
        repository.add("high early due", priority="high", due_date=date(2026, 4, 1))
        repository.add("high no due old", priority="high")
        repository.add("high no due new", priority="high")
        repository.add("medium", priority="medium")

        repository.sort()

        assert [task.title for task in repository.tasks] == [
            "high early due",
            "high late due",
            "high no due new",
            "high no due old",
            "medium",
            "low no due",
            "done high",
        ]

    def test_sort_is_idempotent(self, repository, todo_file):
        for title, priority in [("a", "low"), ("b", "high"), ("c", "medium")]:
            repository.add(title, priority=priority)
        repository.sort()
        first = todo_file.read_bytes()
        repository.sort()
        assert todo_file.read_bytes() == first

    def test_sort_keeps_next_id(self, repository):
        repository.add("a")
        repository.add("b", priority="high")
        repository.sort()
        assert repository.next_id == 3

    def test_sort_key_puts_completed_last(self, repository):
        pending = repository.add("pending")
        done = repository.toggle_complete(repository.add("done", priority="high").id)
        assert sort_key(pending) < sort_key(done)


# ---------------------------------------------------------------------------
# queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_stats(self, repository):
        repository.add("a")
        repository.add("b")
        repository.complete(2)
        assert repository.stats() == (2, 1, 1)

    def test_category_summary_skips_empty_and_sorts(self, repository):
        repository.add("a", category="work")
        repository.add("b", category="home")
        repository.add("c", category="work")
        repository.add("d")
        assert repository.category_summary() == {"home": 1, "work": 2}

    def test_tasks_is_a_copy(self, repository):
        repository.add("a")
        repository.tasks.clear()
        assert len(repository.tasks) == 1

    def test_get_unknown(self, repository):
        with pytest.raises(TaskNotFoundError):
            repository.get(1)


class TestReplace:
    def test_replace_persists_whole_collection(self, repository, store):
        other = TaskRepository(JsonTaskStore(store.path.with_name("other.json")))
        other.add("remote a")
        other.add("remote b")

        repository.replace(other.collection)

        assert [task.title for task in repository.tasks] == ["remote a", "remote b"]
        assert store.load() == other.collection


# ---------------------------------------------------------------------------
# open
# ---------------------------------------------------------------------------


class TestOpen:
    def test_missing_file(self, store):
        repository = TaskRepository.open(store)
        assert repository.tasks == []
        assert repository.load_warning is None

    def test_existing_file(self, repository, store):
        repository.add("a")
        reopened = TaskRepository.open(store)
        assert [task.title for task in reopened.tasks] == ["a"]
        assert reopened.next_id == 2

    def test_corrupt_file_backed_up_and_empty(self, store, todo_file):
        todo_file.write_text("{broken", encoding="utf-8")

        repository = TaskRepository.open(store)

        assert repository.tasks == []
        assert repository.next_id == 1
        assert "corrupted" in repository.load_warning
        assert todo_file.with_name("todos.json.bak").read_text(encoding="utf-8") == "{broken"

    def test_corrupt_file_without_backup(self, store, todo_file):
        todo_file.write_text("{broken", encoding="utf-8")
        repository = TaskRepository.open(store, backup_corrupt=False)
        assert "Starting with an empty list" in repository.load_warning
        assert not todo_file.with_name("todos.json.bak").exists()

    def test_unreadable_file_degrades_to_empty(self, store):
        with patch.object(store, "load", side_effect=StorageError("Could not read")):
            repository = TaskRepository.open(store)
        assert repository.tasks == []
        assert "Could not read" in repository.load_warning

    def test_next_id_never_below_existing_ids(self, store, todo_file):
        todo_file.write_text(
            json.dumps(
                {
                    "todos": [
                        {"id": 4, "title": "x", "created_at": "2024-01-01T00:00:00Z"}
                    ],
                    "next_id": 2,
                }
            ),
            encoding="utf-8",
        )
        repository = TaskRepository.open(store)
        assert repository.add("y").id == 5


def test_empty_collection_default(store):
    assert TaskRepository(store).collection == TaskCollection()
