"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, log and todo
files of the user running them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from todo_cli.adapters.json_store import JsonTaskStore
from todo_cli.repositories import TaskRepository

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _reset_logger():
    import todo_cli.utils.logger as logger_mod

    logger = logging.getLogger("todo_cli")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point platformdirs at *tmp_path* and start from a fresh ConfigService.

    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todo_cli.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    log_dir = tmp_path / "logs"
    monkeypatch.delenv("TODO_FILE", raising=False)

    get_config_service.cache_clear()
    _reset_logger()
    with patch(
        "todo_cli.services.config_service.user_config_dir",
        return_value=str(config_dir),
    ):
        with patch("todo_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
            yield tmp_path
    get_config_service.cache_clear()
    _reset_logger()


# ---------------------------------------------------------------------------
# Repository helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Deterministic clock; every call is one minute after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture()
def todo_file(tmp_path):
    return tmp_path / "todos.json"


@pytest.fixture()
def store(todo_file):
    return JsonTaskStore(todo_file)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def repository(store, clock):
    """An empty repository writing to a temporary todos.json."""
    return TaskRepository(store, clock=clock)
