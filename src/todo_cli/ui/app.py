"""Textual TUI: a task table with keyboard actions and the add/edit form."""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import DataTable, Footer, Header, Input, Static

from todo_cli.adapters.json_store import JsonTaskStore
from todo_cli.exceptions import TodoError
from todo_cli.models import Task
from todo_cli.repositories import TaskRepository
from todo_cli.services.config_service import get_config_service
from todo_cli.ui.form import FormFlow, FormResult
from todo_cli.utils.logger import get_logger
from todo_cli.utils.ui.formatters import (
    STATUS_ICONS,
    TITLE_WIDTH,
    category_summary_text,
    due_label,
    format_error,
    priority_text,
    truncate,
)

logger = logging.getLogger(__name__)


class TodoApp(App):
    """Todo list with an inline multi-step form."""

    TITLE = "Todo"
    CSS_PATH = "app.tcss"
    BINDINGS = [
        Binding("a", "add", "Add"),
        Binding("e", "edit", "Edit"),
        Binding("d", "delete", "Delete"),
        Binding("space", "toggle", "Toggle"),
        Binding("s", "sort", "Sort"),
        Binding("c", "categories", "Categories"),
        Binding("escape", "back", "Back", show=False, priority=True),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, repository: TaskRepository, due_soon_hours: int = 24):
        super().__init__()
        self.repository = repository
        self.due_soon_hours = due_soon_hours
        self.flow = FormFlow()
        self.row_ids: list[int] = []
        self.message = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="tasks", cursor_type="row", zebra_stripes=True)
        with Vertical(id="form"):
            yield Static(id="form-title")
            yield Input(id="form-input")
            yield Static(id="form-error")
            yield Static(id="form-help")
        yield Static(id="message")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns("ID", "ST", "Title", "Priority", "Category", "Due", "Description")
        self.refresh_tasks()
        self.refresh_form()
        if self.repository.load_warning:
            self.show_message(self.repository.load_warning, error=True)

    # -- rendering ---------------------------------------------------------

    def refresh_tasks(self) -> None:
        table = self.query_one(DataTable)
        row = table.cursor_row
        table.clear()
        self.row_ids = []
        for task in self.repository.tasks:
            due, due_style = due_label(task, due_soon_hours=self.due_soon_hours)
            table.add_row(
                str(task.id),
                STATUS_ICONS["completed" if task.completed else "pending"],
                Text(
                    truncate(task.title, TITLE_WIDTH),
                    style="strike dim" if task.completed else "",
                ),
                priority_text(task.priority),
                Text(task.category),
                Text(due, style=due_style),
                Text(task.description, style="dim"),
            )
            self.row_ids.append(task.id)
        if self.row_ids:
            table.move_cursor(row=min(max(row, 0), len(self.row_ids) - 1))

    def refresh_form(self) -> None:
        form = self.query_one("#form", Vertical)
        form_input = self.query_one("#form-input", Input)
        form.display = self.flow.active
        if not self.flow.active:
            form_input.value = ""
            self.query_one(DataTable).focus()
            return
        self.query_one("#form-title", Static).update(Text(self.flow.prompt))
        self.query_one("#form-error", Static).update(Text(self.flow.error or ""))
        self.query_one("#form-help", Static).update(Text(self.flow.help_text))
        if not self.flow.error:
            form_input.value = self.flow.current_value()
        form_input.focus()

    def show_message(self, message: str, error: bool = False) -> None:
        self.message = message
        self.query_one("#message", Static).update(
            Text(message, style="bold red" if error else "green")
        )

    def selected_task(self) -> Task | None:
        if not self.row_ids:
            return None
        row = self.query_one(DataTable).cursor_row
        if not 0 <= row < len(self.row_ids):
            return None
        return self.repository.get(self.row_ids[row])

    # -- list actions ------------------------------------------------------

    def action_add(self) -> None:
        if self.flow.active:
            return
        self.flow.begin_add()
        self.refresh_form()

    def action_edit(self) -> None:
        if self.flow.active:
            return
        task = self.selected_task()
        if task is None:
            self.show_message("No todo selected", error=True)
            return
        self.flow.begin_edit(task)
        self.refresh_form()

    def action_delete(self) -> None:
        task = self.selected_task()
        if self.flow.active or task is None:
            return
        self._mutate(
            lambda: self.repository.delete(task.id),
            lambda removed: f"Deleted todo #{removed.id}: {removed.title}",
        )

    def action_toggle(self) -> None:
        task = self.selected_task()
        if self.flow.active or task is None:
            return
        self._mutate(
            lambda: self.repository.toggle_complete(task.id),
            lambda updated: (
                f"Completed todo #{updated.id}: {updated.title}"
                if updated.completed
                else f"Reopened todo #{updated.id}: {updated.title}"
            ),
        )

    def action_sort(self) -> None:
        if self.flow.active:
            return
        self._mutate(self.repository.sort, lambda _: "Todos sorted by priority and due date")

    def action_categories(self) -> None:
        if self.flow.active:
            return
        self.show_message(category_summary_text(self.repository.category_summary()))

    # -- form events -------------------------------------------------------

    def action_back(self) -> None:
        if not self.flow.active:
            return
        self.flow.back(self.query_one("#form-input", Input).value)
        self.refresh_form()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        result = self.flow.confirm(event.value)
        if result is not None:
            self.apply_form(result)
        self.refresh_form()

    def apply_form(self, result: FormResult) -> None:
        draft = result.draft
        if result.kind == "add":
            self._mutate(
                lambda: self.repository.add(
                    draft.title,
                    draft.description,
                    draft.priority,
                    draft.category,
                    draft.due_date,
                ),
                lambda task: f"Added todo #{task.id}: {task.title}",
            )
        else:
            self._mutate(
                lambda: self.repository.edit(draft.task_id, draft.title),
                lambda task: f"Updated todo #{task.id}: {task.title}",
            )

    def _mutate(self, operation, describe) -> None:
        try:
            outcome = operation()
        except TodoError as e:
            logger.warning("tui action failed: %s", e)
            self.show_message(str(e), error=True)
            return
        self.refresh_tasks()
        self.show_message(describe(outcome))


def run_tui(path: str | Path | None = None) -> None:
    """Open the repository at ``path`` (or the configured one) and run the UI."""
    config_svc = get_config_service()
    store = JsonTaskStore(path if path is not None else config_svc.storage_path)
    repository = TaskRepository.open(
        store, backup_corrupt=config_svc.config.storage.backup_corrupt
    )
    logger.info("starting tui on %s", store.path)
    TodoApp(repository, due_soon_hours=config_svc.config.ui.due_soon_hours).run()


def main() -> None:
    """Entry point for the ``todo-tui`` script."""
    get_logger()
    try:
        run_tui(os.environ.get("TODO_FILE"))
    except Exception as e:
        logger.error("tui failed to start: %s\n%s", e, traceback.format_exc())
        format_error(f"Could not start the terminal UI: {e}")
        sys.exit(1)
