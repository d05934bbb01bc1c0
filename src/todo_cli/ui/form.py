"""Step-by-step form used by the TUI to add and edit todos.

The flow knows nothing about widgets: the app feeds it the text typed in its
input and renders ``prompt``, ``help_text`` and ``error``. Going back keeps
every value already captured, so moving back and forward again never loses
input.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Literal

from todo_cli.models import Priority, Task


class FormState(str, Enum):
    IDLE = "idle"
    TITLE = "title"
    DESCRIPTION = "description"
    CATEGORY = "category"
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    EDIT_TITLE = "edit_title"


ADD_STEPS = [
    FormState.TITLE,
    FormState.DESCRIPTION,
    FormState.CATEGORY,
    FormState.PRIORITY,
    FormState.DUE_DATE,
]

DUE_DATE_FORMAT = "%Y-%m-%d"

PROMPTS = {
    FormState.TITLE: "Title",
    FormState.DESCRIPTION: "Description (optional)",
    FormState.CATEGORY: "Category (optional)",
    FormState.PRIORITY: "Priority: 1=low, 2=medium, 3=high",
    FormState.DUE_DATE: "Due date (YYYY-MM-DD, optional)",
    FormState.EDIT_TITLE: "New title",
}


@dataclass
class TaskDraft:
    """Fields collected so far; ``task_id`` is set when editing."""

    title: str = ""
    description: str = ""
    category: str = ""
    priority: Priority = Priority.LOW
    due_date_text: str = ""
    task_id: int | None = None

    @property
    def due_date(self) -> date | None:
        return parse_due_date(self.due_date_text)


@dataclass
class FormResult:
    """A finished form, ready to be applied to the repository."""

    kind: Literal["add", "edit"]
    draft: TaskDraft = field(default_factory=TaskDraft)


def parse_due_date(text: str) -> date | None:
    """Parse ``YYYY-MM-DD``; blank means no due date.

    Raises:
        ValueError: If the text is not a valid date.
    """
    text = text.strip()
    if not text:
        return None
    return datetime.strptime(text, DUE_DATE_FORMAT).date()


class FormFlow:
    """State machine behind the add and edit forms."""

    def __init__(self):
        self.state = FormState.IDLE
        self.draft = TaskDraft()
        self.error: str | None = None

    @property
    def active(self) -> bool:
        return self.state is not FormState.IDLE

    @property
    def is_edit(self) -> bool:
        return self.state is FormState.EDIT_TITLE

    @property
    def prompt(self) -> str:
        if self.state is FormState.IDLE:
            return ""
        if self.is_edit:
            return f"Edit todo #{self.draft.task_id}: {PROMPTS[self.state]}"
        step = ADD_STEPS.index(self.state) + 1
        return f"Add todo ({step}/{len(ADD_STEPS)}): {PROMPTS[self.state]}"

    @property
    def help_text(self) -> str:
        if self.state is FormState.IDLE:
            return ""
        if self.state in (FormState.TITLE, FormState.EDIT_TITLE):
            return "enter: confirm • esc: cancel"
        if self.state is FormState.DUE_DATE:
            return "enter: save todo • esc: back"
        return "enter: next • esc: back"

    def begin_add(self) -> None:
        self.state = FormState.TITLE
        self.draft = TaskDraft()
        self.error = None

    def begin_edit(self, task: Task) -> None:
        self.state = FormState.EDIT_TITLE
        self.draft = TaskDraft(
            title=task.title,
            description=task.description,
            category=task.category,
            priority=task.priority,
            due_date_text=task.due_date.isoformat() if task.due_date else "",
            task_id=task.id,
        )
        self.error = None

    def current_value(self) -> str:
        """Text to prefill the input with for the current state."""
        if self.state in (FormState.TITLE, FormState.EDIT_TITLE):
            return self.draft.title
        if self.state is FormState.DESCRIPTION:
            return self.draft.description
        if self.state is FormState.CATEGORY:
            return self.draft.category
        if self.state is FormState.PRIORITY:
            return str(self.draft.priority.rank)
        if self.state is FormState.DUE_DATE:
            return self.draft.due_date_text
        return ""

    def confirm(self, value: str) -> FormResult | None:
        """Accept ``value`` for the current step.

        Returns:
            The finished form after the last step, otherwise ``None``. On
            invalid input ``error`` is set and the state does not change.
        """
        if self.state is FormState.IDLE:
            return None
        if not self._store(value):
            return None
        self.error = None

        if self.is_edit:
            return self._finish("edit")
        position = ADD_STEPS.index(self.state)
        if position == len(ADD_STEPS) - 1:
            return self._finish("add")
        self.state = ADD_STEPS[position + 1]
        return None

    def back(self, value: str | None = None) -> None:
        """Go to the previous step, or cancel from the first one.

        ``value`` is the text currently typed; it is kept (without
        validation) so it reappears when the user comes forward again.
        """
        if self.state is FormState.IDLE:
            return
        self.error = None
        if self.state in (FormState.TITLE, FormState.EDIT_TITLE):
            self.cancel()
            return
        if value is not None:
            self._keep(value)
        self.state = ADD_STEPS[ADD_STEPS.index(self.state) - 1]

    def cancel(self) -> None:
        self.state = FormState.IDLE
        self.draft = TaskDraft()
        self.error = None

    def _finish(self, kind: Literal["add", "edit"]) -> FormResult:
        result = FormResult(kind=kind, draft=self.draft)
        self.state = FormState.IDLE
        self.draft = TaskDraft()
        return result

    def _store(self, value: str) -> bool:
        text = value.strip()
        if self.state in (FormState.TITLE, FormState.EDIT_TITLE):
            if not text:
                self.error = "Title cannot be empty"
                return False
            self.draft.title = text
        elif self.state is FormState.PRIORITY:
            if text:
                try:
                    self.draft.priority = Priority.parse(text)
                except ValueError as e:
                    self.error = str(e)
                    return False
        elif self.state is FormState.DUE_DATE:
            try:
                parse_due_date(text)
            except ValueError:
                self.error = f"Invalid date '{text}'. Use YYYY-MM-DD."
                return False
            self.draft.due_date_text = text
        else:
            self._keep(text)
        return True

    def _keep(self, value: str) -> None:
        # Stored as typed; validation happens on confirm.
        if self.state is FormState.DESCRIPTION:
            self.draft.description = value.strip()
        elif self.state is FormState.CATEGORY:
            self.draft.category = value.strip()
        elif self.state is FormState.DUE_DATE:
            self.draft.due_date_text = value.strip()
        elif self.state is FormState.PRIORITY:
            # An unparsable priority is dropped; the previous one stays.
            with contextlib.suppress(ValueError):
                self.draft.priority = Priority.parse(value)
