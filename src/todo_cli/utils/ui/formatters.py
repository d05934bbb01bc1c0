"""Output formatters for the CLI."""

import json
from datetime import datetime, timedelta
from typing import Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todo_cli.models import Priority, Task
from todo_cli.utils.ui.console import get_console

console = get_console()

TITLE_WIDTH = 30

# Priority Icons & Colors
PRIORITY_ICONS = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}

PRIORITY_LABELS = {
    Priority.HIGH: "HIGH",
    Priority.MEDIUM: "MED",
    Priority.LOW: "LOW",
}

PRIORITY_COLORS = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

# Status Icons
STATUS_ICONS = {
    "pending": "⏳",
    "completed": "✅",
}


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def format_progress(message: str) -> None:
    """Format and display a progress message."""
    console.print(f"[bold cyan]🔄 {escape(message)}[/bold cyan]")


def format_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def truncate(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` characters, ending with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def priority_text(priority: Priority) -> Text:
    return Text(
        f"{PRIORITY_ICONS[priority]} {PRIORITY_LABELS[priority]}",
        style=PRIORITY_COLORS[priority],
    )


def due_label(
    task: Task, now: datetime | None = None, due_soon_hours: int = 24
) -> tuple[str, str]:
    """Describe a task's due date relative to ``now``.

    Returns:
        ``(label, style)``; the label is empty when the task has no due date.
    """
    if task.due_date is None:
        return "", ""
    now = now or datetime.now()
    shown = f"{task.due_date:%b} {task.due_date.day}"
    if not task.completed:
        due_start = datetime.combine(task.due_date, datetime.min.time())
        if task.due_date < now.date():
            return f"⚠️ Overdue ({shown})", "bold red"
        if due_start < now.replace(tzinfo=None) + timedelta(hours=due_soon_hours):
            return f"⏰ Due soon ({shown})", "yellow"
    return f"📅 Due {shown}", "blue"


def format_tasks_table(
    tasks: list[Task],
    date_format: str = "%Y-%m-%d %H:%M",
    due_soon_hours: int = 24,
) -> None:
    """Print tasks as a table followed by a summary line."""
    if not tasks:
        console.print(
            Panel(
                "No todos found. Add one with 'todo add <title>'",
                title="📝 Your Todos",
                border_style="yellow",
                expand=False,
            )
        )
        return

    table = Table(title="📝 Your Todos", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("ST")
    table.add_column("Title", max_width=TITLE_WIDTH)
    table.add_column("Priority")
    table.add_column("Category", style="magenta")
    table.add_column("Due")
    table.add_column("Description", style="dim")
    table.add_column("Date", style="dim")

    now = datetime.now()
    for task in tasks:
        status = "completed" if task.completed else "pending"
        title_style = "strike dim" if task.completed else "green"
        # Completed tasks show when they were completed instead of created.
        stamp = task.completed_at if task.completed and task.completed_at else task.created_at
        due, due_style = due_label(task, now, due_soon_hours)
        table.add_row(
            str(task.id),
            STATUS_ICONS[status],
            Text(truncate(task.title, TITLE_WIDTH), style=title_style),
            priority_text(task.priority),
            Text(task.category or "-"),
            Text(due, style=due_style),
            Text(task.description),
            stamp.strftime(date_format),
        )

    console.print(table)
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    console.print(
        f"[dim bold]📊 Summary: {total} total, {completed} completed, "
        f"{total - completed} pending[/dim bold]"
    )


def format_category_summary(summary: dict[str, int]) -> None:
    """Print the number of todos per category."""
    if not summary:
        format_info("No categories found")
        return
    table = Table(title="📁 Categories", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="magenta")
    table.add_column("Todos", justify="right")
    for category, count in summary.items():
        table.add_row(Text(category), str(count))
    console.print(table)


def category_summary_text(summary: dict[str, int]) -> str:
    """One-line category summary, as shown in the TUI message bar."""
    if not summary:
        return "No categories found"
    parts = [
        f"{category}: {count} todo{'s' if count != 1 else ''}"
        for category, count in summary.items()
    ]
    return "Categories: " + ", ".join(parts)
