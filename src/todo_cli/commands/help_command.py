"""Command 'help' of todo-cli"""

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from todo_cli import __version__
from todo_cli.utils import exit_codes
from todo_cli.utils.exit_codes import get_exit_code_description
from todo_cli.utils.ui.console import get_console

console = get_console()

COMMAND_GROUPS = [
    (
        "📝 Local Operations",
        "blue",
        [
            ("add, a", "<title> [description]", "Add a new todo"),
            ("list, l", "", "List all todos"),
            ("complete, c", "<id>", "Mark a todo as completed"),
            ("delete, d", "<id>", "Delete a todo"),
            ("edit, e", "<id> <title> [desc]", "Edit a todo"),
            ("sort", "", "Sort by status, priority and due date"),
            ("categories, cat", "", "Show todos per category"),
            ("tui", "", "Open the interactive terminal UI"),
        ],
    ),
    (
        "🌐 Network Operations",
        "magenta",
        [
            ("save, s", "<server_url> [user] [pass]", "Save todos to network"),
            ("load, ld", "<server_url> [user] [pass]", "Load todos from network"),
            ("sync", "<server_url> [user] [pass]", "Sync with network"),
        ],
    ),
    (
        "☁️  Cloud Operations",
        "green",
        [
            ("upload, up", "", "Upload todos to Google Drive"),
            ("download, down", "", "Download todos from Google Drive"),
        ],
    ),
    (
        "🔧 Utility",
        "yellow",
        [
            ("config", "show|get|set|reset", "Manage settings"),
            ("help, h", "", "Show this help message"),
        ],
    ),
]

EXAMPLES = [
    'todo add "Buy groceries" "Get milk and bread"',
    "todo add \"Pay rent\" --priority high --due 2026-11-01",
    "todo list",
    "todo complete 1",
    "todo save http://localhost:8080",
    "todo load http://api.example.com user123 pass456",
    "todo sync http://api.example.com",
    "todo upload",
    "todo download",
]

EXIT_CODES = [
    exit_codes.SUCCESS,
    exit_codes.ERROR_GENERAL,
    exit_codes.ERROR_INVALID_ARGS,
    exit_codes.ERROR_AUTH_FAILURE,
    exit_codes.ERROR_NETWORK,
    exit_codes.ERROR_NOT_FOUND,
    exit_codes.ERROR_STORAGE,
]


def show_help() -> None:
    """Print the grouped command overview."""
    console.print(
        f"[bold cyan]TODO CLI[/bold cyan] [dim]{__version__} - "
        "a command-line todo manager[/dim]\n"
    )
    console.print("[bold yellow]📋 USAGE[/bold yellow]")
    console.print(f"  [cyan]todo[/cyan] {escape('[--file PATH] <command> [arguments]')}\n")

    console.print("[bold yellow]🎯 COMMANDS[/bold yellow]")
    for title, color, commands in COMMAND_GROUPS:
        console.print(f"  [bold {color}]{title}[/bold {color}]")
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 4))
        table.add_column("Command", style="green", no_wrap=True)
        table.add_column("Arguments", style="dim", no_wrap=True)
        table.add_column("Description", style="italic")
        for name, args, description in commands:
            table.add_row(name, Text(args), description)
        console.print(table)
        console.print()

    console.print("[bold yellow]💡 EXAMPLES[/bold yellow]")
    for example in EXAMPLES:
        console.print(f"  [dim]$[/dim] [green]{example}[/green]", highlight=False)
    console.print()

    console.print("[bold yellow]🚦 EXIT CODES[/bold yellow]")
    for code in EXIT_CODES:
        console.print(f"  {code}  {get_exit_code_description(code)}", highlight=False)
    console.print()


def help_command() -> None:
    """Show this help message."""
    show_help()
