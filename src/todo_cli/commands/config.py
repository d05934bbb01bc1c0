"""Configuration management commands."""

import typer
from rich.markup import escape

from todo_cli.services.config_service import get_config_service
from todo_cli.utils.ui.console import get_console
from todo_cli.utils.ui.formatters import format_json, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = get_console()


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration."""
    config_svc = get_config_service()
    console.print(f"[dim]{escape(str(config_svc.config_path))}[/dim]")
    format_json(config_svc.as_dict())


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., network.timeout)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    console.print(escape(str(value)), highlight=False)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., storage.path)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    new_value = get_config_service().set(key, value)
    format_success(f"Configuration '{key}' set to '{new_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset all settings to their defaults?"):
        console.print("[yellow]Cancelled.[/yellow]")
        return
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
