"""Configuration commands."""

import typer
from rich.console import Console
from rich.table import Table

from typed_intl.utils.config import get_settings, reload_settings

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command("show")
def show_config() -> None:
    """Show current configuration."""
    settings = get_settings()

    table = Table(title="typed-intl Configuration", show_header=True)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Preferred Language", settings.preferred_language or "[dim]Not set[/dim]")
    table.add_row("Fallback Language", settings.fallback_language)

    table.add_section()
    table.add_row("Log Level", settings.log_level.upper())
    table.add_row("JSON Logs", "[green]Yes[/green]" if settings.json_logs else "No")
    table.add_row("Dev Mode", "[green]Yes[/green]" if settings.dev_mode else "No")

    console.print(table)


@app.command("reload")
def reload_config() -> None:
    """Reload configuration from the environment and .env file."""
    reload_settings()
    console.print("[green]✓ Configuration reloaded[/green]")
