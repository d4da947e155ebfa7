"""Main CLI entry point for typed-intl."""

import typer
from rich.console import Console

from typed_intl import __version__
from typed_intl.utils.config import get_settings
from typed_intl.utils.logging import configure_logging

from .commands import config, message, tag

app = typer.Typer(
    name="typed-intl",
    help="🌐 Inspect language tags and render ICU messages",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]typed-intl[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """
    typed-intl - typed internationalization toolkit.

    Parse and match BCP-47 language tags, negotiate languages and render
    ICU messages with CLDR locale data.
    """
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        dev_mode=settings.dev_mode,
    )


app.add_typer(tag.app, name="tag", help="🏷️  Inspect language tags")
app.add_typer(config.app, name="config", help="⚙️  Show configuration")
app.command("negotiate")(message.negotiate)
app.command("render")(message.render)


if __name__ == "__main__":
    app()
