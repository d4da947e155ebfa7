"""Language tag inspection commands."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typed_intl.core.language_tag import LanguageTag, language_tag
from typed_intl.exceptions import InvalidTagError

app = typer.Typer(no_args_is_help=True)
console = Console()

_SUBTAGS = ("language", "extended_language", "script", "region", "variant", "extension")


def _parse_or_exit(text: str) -> LanguageTag:
    try:
        return language_tag(text)
    except InvalidTagError as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        raise typer.Exit(1) from e


@app.command("parse")
def parse_tag(
    tag: str = typer.Argument(..., help="Language tag (e.g. de-ch-1901)"),
) -> None:
    """Show the canonical form and the subtags of a language tag."""
    parsed = _parse_or_exit(tag)

    table = Table(title=f"Language tag {parsed.tag}", show_header=True)
    table.add_column("Subtag", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name in _SUBTAGS:
        value = getattr(parsed, name)
        table.add_row(name.replace("_", " ").title(), value or "[dim]-[/dim]")

    console.print(table)


@app.command("parents")
def show_parents(
    tag: str = typer.Argument(..., help="Language tag"),
) -> None:
    """Show the generalization chain of a language tag, most specific first."""
    parsed = _parse_or_exit(tag)
    for depth, ancestor in enumerate(parsed.ancestors()):
        console.print(f"{'  ' * depth}{ancestor.tag}")


@app.command("match")
def match_tags(
    tag: str = typer.Argument(..., help="Requested language tag"),
    candidates: list[str] = typer.Argument(..., help="Available language tags"),
) -> None:
    """Score candidate tags against a tag and show the best match."""
    requested = _parse_or_exit(tag)
    available = [_parse_or_exit(candidate) for candidate in candidates]

    table = Table(title=f"Matches for {requested.tag}", show_header=True)
    table.add_column("Candidate", style="cyan", no_wrap=True)
    table.add_column("Equality", justify="right")
    for candidate in available:
        table.add_row(candidate.tag, f"{requested.equality(candidate):.3f}")
    console.print(table)

    best = requested.pick_best_matching(available)
    if best is None:
        console.print("[yellow]No match[/yellow]")
    else:
        console.print(f"Best match: [bold green]{best.tag}[/bold green]")
