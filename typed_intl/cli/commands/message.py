"""Language negotiation and message rendering commands."""

from decimal import Decimal, InvalidOperation
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from typed_intl.core.context import IntlContext
from typed_intl.core.preferences import parse_accept_language
from typed_intl.exceptions import InvalidTagError, MessageFormatError
from typed_intl.utils.config import get_settings

console = Console()


def _parse_parameter(assignment: str) -> tuple[str, Any]:
    name, separator, raw = assignment.partition("=")
    if not separator or not name:
        raise typer.BadParameter(f"Expected name=value, got {assignment!r}")
    try:
        value: Any = Decimal(raw)
    except InvalidOperation:
        return name, raw
    if not value.is_finite():
        return name, raw
    if value == value.to_integral_value() and "." not in raw and "e" not in raw.lower():
        return name, int(value)
    return name, value


def negotiate(
    available: str = typer.Option(
        ...,
        "--available",
        "-a",
        help="Comma separated languages the application provides (e.g. de,fr)",
    ),
    accept: str = typer.Option(
        None,
        "--accept",
        help="HTTP Accept-Language header of the user",
    ),
) -> None:
    """Select the preferred language for a user."""
    context = IntlContext.from_settings(get_settings())
    try:
        languages = [language.strip() for language in available.split(",") if language.strip()]
        selected = context.select_preferred_language(languages, parse_accept_language(accept))
    except InvalidTagError as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        raise typer.Exit(1) from e

    console.print(selected.tag)


def render(
    template: str = typer.Argument(..., help="Message in ICU message syntax"),
    parameters: list[str] = typer.Argument(None, help="Parameters as name=value"),
    lang: str = typer.Option(None, "--lang", "-l", help="Locale used for formatting"),
) -> None:
    """Render an ICU message template.

    Numeric values are passed as numbers, everything else as text.
    """
    settings = get_settings()
    values = dict(_parse_parameter(parameter) for parameter in parameters or [])
    try:
        context = IntlContext.from_settings(settings)
        language = lang or settings.preferred_language or settings.fallback_language
        console.print(context.render_message(language, template)(values), markup=False)
    except (InvalidTagError, MessageFormatError) as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
