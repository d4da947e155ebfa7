"""Message formatting helpers for use inside message definitions.

These functions bind a language and an ICU message template to the context's
renderer. Typical use is in a localized messages function:

    def german(language):
        return {
            "unread": plural(language, Plural(
                zero="Keine neuen Nachrichten",
                one="Eine neue Nachricht",
                other=format_message(language, "{1, number} neue Nachrichten"),
            )),
        }
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from typed_intl.core.context import IntlContext, get_context
from typed_intl.core.language_tag import Language
from typed_intl.exceptions import NoMatchingSelectionError

P = TypeVar("P")

MAX_POSITIONAL_PARAMETERS = 5


def format_object(
    language: Language,
    template: str,
    format_options: Mapping[str, Any] | None = None,
    *,
    context: IntlContext | None = None,
) -> Callable[[Mapping[str, Any]], str]:
    """Format a message using ICU message syntax and a parameter mapping.

    Args:
        language: Locale used for formatting numbers, dates and plurals
        template: Message in ICU message syntax
        format_options: Named format presets; defaults to the context's presets
        context: Context providing presets and renderer; defaults to the current one

    Returns:
        A function accepting the parameter mapping

    Example:
        >>> msg = format_object("en", "Current message count is {count, number}")
        >>> msg({"count": 3})
        "Current message count is 3"
    """
    context = context or get_context()
    return context.render_message(language, template, format_options)


def format_message(
    language: Language,
    template: str,
    format_options: Mapping[str, Any] | None = None,
    *,
    context: IntlContext | None = None,
) -> Callable[..., str]:
    """Format a message using ICU message syntax and positional parameters.

    Up to five positional parameters are available as ``{1}`` to ``{5}``.

    Example:
        >>> format_message("en", "Current message count is {1, number}")(3)
        "Current message count is 3"
    """
    render = format_object(language, template, format_options, context=context)

    def positional(*args: Any) -> str:
        if len(args) > MAX_POSITIONAL_PARAMETERS:
            raise TypeError(
                f"At most {MAX_POSITIONAL_PARAMETERS} positional parameters are supported, "
                f"got {len(args)}"
            )
        return render({str(index): arg for index, arg in enumerate(args, start=1)})

    return positional


@dataclass(frozen=True)
class Plural:
    """Messages of a :func:`plural` message.

    ``zero``, ``one`` and ``two`` are fixed strings, the other cases receive the
    number. ``zero`` is used for exactly ``0``; omitted or empty cases fall back to
    ``other``.
    """

    other: Callable[[Any], str]
    zero: str | None = None
    one: str | None = None
    two: str | None = None
    few: Callable[[Any], str] | None = None
    many: Callable[[Any], str] | None = None


_PLURAL_SELECTORS = {
    "zero": "=0",
    "one": "one",
    "two": "two",
    "few": "few",
    "many": "many",
}


def plural(
    language: Language,
    cases: Plural | Mapping[str, Any],
    *,
    context: IntlContext | None = None,
) -> Callable[[Any], str]:
    """Create a message choosing between plural forms of the language.

    Args:
        language: Language whose plural rules pick the case
        cases: The messages per plural category; ``other`` is required
        context: Context providing the renderer; defaults to the current one

    Returns:
        A function accepting the number

    Raises:
        TypeError: If ``cases`` has no ``other`` case

    Example:
        >>> msg = plural("en", Plural(
        ...     zero="You have no new messages",
        ...     one="You have one new message",
        ...     other=lambda n: f"You have {n} new messages",
        ... ))
        >>> msg(5)
        "You have 5 new messages"
    """
    if not isinstance(cases, Plural):
        cases = Plural(**cases)

    branches = "".join(
        f"{selector} {{{category}}} "
        for category, selector in _PLURAL_SELECTORS.items()
        if getattr(cases, category)
    )
    template = f"{{1, plural, {branches}other {{other}}}}"
    selection = format_message(language, template, context=context)

    def choose(n: Any) -> str:
        category = selection(n)
        if category in ("zero", "one", "two"):
            return getattr(cases, category)
        if category in ("few", "many"):
            return getattr(cases, category)(n)
        return cases.other(n)

    return choose


def select(
    language: Language,
    options: Mapping[str, str | None],
    *,
    context: IntlContext | None = None,
) -> Callable[[str], str]:
    """Create a message choosing one of ``options`` by key.

    See :func:`select_object` if the messages need parameters.

    Example:
        >>> msg = select("en", {"draft": "Draft", "sent": "Sent", "other": "Unknown"})
        >>> msg("sent")
        "Sent"
    """
    return select_object(language, lambda selection: selection, options, context=context)


def select_object(
    language: Language,
    selector: Callable[[P], str],
    options: Mapping[str, str | None],
    *,
    context: IntlContext | None = None,
) -> Callable[[P], str]:
    """Create a message choosing and formatting one of ``options``.

    Every option is an ICU message formatted with the whole parameter object.

    Args:
        language: Locale used for formatting
        selector: Extracts the option key from the parameters
        options: Messages per key; ``other`` is used if no key matches
        context: Context providing presets and renderer; defaults to the current one

    Returns:
        A function accepting the parameters

    Raises:
        NoMatchingSelectionError: When called with parameters matching no option
            while there is no ``other`` option

    Example:
        >>> msg = select_object("en", lambda p: p["gender"], {
        ...     "female": "Dear Mrs. {name}",
        ...     "male": "Dear Mr. {name}",
        ...     "other": "Dear {name}",
        ... })
        >>> msg({"gender": "female", "name": "Granger"})
        "Dear Mrs. Granger"
    """
    formatted = {
        key: format_object(language, message, context=context)
        for key, message in options.items()
        if message
    }

    def choose(parameters: P) -> str:
        selection = selector(parameters)
        render = formatted.get(selection) or formatted.get("other")
        if render is None:
            raise NoMatchingSelectionError(
                f'Selection "{selection}" does not match any of the available options',
                selection=selection,
                options=formatted,
            )
        return render(parameters if isinstance(parameters, Mapping) else {})

    return choose


__all__ = [
    "MAX_POSITIONAL_PARAMETERS",
    "Plural",
    "format_message",
    "format_object",
    "plural",
    "select",
    "select_object",
]
