"""Typed internationalization for Python applications.

typed-intl resolves, for a preferred language, the best available messages from
layered full and partial translations, and formats parameterized messages with
locale-aware rules (ICU message syntax, CLDR data via Babel).

Usage:
    from typed_intl import language_tag, set_preferred_language, translate

    translator = (
        translate({"ok": "OK", "cancel": "Cancel"})
        .supporting("de", {"ok": "OK", "cancel": "Abbrechen"})
    )

    set_preferred_language("de-AT")
    translator.messages()["cancel"]  # "Abbrechen"
"""

__version__ = "1.1.0"

from typed_intl.core import (
    ExtendingMessageProvider,
    IntlContext,
    Language,
    LanguageTag,
    LocalizedMessages,
    MessageProvider,
    Messages,
    MessagesParameter,
    Plural,
    Translator,
    add_formats,
    format_message,
    format_object,
    formats,
    get_context,
    language_tag,
    locale_context,
    parse_accept_language,
    pick_preferred_language,
    plural,
    preferred_language,
    select,
    select_object,
    select_preferred_language,
    set_formats,
    set_preferred_language,
    translate,
    use_context,
)
from typed_intl.exceptions import (
    IncompleteTranslationError,
    InvalidTagError,
    MessageFormatError,
    NoMatchingSelectionError,
    NoPreferredLanguageError,
    TypedIntlError,
)
from typed_intl.formatting import FormatOptions

__all__ = [
    "__version__",
    "ExtendingMessageProvider",
    "FormatOptions",
    "IntlContext",
    "Language",
    "LanguageTag",
    "LocalizedMessages",
    "MessageProvider",
    "Messages",
    "MessagesParameter",
    "Plural",
    "Translator",
    "add_formats",
    "format_message",
    "format_object",
    "formats",
    "get_context",
    "language_tag",
    "locale_context",
    "parse_accept_language",
    "pick_preferred_language",
    "plural",
    "preferred_language",
    "select",
    "select_object",
    "select_preferred_language",
    "set_formats",
    "set_preferred_language",
    "translate",
    "use_context",
    "IncompleteTranslationError",
    "InvalidTagError",
    "MessageFormatError",
    "NoMatchingSelectionError",
    "NoPreferredLanguageError",
    "TypedIntlError",
]
