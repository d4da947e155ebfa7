"""Language tags, translators, message formatting and the i18n context."""

from typed_intl.core.language_tag import Language, LanguageTag, as_language_tag, language_tag
from typed_intl.core.preferences import parse_accept_language, pick_preferred_language
from typed_intl.core.context import (
    IntlContext,
    add_formats,
    default_context,
    formats,
    get_context,
    locale_context,
    preferred_language,
    reset_default_context,
    select_preferred_language,
    set_formats,
    set_preferred_language,
    use_context,
)
from typed_intl.core.translator import (
    ExtendingMessageProvider,
    LocalizedMessages,
    MessageProvider,
    Messages,
    MessagesParameter,
    Translator,
    translate,
)
from typed_intl.core.format import (
    Plural,
    format_message,
    format_object,
    plural,
    select,
    select_object,
)

__all__ = [
    "Language",
    "LanguageTag",
    "as_language_tag",
    "language_tag",
    "parse_accept_language",
    "pick_preferred_language",
    "IntlContext",
    "add_formats",
    "default_context",
    "formats",
    "get_context",
    "locale_context",
    "preferred_language",
    "reset_default_context",
    "select_preferred_language",
    "set_formats",
    "set_preferred_language",
    "use_context",
    "ExtendingMessageProvider",
    "LocalizedMessages",
    "MessageProvider",
    "Messages",
    "MessagesParameter",
    "Translator",
    "translate",
    "Plural",
    "format_message",
    "format_object",
    "plural",
    "select",
    "select_object",
]
