"""Translators resolving layered message sets per language.

A :class:`Translator` starts from default messages and is extended with full
(:meth:`~Translator.supporting`) or partial
(:meth:`~Translator.partially_supporting`) translations. Every layering step
returns a new translator. Looking up messages picks the best matching
supported language and merges the translations along its generalization chain
over the defaults.

Usage:
    from typed_intl import translate

    translator = (
        translate({"ok": "OK", "cancel": "Cancel", "welcome": "Welcome"})
        .supporting("de", {"ok": "OK", "cancel": "Abbrechen", "welcome": "Willkommen"})
        .partially_supporting("de-CH", {"welcome": "Grüezi"})
    )

    translator.messages_for("de-CH-1901")["cancel"]   # "Abbrechen"
    translator.messages_for("de-CH-1901")["welcome"]  # "Grüezi"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from typed_intl.core.context import IntlContext, get_context
from typed_intl.core.language_tag import Language, LanguageTag, as_language_tag
from typed_intl.exceptions import IncompleteTranslationError
from typed_intl.utils.logging import get_logger

logger = get_logger(__name__)

Messages = Mapping[str, Any]
"""Message key to message; messages are strings or functions returning strings."""

LocalizedMessages = Callable[[LanguageTag], Messages]
"""Messages depending on the requested language (e.g. for language specific formatting)."""

MessagesParameter = Union[Messages, LocalizedMessages]
"""Either :data:`Messages` or :data:`LocalizedMessages`."""


def localized_messages(messages: MessagesParameter) -> LocalizedMessages:
    """Wrap a messages mapping into a function of the requested language."""
    if isinstance(messages, Mapping):
        return lambda language: messages
    return messages


@dataclass(frozen=True)
class _MessageCache:
    language: LanguageTag
    messages: Messages


class MessageProvider(ABC):
    """Provides messages for a language, caching the last requested language."""

    def __init__(self) -> None:
        self._message_cache: _MessageCache | None = None

    def messages_for(self, language: Language) -> Messages:
        """Get the messages for a language.

        Subsequent calls with the same language return the same object, so
        calling this on every access is cheap.

        Args:
            language: The language to return the best matching translation for

        Returns:
            Read-only messages; keys missing in the best matching translation
            are filled from its parent languages and the default messages
        """
        tag = as_language_tag(language)
        cache = self._message_cache
        if cache is not None and cache.language is tag:
            return cache.messages

        messages = MappingProxyType(dict(self._build_messages(tag)))
        self._message_cache = _MessageCache(tag, messages)
        return messages

    def messages(self, context: IntlContext | None = None) -> Messages:
        """Like :meth:`messages_for` for the context's preferred language.

        Raises:
            NoPreferredLanguageError: If the context has no preferred language
        """
        context = context or get_context()
        return self.messages_for(context.require_preferred_language())

    def extending(self, base: MessageProvider) -> MessageProvider:
        """Combine the messages of ``base`` with the messages of this provider.

        Messages of this provider override messages with the same key in ``base``.
        """
        return ExtendingMessageProvider(base, self)

    @abstractmethod
    def _build_messages(self, language: LanguageTag) -> Messages:
        """Build the messages for ``language`` on a cache miss."""


class ExtendingMessageProvider(MessageProvider):
    """Merges the messages of two providers, ``extension`` winning on conflicts."""

    def __init__(self, base: MessageProvider, extension: MessageProvider) -> None:
        super().__init__()
        self.base = base
        self.extension = extension

    def _build_messages(self, language: LanguageTag) -> Messages:
        return {**self.base.messages_for(language), **self.extension.messages_for(language)}


class Translator(MessageProvider):
    """Builder for a :class:`MessageProvider` layering translations over default messages."""

    def __init__(
        self,
        default_messages: MessagesParameter,
        translations: Mapping[LanguageTag, LocalizedMessages] | None = None,
    ) -> None:
        super().__init__()
        self._default_messages = localized_messages(default_messages)
        self._translations: dict[LanguageTag, LocalizedMessages] = dict(translations or {})

    def __repr__(self) -> str:
        languages = ", ".join(tag.tag for tag in self._translations)
        return f"Translator(supporting=[{languages}])"

    @property
    def supported_languages(self) -> tuple[LanguageTag, ...]:
        """Languages with a (full or partial) translation, in the order they were added."""
        return tuple(self._translations)

    def partially_supporting(
        self, language: Language, translation: MessagesParameter
    ) -> Translator:
        """Get a new translator additionally supporting a partial translation.

        Keys missing in ``translation`` are filled from parent languages and the
        default messages.

        Args:
            language: Language of the translation
            translation: Messages for some of the default keys

        Returns:
            A new translator; this one is left unchanged

        Raises:
            InvalidTagError: If ``language`` is not a valid language tag
        """
        tag = as_language_tag(language)
        translations = dict(self._translations)
        translations[tag] = localized_messages(translation)
        return Translator(self._default_messages, translations)

    def supporting(self, language: Language, translation: MessagesParameter) -> Translator:
        """Get a new translator additionally supporting a full translation.

        Args:
            language: Language of the translation
            translation: Messages for every key of the default messages

        Returns:
            A new translator; this one is left unchanged

        Raises:
            InvalidTagError: If ``language`` is not a valid language tag
            IncompleteTranslationError: If ``translation`` misses default keys
        """
        tag = as_language_tag(language)
        localized = localized_messages(translation)
        missing = set(self._default_messages(tag)) - set(localized(tag))
        if missing:
            raise IncompleteTranslationError(
                f"Translation for {tag.tag} is missing {len(missing)} message(s)",
                language=tag.tag,
                missing_keys=missing,
            )
        return self.partially_supporting(tag, localized)

    def _build_messages(self, language: LanguageTag) -> Messages:
        best_match = language.pick_best_matching(self._translations)
        messages = dict(self._default_messages(language))

        layers: list[LanguageTag] = []
        if best_match is not None:
            # Root first so more specific translations override generic ones
            layers = list(best_match.ancestors())[::-1]
        for layer in layers:
            translation = self._translations.get(layer)
            if translation is not None:
                messages.update(translation(language))

        logger.debug(
            "messages_resolved",
            requested=language.tag,
            best_match=best_match.tag if best_match else None,
            layers=[layer.tag for layer in layers if layer in self._translations],
        )
        return messages


def translate(default_messages: MessagesParameter) -> Translator:
    """Create a :class:`Translator` with the given default messages.

    Args:
        default_messages: Messages used when no translation provides a key

    Returns:
        A translator without any translations
    """
    return Translator(default_messages)
