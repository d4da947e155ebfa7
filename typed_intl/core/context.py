"""Internationalization context.

An :class:`IntlContext` owns the state message lookup and formatting depend on:
the preferred language, the named format presets and the message renderer.
Code receives a context explicitly or uses :func:`get_context`, which returns
the context bound with :func:`use_context` in the current (thread or async)
context, falling back to a process-wide default built from settings.
"""

from __future__ import annotations

import contextvars
import copy
import threading
from collections.abc import Callable, Generator, Iterable, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from typed_intl.core.language_tag import Language, LanguageTag, as_language_tag
from typed_intl.core.preferences import pick_preferred_language
from typed_intl.exceptions import NoPreferredLanguageError
from typed_intl.formatting.icu import IcuMessageRenderer, MessageRenderer
from typed_intl.formatting.presets import FormatOptions, default_formats, merge_formats
from typed_intl.utils.logging import get_logger

logger = get_logger(__name__)


class IntlContext:
    """Preferred language, format presets and renderer used for translations.

    All mutations are guarded by a lock, reads always observe the latest
    completed update.

    Example:
        >>> context = IntlContext(preferred_language="de-CH")
        >>> messages = translator.messages(context)
        >>> context.add_formats({"number": {"money": {"maximum_fraction_digits": 2}}})
    """

    def __init__(
        self,
        preferred_language: Language | None = None,
        formats: Mapping[str, Any] | None = None,
        renderer: MessageRenderer | None = None,
        fallback_language: Language = "en",
    ) -> None:
        """Initialize the context.

        Args:
            preferred_language: Language used by ``MessageProvider.messages()``
            formats: Named format presets, defaults to ``DEFAULT_FORMATS``
            renderer: Message renderer, defaults to :class:`IcuMessageRenderer`
            fallback_language: Used by :meth:`select_preferred_language` when no
                user preferences are supplied
        """
        self._lock = threading.RLock()
        self._preferred_language = (
            as_language_tag(preferred_language) if preferred_language is not None else None
        )
        if formats is None:
            self._formats: FormatOptions = default_formats()
        else:
            self._formats = copy.deepcopy(dict(formats))  # type: ignore[assignment]
        self.renderer: MessageRenderer = renderer or IcuMessageRenderer()
        self.fallback_language = as_language_tag(fallback_language)

    @classmethod
    def from_settings(cls, settings: Any = None) -> IntlContext:
        """Create a context from :class:`~typed_intl.utils.config.Settings`."""
        if settings is None:
            from typed_intl.utils.config import get_settings

            settings = get_settings()
        return cls(
            preferred_language=settings.preferred_language,
            fallback_language=settings.fallback_language,
        )

    def __repr__(self) -> str:
        return f"IntlContext(preferred_language={self._preferred_language!r})"

    # ------------------------------------------------------------------
    # Preferred language
    # ------------------------------------------------------------------

    @property
    def preferred_language(self) -> LanguageTag | None:
        """The language used by ``MessageProvider.messages()``, if set."""
        return self._preferred_language

    def require_preferred_language(self) -> LanguageTag:
        """Get the preferred language.

        Raises:
            NoPreferredLanguageError: If no preferred language has been set
        """
        language = self._preferred_language
        if language is None:
            raise NoPreferredLanguageError(
                "No preferred language set; call set_preferred_language() or "
                "select_preferred_language() first"
            )
        return language

    def set_preferred_language(self, language: Language) -> None:
        tag = as_language_tag(language)
        with self._lock:
            self._preferred_language = tag
        logger.debug("preferred_language_set", language=tag.tag)

    def select_preferred_language(
        self,
        available_translations: Iterable[Language],
        users_preferred_languages: Sequence[Language] | None = None,
    ) -> LanguageTag:
        """Set the preferred language from the app's translations and the user's preferences.

        Args:
            available_translations: Languages the application provides translations for
            users_preferred_languages: The user's languages, most preferred first;
                defaults to the fallback language

        Returns:
            The selected language
        """
        if not users_preferred_languages:
            users_preferred_languages = [self.fallback_language]
        selected = pick_preferred_language(available_translations, users_preferred_languages)
        self.set_preferred_language(selected)
        return selected

    def with_preferred_language(self, language: Language) -> IntlContext:
        """Create a copy of this context using another preferred language."""
        with self._lock:
            return IntlContext(
                preferred_language=language,
                formats=self._formats,
                renderer=self.renderer,
                fallback_language=self.fallback_language,
            )

    # ------------------------------------------------------------------
    # Format presets
    # ------------------------------------------------------------------

    def formats(self) -> FormatOptions:
        """Get a copy of the named format presets."""
        with self._lock:
            return copy.deepcopy(self._formats)

    def set_formats(self, format_options: Mapping[str, Any]) -> None:
        """Replace all format presets."""
        with self._lock:
            self._formats = copy.deepcopy(dict(format_options))  # type: ignore[assignment]

    def add_formats(self, format_options: Mapping[str, Any]) -> None:
        """Merge presets per category; presets with the same name are replaced."""
        with self._lock:
            self._formats = merge_formats(self._formats, copy.deepcopy(dict(format_options)))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_message(
        self,
        language: Language,
        template: str,
        format_options: Mapping[str, Any] | None = None,
    ) -> Callable[[Mapping[str, Any]], str]:
        """Compile ``template`` for ``language`` with the configured renderer.

        Args:
            language: Locale used for formatting and plural rules
            template: Message in ICU message syntax
            format_options: Format presets, defaults to this context's presets

        Returns:
            A function rendering the message for a parameter mapping
        """
        if format_options is None:
            format_options = self.formats()
        return self.renderer(as_language_tag(language).tag, template, format_options)


_default_context: IntlContext | None = None
_default_lock = threading.Lock()

_current_context: contextvars.ContextVar[IntlContext | None] = contextvars.ContextVar(
    "intl_context", default=None
)


def default_context() -> IntlContext:
    """Get the process-wide default context, created from settings on first use."""
    global _default_context

    if _default_context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = IntlContext.from_settings()
    return _default_context


def reset_default_context(context: IntlContext | None = None) -> IntlContext:
    """Replace the process-wide default context.

    Args:
        context: New default; a fresh context from settings if None

    Returns:
        The new default context
    """
    global _default_context

    with _default_lock:
        _default_context = context or IntlContext.from_settings()
        return _default_context


def get_context() -> IntlContext:
    """Get the context bound in the current context, else the default context."""
    return _current_context.get() or default_context()


@contextmanager
def use_context(context: IntlContext) -> Generator[IntlContext, None, None]:
    """Bind ``context`` as the current context for the duration of the block.

    Example:
        >>> with use_context(IntlContext(preferred_language="fr")):
        ...     translator.messages()["ok"]
    """
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)


@contextmanager
def locale_context(language: Language) -> Generator[IntlContext, None, None]:
    """Temporarily use another preferred language.

    The current context is left untouched; a copy with ``language`` as its
    preferred language is bound for the duration of the block.

    Example:
        >>> set_preferred_language("de")
        >>> with locale_context("en"):
        ...     translator.messages()["cancel"]
        "Cancel"
    """
    with use_context(get_context().with_preferred_language(language)) as context:
        logger.debug("entered_locale_context", language=str(context.preferred_language))
        yield context


def preferred_language() -> LanguageTag | None:
    """Get the preferred language of the current context."""
    return get_context().preferred_language


def set_preferred_language(language: Language) -> None:
    """Set the preferred language of the current context."""
    get_context().set_preferred_language(language)


def select_preferred_language(
    available_translations: Iterable[Language],
    users_preferred_languages: Sequence[Language] | None = None,
) -> LanguageTag:
    """Select the preferred language of the current context.

    See :meth:`IntlContext.select_preferred_language`.
    """
    return get_context().select_preferred_language(
        available_translations, users_preferred_languages
    )


def formats() -> FormatOptions:
    """Get the format presets of the current context."""
    return get_context().formats()


def set_formats(format_options: Mapping[str, Any]) -> None:
    """Replace the format presets of the current context."""
    get_context().set_formats(format_options)


def add_formats(format_options: Mapping[str, Any]) -> None:
    """Merge format presets into the current context."""
    get_context().add_formats(format_options)
