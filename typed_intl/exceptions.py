"""Exception hierarchy for typed-intl.

All errors raised by this package are programmer errors (bad tags, incomplete
translations, missing selections) and derive from :class:`TypedIntlError`, which
carries structured context for logging.

Usage:
    from typed_intl.exceptions import InvalidTagError

    try:
        tag = language_tag(user_input)
    except InvalidTagError as e:
        logger.warning("invalid_language_tag", error=str(e), context=e.context)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class TypedIntlError(Exception):
    """Base exception for all typed-intl errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging (dict)
        original_error: Original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        """Format exception with context for logging."""
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}]"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# =============================================================================
# Language tags
# =============================================================================


class InvalidTagError(TypedIntlError, ValueError):
    """Raised when a string is not a valid BCP-47 language tag."""

    def __init__(self, message: str, *, tag: str | None = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if tag is not None:
            context["tag"] = tag[:64]
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.tag = tag


# =============================================================================
# Translations
# =============================================================================


class IncompleteTranslationError(TypedIntlError):
    """Raised by ``Translator.supporting`` when a full translation misses keys.

    A full translation must provide every key of the default messages; use
    ``partially_supporting`` for translations that only override some keys.
    """

    def __init__(
        self,
        message: str,
        *,
        language: str | None = None,
        missing_keys: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        self.language = language
        self.missing_keys = sorted(missing_keys)
        context = kwargs.get("context", {})
        if language:
            context["language"] = language
        if self.missing_keys:
            context["missing_keys"] = ",".join(self.missing_keys)
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class NoPreferredLanguageError(TypedIntlError):
    """Raised when messages are requested before a preferred language was set."""


# =============================================================================
# Formatting
# =============================================================================


class NoMatchingSelectionError(TypedIntlError):
    """Raised when a select key matches no option and there is no ``other`` option."""

    def __init__(
        self,
        message: str,
        *,
        selection: str | None = None,
        options: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        self.selection = selection
        self.options = list(options)
        context = kwargs.get("context", {})
        if selection is not None:
            context["selection"] = selection
        if self.options:
            context["options"] = ",".join(self.options)
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class MessageFormatError(TypedIntlError):
    """Raised for malformed message templates or missing message parameters."""

    def __init__(
        self,
        message: str,
        *,
        template: str | None = None,
        position: int | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if template is not None:
            context["template"] = template[:100]  # Truncate long templates
        if position is not None:
            context["position"] = position
        kwargs["context"] = context
        super().__init__(message, **kwargs)


__all__ = [
    "TypedIntlError",
    "InvalidTagError",
    "IncompleteTranslationError",
    "NoPreferredLanguageError",
    "NoMatchingSelectionError",
    "MessageFormatError",
]
