"""User language preferences.

Turns preference sources (an HTTP ``Accept-Language`` header, a platform locale
list) into ranked :class:`LanguageTag` lists and picks the language to use for
an application's available translations.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from typed_intl.core.language_tag import Language, LanguageTag, as_language_tag, language_tag
from typed_intl.exceptions import InvalidTagError
from typed_intl.utils.logging import get_logger

logger = get_logger(__name__)


def pick_preferred_language(
    available_translations: Iterable[Language],
    users_preferred_languages: Sequence[Language],
) -> LanguageTag:
    """Pick the best language based on the user's preferred languages.

    Args:
        available_translations: Languages the application provides translations for
        users_preferred_languages: The user's languages, most preferred first

    Returns:
        The first user language whose language subtag is available, or the
        user's most preferred language if none is

    Raises:
        ValueError: If ``users_preferred_languages`` is empty
    """
    if not users_preferred_languages:
        raise ValueError("At least one preferred language is required")

    available = [as_language_tag(language) for language in available_translations]
    preferred = [as_language_tag(language) for language in users_preferred_languages]
    for language in preferred:
        if language.matches_one_of(available):
            return language
    return preferred[0]


def parse_accept_language(header: str | None) -> list[LanguageTag]:
    """Parse an HTTP ``Accept-Language`` header.

    Parses "fr-CH, fr;q=0.9, en;q=0.8, *;q=0.5" into [fr-CH, fr, en]. Wildcards,
    entries with ``q=0`` and invalid tags are skipped.

    Args:
        header: Accept-Language header value

    Returns:
        Tags ordered by descending quality; equal qualities keep header order
    """
    if not header:
        return []

    preferences: list[tuple[float, LanguageTag]] = []
    for part in header.split(","):
        range_text, *params = part.split(";")
        range_text = range_text.strip()
        if not range_text or range_text == "*":
            continue

        quality = _quality(params)
        if quality is None:
            logger.warning("invalid_accept_language_quality", entry=part.strip())
            continue
        if quality <= 0:
            continue

        try:
            preferences.append((quality, language_tag(range_text)))
        except InvalidTagError:
            logger.warning("invalid_accept_language_tag", tag=range_text)

    return [tag for _, tag in sorted(preferences, key=lambda item: item[0], reverse=True)]


def _quality(params: list[str]) -> float | None:
    """Get the ``q`` weight of an Accept-Language entry; None if it is malformed."""
    for param in params:
        name, _, value = param.partition("=")
        if name.strip().lower() == "q":
            try:
                return float(value.strip())
            except ValueError:
                return None
    return 1.0
