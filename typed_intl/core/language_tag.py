"""Language tags as defined in BCP-47.

A :class:`LanguageTag` is only ever created through :func:`language_tag` (or
:meth:`LanguageTag.from_subtags`), which intern every tag: the same tag text,
ignoring case, always yields the very same instance. Comparing tags with ``is``
is therefore valid.

Usage:
    from typed_intl.core.language_tag import language_tag

    tag = language_tag("de-ch-1901")
    tag.tag                  # "de-CH-1901"
    tag.parent()             # LanguageTag('de-CH')
    tag.pick_best_matching([language_tag("de"), language_tag("fr-CH")])
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from typed_intl.exceptions import InvalidTagError
from typed_intl.utils.logging import get_logger

logger = get_logger(__name__)

_TAG_PATTERN = re.compile(
    r"^"
    r"([a-z]{2,3})"  # language
    r"(-[a-z]{3})?"  # extended language
    r"(-[a-z]{4})?"  # script
    r"(-(?:[a-z]{2}|[0-9]{3}))?"  # region
    r"(-(?:[a-z0-9]{5,8}|[0-9][a-z0-9]{3}))?"  # variant
    r"(-[a-z0-9](?:-[a-z0-9]{1,8})+)?"  # extension
    r"$",
    re.IGNORECASE,
)

# Weights used by LanguageTag.equality, most significant subtag first
_LANGUAGE_POINTS = 32
_SUBTAG_POINTS = (
    ("extended_language", 16),
    ("script", 8),
    ("region", 4),
    ("variant", 2),
    ("extension", 1),
)


@dataclass(frozen=True, repr=False)
class LanguageTag:
    """A canonical, interned BCP-47 language tag.

    Subtag casing is normalized: language, extended language, variant and
    extension are lower case, the script is title case and the region is
    upper case.

    Attributes:
        language: Primary language subtag (e.g. ``en``)
        extended_language: Extended language subtag (e.g. ``yue`` in ``zh-yue``)
        script: Script subtag (e.g. ``Latn`` in ``az-Latn``)
        region: Region subtag (e.g. ``US`` in ``en-US``)
        variant: Variant subtag (e.g. ``nedis`` in ``sl-IT-nedis``)
        extension: Extension subtags (e.g. ``u-co-phonebk``)
        tag: Canonical text of the whole tag
    """

    language: str
    extended_language: str | None = None
    script: str | None = None
    region: str | None = None
    variant: str | None = None
    extension: str | None = None

    @property
    def tag(self) -> str:
        return "-".join(
            subtag
            for subtag in (
                self.language,
                self.extended_language,
                self.script,
                self.region,
                self.variant,
                self.extension,
            )
            if subtag
        )

    def __str__(self) -> str:
        return self.tag

    def __repr__(self) -> str:
        return f"LanguageTag({self.tag!r})"

    @classmethod
    def parse(cls, text: str) -> LanguageTag:
        """Alias of :func:`language_tag`."""
        return _registry.from_string(text)

    @classmethod
    def from_subtags(
        cls,
        language: str,
        extended_language: str | None = None,
        script: str | None = None,
        region: str | None = None,
        variant: str | None = None,
        extension: str | None = None,
    ) -> LanguageTag:
        """Get the interned tag for the given subtags.

        Omitted subtags are left out of the tag.

        Raises:
            InvalidTagError: If a subtag does not fit its position in the tag
                grammar (e.g. ``zz`` passed as script)
        """
        return _registry.from_subtags(
            language, extended_language, script, region, variant, extension
        )

    def matches(self, other: LanguageTag) -> bool:
        """Check whether both tags specify the same language.

        Only the :attr:`language` subtags are compared.
        """
        return self.language == other.language

    def matches_one_of(self, others: Iterable[LanguageTag]) -> bool:
        """Check whether at least one of ``others`` specifies the same language."""
        return any(self.matches(other) for other in others)

    def parent(self) -> LanguageTag | None:
        """Get the next more generic tag by omitting the most specific subtag.

        Returns:
            The parent tag, or None if this tag only has a language subtag.
        """
        if self.extension:
            return self.from_subtags(
                self.language, self.extended_language, self.script, self.region, self.variant
            )
        if self.variant:
            return self.from_subtags(
                self.language, self.extended_language, self.script, self.region
            )
        if self.region:
            return self.from_subtags(self.language, self.extended_language, self.script)
        if self.script:
            return self.from_subtags(self.language, self.extended_language)
        if self.extended_language:
            return self.from_subtags(self.language)
        return None

    def ancestors(self) -> Iterator[LanguageTag]:
        """Iterate over this tag and all of its parents, most specific first."""
        current: LanguageTag | None = self
        while current is not None:
            yield current
            current = current.parent()

    def equality(self, other: LanguageTag) -> float:
        """Calculate how similar this tag is to ``other``.

        The absolute value carries no meaning; it is meant for picking the best
        matching tag from a list. Subtags missing on both sides are ignored.

        Returns:
            ``0`` if the languages differ, ``1`` if all subtags match and a value
            in between otherwise.
        """
        if self.language != other.language:
            return 0.0

        possible = _LANGUAGE_POINTS
        achieved = _LANGUAGE_POINTS
        for name, points in _SUBTAG_POINTS:
            mine = getattr(self, name)
            theirs = getattr(other, name)
            if not (mine or theirs):
                continue
            possible += points
            if mine == theirs:
                achieved += points
        return achieved / possible

    def pick_best_matching(self, others: Iterable[LanguageTag]) -> LanguageTag | None:
        """Pick the tag from ``others`` with the highest :meth:`equality`.

        Ties keep the first candidate seen.

        Returns:
            The best matching tag, or None if no candidate shares the language.
        """
        best: LanguageTag | None = None
        best_equality = 0.0
        for other in others:
            equality = self.equality(other)
            if equality > best_equality:
                best, best_equality = other, equality
        return best


class _LanguageTagRegistry:
    """Intern table mapping lower-cased tag text to its single instance."""

    def __init__(self) -> None:
        self._instances: dict[str, LanguageTag] = {}
        self._lock = threading.RLock()

    def from_string(self, text: str) -> LanguageTag:
        key = text.lower()
        existing = self._instances.get(key)
        if existing is not None:
            return existing

        match = _TAG_PATTERN.match(key)
        if match is None:
            raise InvalidTagError(f"Invalid language tag {text!r}", tag=text)

        language, *rest = match.groups()
        subtags = [group[1:] if group else None for group in rest]
        return self._intern(key, language, *subtags)

    def from_subtags(
        self,
        language: str,
        extended_language: str | None = None,
        script: str | None = None,
        region: str | None = None,
        variant: str | None = None,
        extension: str | None = None,
    ) -> LanguageTag:
        supplied = (language, extended_language, script, region, variant, extension)
        text = "-".join(subtag for subtag in supplied if subtag)
        tag = self.from_string(text)

        # The text must parse back into the same slots
        parsed = (
            tag.language,
            tag.extended_language,
            tag.script,
            tag.region,
            tag.variant,
            tag.extension,
        )
        if [_lower(s) for s in supplied] != [_lower(s) for s in parsed]:
            raise InvalidTagError(
                f"Subtags do not form a valid language tag: {supplied!r}", tag=text
            )
        return tag

    def _intern(
        self,
        key: str,
        language: str,
        extended_language: str | None,
        script: str | None,
        region: str | None,
        variant: str | None,
        extension: str | None,
    ) -> LanguageTag:
        with self._lock:
            existing = self._instances.get(key)
            if existing is not None:
                return existing

            instance = LanguageTag(
                language=language.lower(),
                extended_language=extended_language.lower() if extended_language else None,
                script=script[0].upper() + script[1:].lower() if script else None,
                region=region.upper() if region else None,
                variant=variant.lower() if variant else None,
                extension=extension.lower() if extension else None,
            )
            self._instances[key] = instance
            logger.debug("language_tag_interned", tag=instance.tag)
            return instance


def _lower(subtag: str | None) -> str | None:
    return subtag.lower() if subtag else None


_registry = _LanguageTagRegistry()


def language_tag(text: str) -> LanguageTag:
    """Get the :class:`LanguageTag` for a BCP-47 tag string.

    The same instance is returned for the same string, ignoring case.

    Args:
        text: A language tag (e.g. ``en-US``)

    Returns:
        The canonical interned tag

    Raises:
        InvalidTagError: If ``text`` is not a valid language tag
    """
    return _registry.from_string(text)


Language = LanguageTag | str
"""Either a :class:`LanguageTag` or tag text accepted by :func:`language_tag`."""


def as_language_tag(language: Language) -> LanguageTag:
    """Convert tag text to a :class:`LanguageTag`; tags are returned unchanged."""
    return language_tag(language) if isinstance(language, str) else language
