"""Locale-aware number, date and plural helpers built on Babel.

The message renderer delegates every locale-sensitive decision to this module:
plural categories, number patterns and date/time patterns all come from the
CLDR data shipped with Babel.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_skeleton, format_time
from babel.numbers import format_decimal, format_percent, get_territory_currencies

from typed_intl.core.language_tag import language_tag
from typed_intl.exceptions import MessageFormatError
from typed_intl.utils.logging import get_logger

logger = get_logger(__name__)

# Used when Babel knows neither the tag nor any of its parents
FALLBACK_LOCALE = "en"

_SKELETON_FIELDS: dict[str, dict[str, str]] = {
    "weekday": {"narrow": "EEEEE", "short": "E", "long": "EEEE"},
    "year": {"numeric": "y", "2-digit": "yy"},
    "month": {"numeric": "M", "2-digit": "MM", "short": "MMM", "long": "MMMM", "narrow": "MMMMM"},
    "day": {"numeric": "d", "2-digit": "dd"},
    "minute": {"numeric": "m", "2-digit": "mm"},
    "second": {"numeric": "s", "2-digit": "ss"},
}


@lru_cache(maxsize=256)
def babel_locale(tag: str) -> Locale:
    """Get the Babel locale for a language tag.

    Walks the tag's generalization chain (``de-CH-1901`` -> ``de-CH`` -> ``de``)
    until Babel has data for it.

    Args:
        tag: Language tag text

    Returns:
        The most specific Babel locale available, ``en`` if there is none

    Raises:
        InvalidTagError: If ``tag`` is not a valid language tag
    """
    for candidate in language_tag(tag).ancestors():
        try:
            return Locale.parse(candidate.tag, sep="-")
        except (ValueError, UnknownLocaleError):
            continue

    logger.debug("locale_data_fallback", tag=tag, fallback=FALLBACK_LOCALE)
    return Locale.parse(FALLBACK_LOCALE)


def plural_category(value: Any, locale: Locale, *, ordinal: bool = False) -> str:
    """Get the CLDR plural category (zero, one, two, few, many, other) of a number."""
    rule = locale.ordinal_form if ordinal else locale.plural_form
    return rule(to_number(value))


def to_number(value: Any) -> int | float | Decimal:
    """Coerce a message parameter to a number."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise MessageFormatError(
            f"Expected a number, got {value!r}", original_error=e
        ) from e


def format_number(
    value: Any,
    locale: Locale,
    style: str | None = None,
    presets: Mapping[str, Mapping[str, Any]] | None = None,
) -> str:
    """Format a number.

    Args:
        value: Number to format
        locale: Babel locale
        style: ``integer``, ``percent``, ``currency``, a preset name or a CLDR
            number pattern; None for the locale's decimal format
        presets: Named number presets

    Returns:
        Formatted number string

    Examples:
        >>> format_number(1234.5, Locale.parse("de"))
        "1.234,5"
        >>> format_number(0.25, Locale.parse("en"), "percent")
        "25%"
        >>> format_number(3, Locale.parse("en"), "#.##", DEFAULT_FORMATS["number"])
        "3.00"
    """
    number = to_number(value)

    if style is None:
        return format_decimal(number, locale=locale)
    if presets and style in presets:
        return format_number_preset(number, locale, presets[style])
    if style == "integer":
        return format_number_preset(number, locale, {"maximum_fraction_digits": 0})
    if style == "percent":
        return format_percent(number, locale=locale)
    if style == "currency":
        return format_number_preset(number, locale, {"style": "currency"})

    try:
        return format_decimal(number, format=style, locale=locale)
    except ValueError as e:
        raise MessageFormatError(f"Invalid number format {style!r}", original_error=e) from e


def format_number_preset(value: Any, locale: Locale, preset: Mapping[str, Any]) -> str:
    """Format a number according to a :class:`~typed_intl.formatting.presets.NumberPreset`."""
    style = preset.get("style", "decimal")
    if style == "percent":
        pattern = locale.percent_formats[None]
    elif style == "currency":
        pattern = locale.currency_formats["standard"]
    else:
        pattern = locale.decimal_formats[None]

    currency = None
    if style == "currency":
        currency = preset.get("currency") or _default_currency(locale)

    minimum = preset.get("minimum_fraction_digits")
    maximum = preset.get("maximum_fraction_digits")
    fraction_digits_set = minimum is not None or maximum is not None
    if fraction_digits_set:
        minimum = minimum or 0
        if maximum is None:
            maximum = max(minimum, 3 if style == "decimal" else 0)
        pattern = copy.copy(pattern)
        pattern.frac_prec = (minimum, max(minimum, maximum))

    return pattern.apply(
        to_number(value),
        locale,
        currency=currency,
        currency_digits=not fraction_digits_set,
        group_separator=preset.get("use_grouping", True),
    )


def _default_currency(locale: Locale) -> str:
    currencies = get_territory_currencies(locale.territory) if locale.territory else []
    if not currencies:
        raise MessageFormatError(f"No default currency for locale {locale}")
    return currencies[0]


def format_date_value(
    value: Any,
    locale: Locale,
    kind: str = "date",
    style: str | None = None,
    presets: Mapping[str, Mapping[str, Any]] | None = None,
) -> str:
    """Format a date or time.

    Args:
        value: ``date``, ``datetime``, ``time`` or POSIX timestamp in seconds
        locale: Babel locale
        kind: ``date`` or ``time``
        style: ``short``, ``medium``, ``long``, ``full``, a preset name or a
            CLDR date pattern; None for ``medium``
        presets: Named presets of the same kind

    Returns:
        Formatted date or time string
    """
    moment = _to_datetime_value(value)

    if presets and style in presets:
        preset = presets[style]
        if "style" in preset:
            style = preset["style"]
        elif "pattern" in preset:
            style = preset["pattern"]
        else:
            skeleton = preset.get("skeleton") or skeleton_from_options(preset)
            if skeleton:
                return format_skeleton(skeleton, _as_datetime(moment), locale=locale)
            style = None

    style = style or "medium"
    try:
        if kind == "time":
            if not isinstance(moment, (datetime, time)):
                raise MessageFormatError("A date value cannot be formatted as a time")
            return format_time(moment, format=style, locale=locale)
        if isinstance(moment, time):
            raise MessageFormatError("A time value cannot be formatted as a date")
        return format_date(moment, format=style, locale=locale)
    except (ValueError, KeyError) as e:
        raise MessageFormatError(f"Invalid {kind} format {style!r}", original_error=e) from e


def skeleton_from_options(options: Mapping[str, Any]) -> str:
    """Build a CLDR skeleton (e.g. ``yMMMd``) from ``Intl.DateTimeFormat``-like options."""
    parts = [
        codes[options[field]]
        for field, codes in _SKELETON_FIELDS.items()
        if field in ("weekday", "year", "month", "day") and options.get(field) in codes
    ]
    hour = options.get("hour")
    if hour in ("numeric", "2-digit"):
        letter = "h" if options.get("hour12") else "H"
        parts.append(letter * (2 if hour == "2-digit" else 1))
    for field in ("minute", "second"):
        code = _SKELETON_FIELDS[field].get(options.get(field, ""))
        if code:
            parts.append(code)
    return "".join(parts)


def _to_datetime_value(value: Any) -> date | datetime | time:
    if isinstance(value, (date, time)):
        return value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    raise MessageFormatError(f"Expected a date, time or timestamp, got {value!r}")


def _as_datetime(value: date | datetime | time) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return datetime.combine(date(1970, 1, 1), value)
