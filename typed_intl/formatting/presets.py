"""Named format presets referenced from message templates.

A template such as ``{price, number, #.##}`` or ``{day, date, birthday}`` looks
up the preset by category (``number``, ``date``, ``time``) and name.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Literal, TypedDict


class NumberPreset(TypedDict, total=False):
    """Options of a named number format."""

    style: Literal["decimal", "percent", "currency"]
    currency: str
    minimum_fraction_digits: int
    maximum_fraction_digits: int
    use_grouping: bool


class DateTimePreset(TypedDict, total=False):
    """Options of a named date or time format.

    ``style``, ``pattern`` and ``skeleton`` take precedence in that order; the
    remaining fields mirror ``Intl.DateTimeFormat`` options and are converted to
    a CLDR skeleton.
    """

    style: Literal["short", "medium", "long", "full"]
    pattern: str
    skeleton: str
    year: Literal["numeric", "2-digit"]
    month: Literal["numeric", "2-digit", "narrow", "short", "long"]
    day: Literal["numeric", "2-digit"]
    weekday: Literal["narrow", "short", "long"]
    hour: Literal["numeric", "2-digit"]
    minute: Literal["numeric", "2-digit"]
    second: Literal["numeric", "2-digit"]
    hour12: bool


class FormatOptions(TypedDict, total=False):
    """Named presets per format category."""

    number: dict[str, NumberPreset]
    date: dict[str, DateTimePreset]
    time: dict[str, DateTimePreset]


FORMAT_CATEGORIES = ("number", "date", "time")


def _fraction_digits(digits: int) -> NumberPreset:
    return {"minimum_fraction_digits": digits, "maximum_fraction_digits": digits}


# "{1, number, #.##}" formats with exactly two fraction digits
DEFAULT_FORMATS: FormatOptions = {
    "number": {
        "#": _fraction_digits(0),
        "#.#": _fraction_digits(1),
        "#.##": _fraction_digits(2),
        "#.###": _fraction_digits(3),
        "#.####": _fraction_digits(4),
        "#.#####": _fraction_digits(5),
    }
}


def default_formats() -> FormatOptions:
    """Get a private copy of :data:`DEFAULT_FORMATS`."""
    return copy.deepcopy(DEFAULT_FORMATS)


def merge_formats(current: Mapping[str, Any], additions: Mapping[str, Any]) -> FormatOptions:
    """Shallow per-category merge of ``additions`` into ``current``.

    Presets with the same name are replaced, all other presets are kept.
    Neither argument is modified.
    """
    merged: dict[str, Any] = {category: dict(presets) for category, presets in current.items()}
    for category, presets in additions.items():
        merged.setdefault(category, {}).update(presets)
    return merged  # type: ignore[return-value]
