"""ICU message formatting engine backed by Babel locale data."""

from typed_intl.formatting.icu import (
    CompiledMessage,
    IcuMessageRenderer,
    MessageRenderer,
    parse_template,
)
from typed_intl.formatting.locale_data import babel_locale, plural_category
from typed_intl.formatting.presets import (
    DEFAULT_FORMATS,
    DateTimePreset,
    FormatOptions,
    NumberPreset,
    default_formats,
    merge_formats,
)

__all__ = [
    "CompiledMessage",
    "IcuMessageRenderer",
    "MessageRenderer",
    "parse_template",
    "babel_locale",
    "plural_category",
    "DEFAULT_FORMATS",
    "DateTimePreset",
    "FormatOptions",
    "NumberPreset",
    "default_formats",
    "merge_formats",
]
