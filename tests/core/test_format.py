"""Tests for the message formatting helpers."""

from collections.abc import Mapping
from typing import Any

import pytest

from typed_intl import (
    IntlContext,
    NoMatchingSelectionError,
    Plural,
    add_formats,
    format_message,
    format_object,
    formats,
    plural,
    select,
    select_object,
    set_formats,
    translate,
)
from typed_intl.formatting.presets import DEFAULT_FORMATS

pytestmark = pytest.mark.unit


def arabic_cases() -> Plural:
    return Plural(
        zero="zero",
        one="one",
        two="two",
        few=lambda n: f"few {n}",
        many=lambda n: f"many {n}",
        other=lambda n: f"other {n}",
    )


class TestFormatObject:
    """Test format_object() and format_message()."""

    def test_named_parameters(self):
        msg = format_object("en", "Current message count is {count, number}")
        assert msg({"count": 3}) == "Current message count is 3"

    def test_positional_parameters(self):
        msg = format_message("en", "{1} sent {2, number} files to {3}")
        assert msg("Ada", 1200, "Bob") == "Ada sent 1,200 files to Bob"

    def test_locale_aware_numbers(self):
        assert format_message("de", "{1, number}")(1234.5) == "1.234,5"

    def test_default_number_presets(self):
        assert format_message("en", "{1, number, #.##}")(3) == "3.00"
        assert format_message("de", "{1, number, #.#}")(2.25) in ("2,2", "2,3")

    def test_too_many_positional_parameters(self):
        msg = format_message("en", "{1}")
        with pytest.raises(TypeError, match="At most 5"):
            msg(1, 2, 3, 4, 5, 6)

    def test_five_positional_parameters(self):
        msg = format_message("en", "{1}{2}{3}{4}{5}")
        assert msg("a", "b", "c", "d", "e") == "abcde"

    def test_custom_format_options(self):
        options = {"number": {"money": {"minimum_fraction_digits": 2}}}
        msg = format_message("en", "{1, number, money}", options)
        assert msg(5) == "5.00"


class TestFormatPresets:
    """Test the context's named format presets."""

    def test_defaults(self):
        assert formats() == DEFAULT_FORMATS

    def test_formats_returns_copy(self):
        formats()["number"].clear()
        assert formats()["number"] == DEFAULT_FORMATS["number"]

    def test_add_formats_merges_per_category(self):
        add_formats({"number": {"money": {"minimum_fraction_digits": 2}}})

        presets = formats()
        assert "money" in presets["number"]
        assert "#.##" in presets["number"]
        assert format_message("en", "{1, number, money}")(7) == "7.00"

    def test_add_formats_replaces_same_name(self):
        add_formats({"number": {"#.##": {"maximum_fraction_digits": 0}}})
        assert format_message("en", "{1, number, #.##}")(3.7) == "4"

    def test_set_formats_replaces_everything(self):
        set_formats({"date": {"day": {"pattern": "dd"}}})
        assert formats() == {"date": {"day": {"pattern": "dd"}}}


class TestPlural:
    """Test plural() dispatching on CLDR plural categories."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [
            (0, "zero"),
            (1, "one"),
            (2, "two"),
            (3, "few 3"),
            (21, "many 21"),
            (100, "other 100"),
        ],
    )
    def test_arabic_categories(self, n, expected):
        assert plural("ar", arabic_cases())(n) == expected

    def test_english(self):
        msg = plural(
            "en",
            Plural(
                zero="You have no new messages",
                one="You have one new message",
                other=lambda n: f"You have {n} new messages",
            ),
        )
        assert msg(0) == "You have no new messages"
        assert msg(1) == "You have one new message"
        assert msg(5) == "You have 5 new messages"

    def test_omitted_categories_fall_back_to_other(self):
        msg = plural("ar", Plural(other=lambda n: f"{n} items"))
        assert msg(0) == "0 items"
        assert msg(3) == "3 items"

    def test_empty_cases_fall_back_to_other(self):
        msg = plural("en", Plural(zero="", one="", other=lambda n: f"{n} files"))
        assert msg(0) == "0 files"
        assert msg(1) == "1 files"

    def test_mapping_cases(self):
        msg = plural("en", {"one": "a file", "other": lambda n: f"{n} files"})
        assert msg(1) == "a file"
        assert msg(2) == "2 files"

    def test_other_is_required(self):
        with pytest.raises(TypeError):
            plural("en", {"one": "a file"})

    def test_plural_inside_localized_messages(self):
        def german(language):
            return {
                "unread": plural(
                    language,
                    Plural(
                        zero="Keine neuen Nachrichten",
                        one="Eine neue Nachricht",
                        other=format_message(language, "{1, number} neue Nachrichten"),
                    ),
                )
            }

        translator = translate({"unread": lambda n: f"{n} unread"}).supporting("de", german)
        unread = translator.messages_for("de")["unread"]

        assert unread(0) == "Keine neuen Nachrichten"
        assert unread(1) == "Eine neue Nachricht"
        assert unread(1500) == "1.500 neue Nachrichten"


class TestSelect:
    """Test select() and select_object()."""

    def test_select_exact_key(self):
        msg = select("en", {"draft": "Draft", "sent": "Sent", "other": "Unknown"})
        assert msg("sent") == "Sent"

    def test_select_falls_back_to_other(self):
        msg = select("en", {"draft": "Draft", "other": "Unknown"})
        assert msg("archived") == "Unknown"

    def test_select_without_other_raises(self):
        msg = select("en", {"draft": "Draft", "sent": "Sent"})
        with pytest.raises(NoMatchingSelectionError) as exc_info:
            msg("archived")

        assert exc_info.value.selection == "archived"
        assert exc_info.value.options == ["draft", "sent"]

    def test_select_ignores_empty_options(self):
        msg = select("en", {"draft": None, "other": "Unknown"})
        assert msg("draft") == "Unknown"

    def test_select_object_formats_placeholders(self):
        msg = select_object(
            "en",
            lambda p: p["gender"],
            {
                "female": "Dear Mrs. {name}",
                "male": "Dear Mr. {name}",
                "other": "Dear {name}",
            },
        )
        assert msg({"gender": "female", "name": "Granger"}) == "Dear Mrs. Granger"
        assert msg({"gender": "unknown", "name": "Potter"}) == "Dear Potter"

    def test_select_object_formats_numbers(self):
        msg = select_object(
            "de",
            lambda p: p["unit"],
            {"km": "{distance, number} Kilometer", "other": "{distance, number}"},
        )
        assert msg({"unit": "km", "distance": 1234.5}) == "1.234,5 Kilometer"


class RecordingRenderer:
    """Renderer double recording every compiled template."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Mapping[str, Any] | None]] = []

    def __call__(self, locale, template, format_options=None):
        self.calls.append((locale, template, format_options))
        return lambda params: f"[{locale}] {template} {sorted(params.items())}"


class TestRendererInjection:
    """Test replacing the renderer of a context."""

    def test_format_object_uses_context_renderer(self):
        renderer = RecordingRenderer()
        context = IntlContext(renderer=renderer)

        result = format_object("de-ch", "{n}", context=context)({"n": 1})

        assert result == "[de-CH] {n} [('n', 1)]"
        assert renderer.calls[0][2] == DEFAULT_FORMATS

    def test_explicit_format_options_are_passed(self):
        renderer = RecordingRenderer()
        context = IntlContext(renderer=renderer)
        options = {"number": {"money": {"minimum_fraction_digits": 2}}}

        format_object("en", "{n}", options, context=context)

        assert renderer.calls == [("en", "{n}", options)]

    def test_plural_uses_context_renderer_for_category(self):
        context = IntlContext(renderer=lambda locale, template, options=None: lambda p: "one")

        msg = plural("en", Plural(one="single", other=lambda n: "many"), context=context)

        assert msg(42) == "single"
