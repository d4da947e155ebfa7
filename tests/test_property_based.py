"""
Property-based tests for language tags using Hypothesis.

Tags are generated from the tag grammar so the invariants are checked across
every combination of subtags and casings.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from typed_intl import language_tag, translate

pytestmark = pytest.mark.property

alpha = "abcdefghijklmnopqrstuvwxyz"
alnum = alpha + "0123456789"


def subtag(alphabet: str, min_size: int, max_size: int) -> st.SearchStrategy[str]:
    return st.text(alphabet=alphabet, min_size=min_size, max_size=max_size)


languages = subtag(alpha, 2, 3)
extended_languages = st.none() | subtag(alpha, 3, 3)
scripts = st.none() | subtag(alpha, 4, 4)
regions = st.none() | subtag(alpha, 2, 2) | subtag("0123456789", 3, 3)
variants = st.none() | subtag(alnum, 5, 8) | st.builds(
    lambda digit, rest: digit + rest, subtag("0123456789", 1, 1), subtag(alnum, 3, 3)
)
extensions = st.none() | st.builds(
    lambda singleton, parts: "-".join([singleton, *parts]),
    subtag(alnum, 1, 1),
    st.lists(subtag(alnum, 1, 8), min_size=1, max_size=3),
)


@st.composite
def tag_texts(draw) -> str:
    parts = [
        draw(languages),
        draw(extended_languages),
        draw(scripts),
        draw(regions),
        draw(variants),
        draw(extensions),
    ]
    return "-".join(part for part in parts if part)


@st.composite
def mixed_case(draw, text: str) -> str:
    flips = draw(st.lists(st.booleans(), min_size=len(text), max_size=len(text)))
    return "".join(char.upper() if flip else char for char, flip in zip(text, flips))


class TestLanguageTagProperties:
    """Property-based tests for LanguageTag."""

    @given(text=tag_texts())
    def test_case_insensitive_identity(self, text):
        assert language_tag(text) is language_tag(text.upper())
        assert language_tag(text) is language_tag(text.lower())

    @given(data=st.data())
    def test_mixed_case_identity(self, data):
        text = data.draw(tag_texts())
        assert language_tag(data.draw(mixed_case(text))) is language_tag(text)

    @given(text=tag_texts())
    def test_canonical_text_round_trips(self, text):
        tag = language_tag(text)
        assert language_tag(tag.tag) is tag
        assert tag.tag.lower() == text.lower()

    @given(text=tag_texts())
    def test_subtag_casing(self, text):
        tag = language_tag(text.upper())
        assert tag.language == tag.language.lower()
        if tag.script:
            assert tag.script == tag.script.title()
        if tag.region:
            assert tag.region == tag.region.upper()
        if tag.variant:
            assert tag.variant == tag.variant.lower()

    @given(text=tag_texts())
    def test_equality_with_itself(self, text):
        tag = language_tag(text)
        assert tag.equality(tag) == 1.0

    @given(first=tag_texts(), second=tag_texts())
    def test_equality_bounds(self, first, second):
        a, b = language_tag(first), language_tag(second)
        score = a.equality(b)

        assert 0.0 <= score <= 1.0
        assert score == b.equality(a)
        if a.language != b.language:
            assert score == 0
        else:
            assert score > 0

    @given(text=tag_texts())
    def test_parent_chain_terminates_at_language(self, text):
        chain = list(language_tag(text).ancestors())

        assert len(chain) <= 6
        assert chain[-1] is language_tag(chain[0].language)
        assert chain[-1].parent() is None

    @given(text=tag_texts())
    def test_ancestors_score_decreasing(self, text):
        tag = language_tag(text)
        scores = [tag.equality(ancestor) for ancestor in tag.ancestors()]
        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == len(scores)

    @given(text=tag_texts())
    def test_pick_best_matching_prefers_self(self, text):
        tag = language_tag(text)
        candidates = list(tag.ancestors())[::-1]
        assert tag.pick_best_matching(candidates) is tag


class TestTranslatorProperties:
    """Property-based tests for message resolution."""

    @settings(max_examples=50)
    @given(text=tag_texts())
    def test_unsupported_languages_get_defaults(self, text):
        translator = translate({"ok": "OK"}).supporting("xx-Xxxx", {"ok": "??"})
        tag = language_tag(text)

        expected = "??" if tag.language == "xx" else "OK"
        assert translator.messages_for(tag)["ok"] == expected

    @settings(max_examples=50)
    @given(text=tag_texts())
    def test_messages_for_is_cached(self, text):
        translator = translate({"ok": "OK"})
        assert translator.messages_for(text) is translator.messages_for(text.upper())
