"""ICU message syntax renderer.

Parses templates such as::

    {count, plural, =0 {No messages} one {One message} other {# messages}}

once and renders them with locale data from Babel. This is the default
``render_message`` collaborator of :class:`~typed_intl.core.context.IntlContext`;
any callable matching :class:`MessageRenderer` can replace it.

Supported arguments: ``{name}``, ``{name, number[, style]}``,
``{name, date[, style]}``, ``{name, time[, style]}``,
``{name, plural, [offset:N] ...}``, ``{name, selectordinal, ...}`` and
``{name, select, ...}``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, Protocol, Union

from typed_intl.exceptions import MessageFormatError
from typed_intl.formatting.locale_data import (
    babel_locale,
    format_date_value,
    format_number,
    plural_category,
    to_number,
)


class MessageRenderer(Protocol):
    """Compiles a template for a locale into a function of the message parameters."""

    def __call__(
        self, locale: str, template: str, format_options: Mapping[str, Any] | None = None
    ) -> Callable[[Mapping[str, Any]], str]: ...


@dataclass(frozen=True)
class _Pound:
    """``#`` inside a plural branch."""


@dataclass(frozen=True)
class _Argument:
    name: str
    kind: str | None = None
    style: str | None = None
    offset: int = 0
    branches: tuple[tuple[str, tuple[_Node, ...]], ...] = ()


_Node = Union[str, _Pound, _Argument]

_FORMAT_KINDS = ("number", "date", "time")
_PLURAL_KINDS = ("plural", "selectordinal")
_BRANCH_KINDS = _PLURAL_KINDS + ("select",)


class _Parser:
    def __init__(self, template: str) -> None:
        self.template = template
        self.pos = 0

    def error(self, message: str) -> MessageFormatError:
        return MessageFormatError(message, template=self.template, position=self.pos)

    def parse(self) -> tuple[_Node, ...]:
        nodes = self.message(depth=0, in_plural=False)
        if self.pos < len(self.template):
            raise self.error("Unmatched '}'")
        return nodes

    def message(self, depth: int, in_plural: bool) -> tuple[_Node, ...]:
        nodes: list[_Node] = []
        text: list[str] = []
        template = self.template

        while self.pos < len(template):
            char = template[self.pos]
            if char == "'":
                text.append(self.quoted(in_plural))
            elif char == "{":
                self.pos += 1
                if text:
                    nodes.append("".join(text))
                    text = []
                nodes.append(self.argument(depth, in_plural))
            elif char == "}":
                if depth == 0:
                    raise self.error("Unmatched '}'")
                break
            elif char == "#" and in_plural:
                self.pos += 1
                if text:
                    nodes.append("".join(text))
                    text = []
                nodes.append(_Pound())
            else:
                text.append(char)
                self.pos += 1

        if text:
            nodes.append("".join(text))
        return tuple(nodes)

    def quoted(self, in_plural: bool) -> str:
        template = self.template
        following = template[self.pos + 1 : self.pos + 2]
        if following == "'":
            self.pos += 2
            return "'"
        if not following or following not in "{}|" and not (following == "#" and in_plural):
            self.pos += 1
            return "'"

        # Quoted literal text runs until the next single apostrophe
        self.pos += 1
        text: list[str] = []
        while self.pos < len(template):
            char = template[self.pos]
            if char == "'":
                if template[self.pos + 1 : self.pos + 2] == "'":
                    text.append("'")
                    self.pos += 2
                    continue
                self.pos += 1
                return "".join(text)
            text.append(char)
            self.pos += 1
        return "".join(text)

    def skip_whitespace(self) -> None:
        while self.pos < len(self.template) and self.template[self.pos].isspace():
            self.pos += 1

    def word(self) -> str:
        start = self.pos
        while self.pos < len(self.template) and not (
            self.template[self.pos].isspace() or self.template[self.pos] in ",{}"
        ):
            self.pos += 1
        return self.template[start : self.pos]

    def expect(self, char: str) -> None:
        if self.template[self.pos : self.pos + 1] != char:
            raise self.error(f"Expected {char!r}")
        self.pos += 1

    def argument(self, depth: int, in_plural: bool) -> _Argument:
        self.skip_whitespace()
        name = self.word()
        if not name:
            raise self.error("Expected argument name")
        self.skip_whitespace()
        if self.template[self.pos : self.pos + 1] == "}":
            self.pos += 1
            return _Argument(name)

        self.expect(",")
        self.skip_whitespace()
        kind = self.word().lower()
        self.skip_whitespace()

        if kind in _FORMAT_KINDS:
            style = None
            if self.template[self.pos : self.pos + 1] == ",":
                self.pos += 1
                end = self.template.find("}", self.pos)
                if end < 0:
                    raise self.error("Unterminated argument")
                style = self.template[self.pos : end].strip() or None
                self.pos = end
            self.expect("}")
            return _Argument(name, kind, style)

        if kind in _BRANCH_KINDS:
            self.expect(",")
            return self.branches(name, kind, depth, in_plural)

        raise self.error(f"Unknown argument type {kind!r}")

    def branches(self, name: str, kind: str, depth: int, in_plural: bool) -> _Argument:
        offset = 0
        self.skip_whitespace()
        if kind == "plural" and self.template.startswith("offset:", self.pos):
            self.pos += len("offset:")
            self.skip_whitespace()
            value = self.word()
            if not value.isdigit():
                raise self.error("Expected offset value")
            offset = int(value)

        branches: list[tuple[str, tuple[_Node, ...]]] = []
        while True:
            self.skip_whitespace()
            if self.pos >= len(self.template):
                raise self.error("Unterminated argument")
            if self.template[self.pos] == "}":
                self.pos += 1
                break
            selector = self.word()
            if not selector:
                raise self.error("Expected selector")
            self.skip_whitespace()
            self.expect("{")
            body = self.message(depth + 1, in_plural or kind in _PLURAL_KINDS)
            self.expect("}")
            branches.append((selector, body))

        if not any(selector == "other" for selector, _ in branches):
            raise self.error(f"Missing 'other' option in {kind} argument {name!r}")
        return _Argument(name, kind, None, offset, tuple(branches))


@lru_cache(maxsize=512)
def parse_template(template: str) -> tuple[_Node, ...]:
    """Parse an ICU message template.

    Raises:
        MessageFormatError: If the template is malformed
    """
    return _Parser(template).parse()


class CompiledMessage:
    """A parsed template bound to a locale and format presets."""

    def __init__(self, locale: str, template: str, format_options: Mapping[str, Any]) -> None:
        self.locale_tag = locale
        self.template = template
        self.nodes = parse_template(template)
        self.locale = babel_locale(locale)
        self.format_options = format_options

    def __call__(self, params: Mapping[str, Any] | None = None) -> str:
        return self._render(self.nodes, params or {}, None)

    format = __call__

    def __repr__(self) -> str:
        return f"CompiledMessage(locale={self.locale_tag!r}, template={self.template!r})"

    def _render(
        self, nodes: tuple[_Node, ...], params: Mapping[str, Any], pound: Any
    ) -> str:
        parts: list[str] = []
        for node in nodes:
            if isinstance(node, str):
                parts.append(node)
            elif isinstance(node, _Pound):
                parts.append(format_number(pound, self.locale) if pound is not None else "#")
            else:
                parts.append(self._argument(node, params, pound))
        return "".join(parts)

    def _argument(self, node: _Argument, params: Mapping[str, Any], pound: Any) -> str:
        value = params.get(node.name)
        if value is None:
            raise MessageFormatError(
                f"A value must be provided for: {node.name}", template=self.template
            )

        if node.kind is None:
            return str(value)
        if node.kind == "number":
            return format_number(value, self.locale, node.style, self.format_options.get("number"))
        if node.kind in ("date", "time"):
            return format_date_value(
                value, self.locale, node.kind, node.style, self.format_options.get(node.kind)
            )

        branches = dict(node.branches)
        if node.kind == "select":
            body = branches.get(str(value), branches["other"])
            return self._render(body, params, pound)

        number = to_number(value)
        for selector, body in node.branches:
            if selector.startswith("=") and _exact_match(selector[1:], number):
                return self._render(body, params, number - node.offset)
        category = plural_category(
            number - node.offset, self.locale, ordinal=node.kind == "selectordinal"
        )
        body = branches.get(category, branches["other"])
        return self._render(body, params, number - node.offset)


def _exact_match(literal: str, number: int | float | Decimal) -> bool:
    try:
        return Decimal(literal) == Decimal(str(number))
    except ArithmeticError:
        return False


class IcuMessageRenderer:
    """Default :class:`MessageRenderer` backed by Babel locale data.

    Example:
        >>> render = IcuMessageRenderer()
        >>> render("en", "{count, plural, one {# file} other {# files}}", {})({"count": 3})
        "3 files"
    """

    def __call__(
        self,
        locale: str,
        template: str,
        format_options: Mapping[str, Any] | None = None,
    ) -> CompiledMessage:
        return CompiledMessage(locale, template, format_options or {})

