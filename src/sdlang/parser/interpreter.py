# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build tags from a parse tree.

Resolves every literal token into a typed value and assembles the tag tree.
Parsing is all-or-nothing: the first error aborts and no partial tree is
returned.
"""

import base64
import logging
import re
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TextIO

from sdlang.errors import SemanticError
from sdlang.model.tag import ANONYMOUS_TAG_NAME, Tag
from sdlang.model.values import (
    BinaryValue,
    BooleanValue,
    CharacterValue,
    DateValue,
    DecimalValue,
    DurationValue,
    Float32Value,
    Float64Value,
    Int32Value,
    Int64Value,
    LocalDateTimeValue,
    NullValue,
    RawStringValue,
    StringValue,
    Value,
    ZonedDateTimeValue,
    resolve_zone,
)
from sdlang.parser.lexer import Token, TokenType
from sdlang.parser.parser import parse_attribute_fragment, parse_tree, parse_value_fragment
from sdlang.parser.tree import ListNode, LiteralNode, MapNode, TagListNode, TagNode, ValueNode

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def parse(source: str | TextIO) -> list[Tag]:
    """Parse an SDL document into its top-level tags.

    Args:
        source: Document text, or a text stream to read it from.

    Returns:
        The top-level tags in document order.

    Raises:
        LexError: If the source contains invalid characters or unterminated literals.
        SDLSyntaxError: If the source is syntactically invalid.
        SemanticError: If a literal cannot be resolved to a value.
    """
    text = source if isinstance(source, str) else source.read()
    tags = build_tags(parse_tree(text))
    logger.debug(f"Parsed {len(tags)} top-level tag(s) from {len(text)} character(s)")
    return tags


def parse_values(source: str) -> list[Value]:
    """Parse a line of values such as ``1 "two" 2015/3/4``."""
    return [_resolve_value(node) for node in parse_value_fragment(source)]


def parse_attributes(source: str) -> dict[str, Value]:
    """Parse a line of attributes such as ``a=1 ns:b="x"``.

    Keys are ``name`` or ``namespace:name``. A repeated key keeps the last value.
    """
    result: dict[str, Value] = {}
    for node in parse_attribute_fragment(source):
        key = f"{node.ns_name.namespace}:{node.ns_name.name}" if node.ns_name.namespace else node.ns_name.name
        result[key] = _resolve_value(node.value)
    return result


def build_tags(tree: TagListNode) -> list[Tag]:
    """Turn a parse tree into tags."""
    return [_build_tag(node) for node in tree.tags]


# ################
# Implementation
# ################


def _build_tag(node: TagNode) -> Tag:
    if node.ns_name is None:
        tag = Tag(ANONYMOUS_TAG_NAME)
    else:
        tag = Tag(node.ns_name.name, node.ns_name.namespace)
    tag.comment = node.comment
    for value_node in node.values:
        tag.add_value(_resolve_value(value_node))
    for attribute in node.attributes:
        tag.set_attribute(attribute.ns_name.name, _resolve_value(attribute.value), attribute.ns_name.namespace)
    for child in node.children or []:
        tag.add_child(_build_tag(child))
    return tag


def _resolve_value(node: ValueNode) -> Value:
    if isinstance(node, ListNode):
        raise SemanticError("Unsupported literal kind: list", node.line, node.column)
    if isinstance(node, MapNode):
        raise SemanticError("Unsupported literal kind: map", node.line, node.column)
    assert isinstance(node, LiteralNode)
    return _resolve_token(node.token)


def _resolve_token(tok: Token) -> Value:
    """Resolve a literal token, attaching the token's position to any failure."""
    if tok.type in _UNSUPPORTED_KINDS:
        raise SemanticError(
            f"Unsupported literal kind: {_UNSUPPORTED_KINDS[tok.type]} ({tok.value!r})",
            tok.line,
            tok.column,
        )
    resolver = _RESOLVERS[tok.type]
    try:
        return resolver(tok.value)
    except (ValueError, ArithmeticError) as exc:
        raise SemanticError(f"Invalid {_KIND_NAMES[tok.type]} literal {tok.value!r}: {exc}", tok.line, tok.column) from exc


_DURATION_RE = re.compile(r"^(-)?(?:(\d+)d:)?(\d+):(\d+):(\d+)(?:\.(\d+))?$")
_TIME_RE = re.compile(r"^(\d+):(\d+)(?::(\d+)(?:\.(\d+))?)?(?:-(.+))?$")


def _resolve_integer(text: str) -> Int32Value:
    return Int32Value(value=int(text))


def _resolve_long(text: str) -> Int64Value:
    return Int64Value(value=int(text[:-1]))


def _resolve_real(text: str) -> Float32Value | Float64Value | DecimalValue:
    upper = text.upper()
    if upper.endswith("BD"):
        return DecimalValue(value=Decimal(text[:-2]))
    if upper.endswith("M"):
        return DecimalValue(value=Decimal(text[:-1]))
    if upper.endswith("F"):
        return Float32Value(value=float(text[:-1]))
    if upper.endswith("D"):
        return Float64Value(value=float(text[:-1]))
    return Float64Value(value=float(text))


def _parse_date(text: str) -> date:
    year, month, day = (int(part) for part in text.split("/"))
    return date(year, month, day)


def _parse_millis(digits: str | None) -> int:
    """Read a fractional-seconds field as milliseconds."""
    if not digits:
        return 0
    if len(digits) > 3:
        raise ValueError(f"sub-millisecond precision is not supported: .{digits}")
    return int(digits.ljust(3, "0"))


def _resolve_date(text: str) -> DateValue:
    return DateValue(value=_parse_date(text))


def _resolve_datetime(text: str) -> LocalDateTimeValue | ZonedDateTimeValue:
    date_part, time_part = text.split(maxsplit=1)
    day = _parse_date(date_part)
    match = _TIME_RE.match(time_part.strip())
    if match is None:
        raise ValueError("malformed time of day")
    hour, minute, second, fraction, zone = match.groups()
    moment = datetime(
        day.year,
        day.month,
        day.day,
        int(hour),
        int(minute),
        int(second or 0),
        _parse_millis(fraction) * 1000,
    )
    if zone is None:
        return LocalDateTimeValue(value=moment)
    return ZonedDateTimeValue(value=moment.replace(tzinfo=resolve_zone(zone)), zone=zone)


def _resolve_duration(text: str) -> DurationValue:
    match = _DURATION_RE.match(text)
    if match is None:
        raise ValueError("malformed duration")
    negative, days, hours, minutes, seconds, millis = match.groups()
    # A duration's fractional field counts milliseconds as written: ".1" is 1ms.
    if millis is not None and len(millis) > 3:
        raise ValueError(f"milliseconds out of range: {millis}")
    sign = -1 if negative else 1
    return DurationValue(
        days=sign * int(days or 0),
        hours=sign * int(hours),
        minutes=sign * int(minutes),
        seconds=sign * int(seconds),
        milliseconds=sign * int(millis or 0),
    )


def _resolve_binary(text: str) -> BinaryValue:
    return BinaryValue(value=base64.b64decode("".join(text.split()), validate=True))


_RESOLVERS: dict[TokenType, Callable[[str], Value]] = {
    TokenType.STRING: lambda text: StringValue(value=text),
    TokenType.RAW_STRING: lambda text: RawStringValue(value=text),
    TokenType.IDENTIFIER: lambda text: RawStringValue(value=text),
    TokenType.CHARACTER: lambda text: CharacterValue(value=text),
    TokenType.INTEGER: _resolve_integer,
    TokenType.LONG: _resolve_long,
    TokenType.REAL: _resolve_real,
    TokenType.TRUE: lambda _text: BooleanValue(value=True),
    TokenType.FALSE: lambda _text: BooleanValue(value=False),
    TokenType.NULL: lambda _text: NullValue(),
    TokenType.DATE: _resolve_date,
    TokenType.DATETIME: _resolve_datetime,
    TokenType.DURATION: _resolve_duration,
    TokenType.BINARY: _resolve_binary,
}

_UNSUPPORTED_KINDS: dict[TokenType, str] = {
    TokenType.HEX: "hexadecimal integer",
    TokenType.BIN: "binary integer",
    TokenType.URL: "URL",
    TokenType.VERSION: "version",
}

_KIND_NAMES: dict[TokenType, str] = {
    TokenType.STRING: "string",
    TokenType.RAW_STRING: "string",
    TokenType.IDENTIFIER: "string",
    TokenType.CHARACTER: "character",
    TokenType.INTEGER: "integer",
    TokenType.LONG: "long integer",
    TokenType.REAL: "number",
    TokenType.TRUE: "boolean",
    TokenType.FALSE: "boolean",
    TokenType.NULL: "null",
    TokenType.DATE: "date",
    TokenType.DATETIME: "date-time",
    TokenType.DURATION: "duration",
    TokenType.BINARY: "binary",
}
