# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render tags and values back to SDL text.

Output is canonical: re-parsing it yields tags equal to the ones formatted.
"""

from __future__ import annotations

import base64
import re
import struct
from collections.abc import Iterable
from datetime import date, datetime

from sdlang.formatter.config import DATE_FORMAT, DATE_TIME_FORMAT, DEFAULT_CONFIG, FormatterConfig
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
)

# ###############
# Public Interface
# ###############


def format_value(value: Value) -> str:
    """Return the SDL literal for *value*.

    Raises:
        TypeError: If *value* is not one of the literal value models.
    """
    if isinstance(value, StringValue):
        return f'"{_escape(value.value, _STRING_ESCAPES)}"'
    if isinstance(value, RawStringValue):
        return _format_raw_string(value.value)
    if isinstance(value, CharacterValue):
        return f"'{_escape(value.value, _CHARACTER_ESCAPES)}'"
    if isinstance(value, Int32Value):
        return str(value.value)
    if isinstance(value, Int64Value):
        return f"{value.value}L"
    if isinstance(value, Float32Value):
        return f"{_format_float32(value.value)}F"
    if isinstance(value, Float64Value):
        return repr(value.value)
    if isinstance(value, DecimalValue):
        return f"{value.value}BD"
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, NullValue):
        return "null"
    if isinstance(value, DateValue):
        return _render_pattern(DATE_FORMAT, value.value)
    if isinstance(value, LocalDateTimeValue):
        return _render_pattern(DATE_TIME_FORMAT, value.value)
    if isinstance(value, ZonedDateTimeValue):
        return f"{_render_pattern(DATE_TIME_FORMAT, value.value)}-{value.zone}"
    if isinstance(value, DurationValue):
        return _format_duration(value)
    if isinstance(value, BinaryValue):
        return f"[{base64.b64encode(value.value).decode('ascii')}]"
    raise TypeError(f"Not an SDL value: {type(value).__name__}")


def format_tag(tag: Tag, pretty_print: bool = False, config: FormatterConfig = DEFAULT_CONFIG) -> str:
    """Render *tag* and its subtree.

    In compact mode child tags are written one per line inside braces with no
    indentation and comments are dropped. Pretty-print mode indents each level
    with ``config.indent`` and writes tag comments on the line above the tag.
    """
    lines: list[str] = []
    _write_tag(tag, 0, pretty_print, config, lines)
    return "\n".join(lines)


def format_tags(tags: Iterable[Tag], pretty_print: bool = False, config: FormatterConfig = DEFAULT_CONFIG) -> str:
    """Render a whole document: each top-level tag on its own line(s)."""
    return "\n".join(format_tag(t, pretty_print, config) for t in tags)


# ################
# Implementation
# ################

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
}

_CHARACTER_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "'": "\\'",
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
}


def _escape(text: str, escapes: dict[str, str]) -> str:
    return "".join(escapes.get(ch, ch) for ch in text)


def _format_raw_string(text: str) -> str:
    if "`" not in text:
        return f"`{text}`"
    # The lexer drops one newline right after the opening quotes.
    lead = "\n" if text.startswith(("\n", "\r\n")) else ""
    return f'"""{lead}{text}"""'


def _format_float32(x: float) -> str:
    """Shortest decimal text that reads back as the same binary32 value."""
    text = repr(x)
    for precision in range(1, 10):
        text = f"{x:.{precision}g}"
        if struct.unpack("<f", struct.pack("<f", float(text)))[0] == x:
            break
    return text


_PATTERN_FIELD_RE = re.compile(r"y+|M+|d+|H+|m+|s+|S+")


def _pattern_field(letter: str, width: int, moment: date) -> str:
    """Render one run of a pattern letter. A run's length is its minimum width."""
    if letter == "y":
        return str(moment.year).zfill(width)
    if letter == "M":
        return str(moment.month).zfill(width)
    if letter == "d":
        return str(moment.day).zfill(width)
    if not isinstance(moment, datetime):
        raise ValueError(f"Pattern letter {letter!r} needs a time of day")
    if letter == "H":
        return str(moment.hour).zfill(width)
    if letter == "m":
        return str(moment.minute).zfill(width)
    if letter == "s":
        return str(moment.second).zfill(width)
    # S: fraction of a second, one digit per letter
    return f"{moment.microsecond // 1000:03d}"[:width].ljust(width, "0")


def _render_pattern(pattern: str, moment: date) -> str:
    """Render *moment* with a date pattern such as ``y/M/d H:m:s.SSS``.

    Letters other than ``y M d H m s S`` are copied literally.
    """
    return _PATTERN_FIELD_RE.sub(lambda m: _pattern_field(m.group(0)[0], len(m.group(0)), moment), pattern)


def _format_duration(span: DurationValue, with_days: bool = False) -> str:
    text = f"{abs(span.hours):02d}:{abs(span.minutes):02d}:{abs(span.seconds):02d}"
    if span.days or with_days:
        text = f"{abs(span.days)}d:{text}"
    if span.milliseconds:
        text = f"{text}.{abs(span.milliseconds):03d}"
    return f"-{text}" if span.is_negative else text


def _format_values(values: list[Value]) -> list[str]:
    """Render positional values in order.

    A day-less duration right after a date would read back as one date-time,
    so it is written with an explicit ``0d:`` field.
    """
    parts: list[str] = []
    previous: Value | None = None
    for v in values:
        if isinstance(v, DurationValue) and isinstance(previous, DateValue):
            parts.append(_format_duration(v, with_days=True))
        else:
            parts.append(format_value(v))
        previous = v
    return parts


def _tag_head(tag: Tag, config: FormatterConfig) -> str:
    parts: list[str] = []
    if tag.namespace or tag.name != ANONYMOUS_TAG_NAME or not tag.values:
        parts.append(tag.qualified_name)
    parts.extend(_format_values(tag.values))
    attributes = list(tag.attributes.items())
    if config.sort_attributes:
        attributes.sort(key=lambda item: item[0])
    for (namespace, name), v in attributes:
        key = f"{namespace}:{name}" if namespace else name
        parts.append(f"{key}={format_value(v)}")
    return " ".join(parts)


def _write_tag(tag: Tag, depth: int, pretty_print: bool, config: FormatterConfig, lines: list[str]) -> None:
    indent = config.indent * depth if pretty_print else ""
    if pretty_print and tag.comment:
        for comment_line in tag.comment.splitlines():
            lines.append(f"{indent}{config.comment_prefix} {comment_line}".rstrip())
    head = _tag_head(tag, config)
    if not tag.children:
        lines.append(f"{indent}{head}")
        return
    lines.append(f"{indent}{head} {{")
    for child in tag.children:
        _write_tag(child, depth + 1, pretty_print, config, lines)
    lines.append(f"{indent}}}")
