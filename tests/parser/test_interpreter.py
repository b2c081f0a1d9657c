# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for building tags and typed values from SDL text."""

import io
import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from sdlang.errors import SDLSyntaxError, SemanticError
from sdlang.model.tag import Tag
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
from sdlang.parser.interpreter import _RESOLVERS, _UNSUPPORTED_KINDS, parse, parse_attributes, parse_values
from sdlang.parser.lexer import LITERAL_TOKEN_TYPES

# ###############
# Test Helpers
# ###############


def _single_value(source: str) -> Value:
    """Parse ``tag <source>`` and return the tag's only value."""
    tags = parse(f"tag {source}")
    assert len(tags) == 1
    assert len(tags[0].values) == 1
    return tags[0].values[0]


# ###############
# Documents
# ###############


class TestDocuments:
    def test_empty_document(self) -> None:
        assert parse("") == []

    def test_top_level_tags_in_order(self) -> None:
        assert [t.name for t in parse("a\nb; c")] == ["a", "b", "c"]

    def test_reads_from_text_stream(self) -> None:
        tags = parse(io.StringIO('greeting "hi"'))
        assert tags[0].get_value() == "hi"

    def test_anonymous_tag_is_named_content(self) -> None:
        tag = parse('"hello" 5')[0]
        assert tag.name == "content"
        assert tag.namespace == ""
        assert [v.value for v in tag.values] == ["hello", 5]

    def test_matrix_of_anonymous_children(self) -> None:
        matrix = parse("matrix {\n 8 64 87; 31 34 18 \n}")[0]
        assert [c.name for c in matrix.children] == ["content", "content"]
        assert [[v.value for v in c.values] for c in matrix.children] == [[8, 64, 87], [31, 34, 18]]

    def test_nested_children(self) -> None:
        root = parse("a {\n  b {\n    c 1\n  }\n}")[0]
        assert root.get_child("c", recursive=True) is not None
        assert root.get_child("c") is None

    def test_attributes_and_namespaces(self) -> None:
        tag = parse('person:name "Bob" age=42 person:role="admin" other:x=1')[0]
        assert (tag.namespace, tag.name) == ("person", "name")
        assert tag.get_attribute("age") == Int32Value(value=42)
        assert tag.get_attributes_for_namespace("person") == {"role": StringValue(value="admin")}
        assert tag.get_attributes_for_namespace("") == {"age": Int32Value(value=42)}

    def test_namespace_scoping(self) -> None:
        tag = parse("person private:smoker=true private:nickname=tubby public:hobby=hiking")[0]
        assert tag.get_attributes_for_namespace("private") == {
            "smoker": BooleanValue(value=True),
            "nickname": RawStringValue(value="tubby"),
        }

    def test_attribute_order_does_not_affect_equality(self) -> None:
        assert parse("t a=1 b=2") == parse("t b=2 a=1")

    def test_repeated_attribute_keeps_last(self) -> None:
        tag = parse("t a=1 a=2")[0]
        assert tag.get_attribute("a") == Int32Value(value=2)
        assert len(tag.attributes) == 1

    def test_comment_is_attached(self) -> None:
        tag = parse("// the server\nserver")[0]
        assert tag.comment == "the server"

    def test_parse_logs_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="sdlang.parser.interpreter"):
            parse("a\nb")
        assert "Parsed 2 top-level tag(s)" in caplog.text


# ###############
# Strings
# ###############


class TestStrings:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ('"hello"', StringValue(value="hello")),
            ('"hi \\\n    there"', StringValue(value="hi there")),
            ('"hi \\\n    there \\\n    joe"', StringValue(value="hi there joe")),
            ('"line1\\nline2"', StringValue(value="line1\nline2")),
            ('"escapes \\"\\\\\\n\\t"', StringValue(value='escapes "\\\n\t')),
            ('"日本語"', StringValue(value="日本語")),
            ("`aloha`", RawStringValue(value="aloha")),
            ("`line1\nline2`", RawStringValue(value="line1\nline2")),
            ('`no escapes \\ \\\\ \\n \\t " "" \' \'\'`', RawStringValue(value='no escapes \\ \\\\ \\n \\t " "" \' \'\'')),
            ("naked", RawStringValue(value="naked")),
            ("'x'", CharacterValue(value="x")),
            ("'\\t'", CharacterValue(value="\t")),
        ],
    )
    def test_string_kinds(self, source: str, expected: Value) -> None:
        assert _single_value(source) == expected


# ###############
# Numbers
# ###############


class TestNumbers:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("5", Int32Value(value=5)),
            ("-5", Int32Value(value=-5)),
            ("2147483647", Int32Value(value=2147483647)),
            ("5L", Int64Value(value=5)),
            ("2147483648L", Int64Value(value=2147483648)),
            ("5.5", Float64Value(value=5.5)),
            ("5.5D", Float64Value(value=5.5)),
            ("1e3", Float64Value(value=1000.0)),
            ("5.5F", Float32Value(value=5.5)),
            ("5.5BD", DecimalValue(value=Decimal("5.5"))),
            ("10.25M", DecimalValue(value=Decimal("10.25"))),
            ("10l", Int64Value(value=10)),
            ("10.5f", Float32Value(value=10.5)),
            ("10BD", DecimalValue(value=Decimal("10"))),
            ("10bd", DecimalValue(value=Decimal("10"))),
        ],
    )
    def test_number_kinds(self, source: str, expected: Value) -> None:
        assert _single_value(source) == expected

    def test_float32_is_rounded_to_single_precision(self) -> None:
        result = _single_value("0.1F")
        assert isinstance(result, Float32Value)
        assert result.value != 0.1
        assert abs(result.value - 0.1) < 1e-7

    def test_int_kinds_are_distinct(self) -> None:
        assert _single_value("5") != _single_value("5L")

    @pytest.mark.parametrize("source", ["2147483648", "-2147483649", "9223372036854775808L"])
    def test_integer_overflow(self, source: str) -> None:
        with pytest.raises(SemanticError, match="Invalid"):
            _single_value(source)

    def test_float_overflow(self) -> None:
        with pytest.raises(SemanticError):
            _single_value("1e999")


# ###############
# Booleans and Null
# ###############


class TestKeywords:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("true", BooleanValue(value=True)),
            ("on", BooleanValue(value=True)),
            ("false", BooleanValue(value=False)),
            ("off", BooleanValue(value=False)),
            ("null", NullValue()),
        ],
    )
    def test_keywords(self, source: str, expected: Value) -> None:
        assert _single_value(source) == expected


# ###############
# Dates and Times
# ###############


class TestDates:
    def test_date(self) -> None:
        assert _single_value("2005/12/31") == DateValue(value=date(2005, 12, 31))

    def test_unpadded_date(self) -> None:
        assert _single_value("2015/3/4") == DateValue(value=date(2015, 3, 4))

    def test_invalid_date(self) -> None:
        with pytest.raises(SemanticError, match="Invalid date literal") as exc_info:
            parse("a\ntag 2005/2/30")
        assert (exc_info.value.line, exc_info.value.column) == (2, 5)

    def test_local_datetime(self) -> None:
        result = _single_value("2005/12/31 12:30:00.5")
        assert result == LocalDateTimeValue(value=datetime(2005, 12, 31, 12, 30, 0, 500_000))

    def test_datetime_without_seconds(self) -> None:
        result = _single_value("2005/12/31 12:30")
        assert result == LocalDateTimeValue(value=datetime(2005, 12, 31, 12, 30))

    def test_zoned_datetime_utc(self) -> None:
        result = _single_value("2005/12/31 12:30:00.123-UTC")
        assert isinstance(result, ZonedDateTimeValue)
        assert result.zone == "UTC"
        assert result.value == datetime(2005, 12, 31, 12, 30, 0, 123_000, tzinfo=timezone.utc)

    def test_zoned_datetime_offset(self) -> None:
        result = _single_value("2005/12/31 12:30:00-GMT-05:00")
        assert isinstance(result, ZonedDateTimeValue)
        assert result.value.utcoffset() == timedelta(hours=-5)

    def test_zoned_datetime_region(self) -> None:
        result = _single_value("2005/7/1 12:00:00-Europe/London")
        assert isinstance(result, ZonedDateTimeValue)
        assert result.value.utcoffset() == timedelta(hours=1)

    def test_unknown_zone(self) -> None:
        with pytest.raises(SemanticError):
            _single_value("2005/12/31 12:30:00-Nowhere/Special")

    @pytest.mark.parametrize("source", ["2005/12/31 25:00:00", "2005/12/31 12:61:00", "2005/12/31 12:00:00.1234"])
    def test_invalid_time(self, source: str) -> None:
        with pytest.raises(SemanticError):
            _single_value(source)


class TestDurations:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("12:30:00", timedelta(hours=12, minutes=30)),
            ("24:00:00", timedelta(hours=24)),
            ("1:0:0", timedelta(hours=1)),
            ("12:45:23.1", timedelta(hours=12, minutes=45, seconds=23, milliseconds=1)),
            ("12:33:23.12", timedelta(hours=12, minutes=33, seconds=23, milliseconds=12)),
            ("34d:12:53:33.1", timedelta(days=34, hours=12, minutes=53, seconds=33, milliseconds=1)),
            ("5d:11:18:24.123", timedelta(days=5, hours=11, minutes=18, seconds=24, milliseconds=123)),
            ("-12:36:44.753", -timedelta(hours=12, minutes=36, seconds=44, milliseconds=753)),
            ("-5d:12:8:4.753", -timedelta(days=5, hours=12, minutes=8, seconds=4, milliseconds=753)),
        ],
    )
    def test_duration(self, source: str, expected: timedelta) -> None:
        result = _single_value(source)
        assert isinstance(result, DurationValue)
        assert result.value == expected

    def test_components_are_kept(self) -> None:
        result = _single_value("-5d:12:8:4.753")
        assert result == DurationValue(days=-5, hours=-12, minutes=-8, seconds=-4, milliseconds=-753)

    @pytest.mark.parametrize("source", ["00:60:00", "00:00:60", "1d:24:00:00"])
    def test_out_of_range(self, source: str) -> None:
        with pytest.raises(SemanticError):
            _single_value(source)


# ###############
# Binary
# ###############


class TestBinary:
    def test_binary(self) -> None:
        assert _single_value("[aGVsbG8=]") == BinaryValue(value=b"hello")

    def test_binary_across_lines(self) -> None:
        assert _single_value("[aGVs\n   bG8=]") == BinaryValue(value=b"hello")

    def test_empty_binary(self) -> None:
        assert _single_value("[]") == BinaryValue(value=b"")

    def test_malformed_base64(self) -> None:
        with pytest.raises(SemanticError, match="Invalid binary literal"):
            _single_value("[not*base64]")


# ###############
# Unsupported Literals
# ###############


class TestUnsupportedLiterals:
    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("0x1F", "hexadecimal integer"),
            ("0b101", "binary integer"),
            ("https://example.com", "URL"),
            ("1.2.3", "version"),
            ("(1 2)", "list"),
            ("(a: 1)", "map"),
        ],
    )
    def test_unsupported_kind(self, source: str, kind: str) -> None:
        with pytest.raises(SemanticError, match=f"Unsupported literal kind: {kind}") as exc_info:
            parse(f"tag {source}")
        assert (exc_info.value.line, exc_info.value.column) == (1, 5)

    def test_every_literal_token_type_is_handled(self) -> None:
        assert set(_RESOLVERS) | set(_UNSUPPORTED_KINDS) == LITERAL_TOKEN_TYPES
        assert not set(_RESOLVERS) & set(_UNSUPPORTED_KINDS)


# ###############
# Fragments
# ###############


class TestFragments:
    def test_parse_values(self) -> None:
        assert parse_values('1 "two" 3L') == [
            Int32Value(value=1),
            StringValue(value="two"),
            Int64Value(value=3),
        ]

    def test_parse_attributes(self) -> None:
        assert parse_attributes('a=1 ns:b="x"') == {
            "a": Int32Value(value=1),
            "ns:b": StringValue(value="x"),
        }

    def test_parse_values_rejects_tags(self) -> None:
        with pytest.raises(SDLSyntaxError):
            parse_values("1 {\n}")


# ###############
# All-or-nothing
# ###############


class TestFailFast:
    def test_first_error_aborts(self) -> None:
        with pytest.raises(SemanticError) as exc_info:
            parse("ok 1\nbad 99999999999\nalso 0x1")
        assert exc_info.value.line == 2

    def test_result_is_tag_list(self) -> None:
        tags = parse("a 1")
        assert all(isinstance(t, Tag) for t in tags)
