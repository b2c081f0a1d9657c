# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read and write SDL (Simple Declarative Language) documents."""

from sdlang.errors import (
    IllegalIdentifierError,
    LexError,
    SDLError,
    SDLParseError,
    SDLSyntaxError,
    SemanticError,
)
from sdlang.formatter import (
    FormatterConfig,
    FormatterConfigError,
    format_tag,
    format_tags,
    format_value,
    load_formatter_config,
)
from sdlang.model import (
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
    Tag,
    TagBuilder,
    Value,
    ZonedDateTimeValue,
    identifier_is_legal,
    tag,
    validate_identifier,
    value,
)
from sdlang.parser import parse, parse_attributes, parse_values

__all__ = [
    # Errors
    "IllegalIdentifierError",
    "LexError",
    "SDLError",
    "SDLParseError",
    "SDLSyntaxError",
    "SemanticError",
    # Reading
    "parse",
    "parse_attributes",
    "parse_values",
    # Writing
    "FormatterConfig",
    "FormatterConfigError",
    "format_tag",
    "format_tags",
    "format_value",
    "load_formatter_config",
    # Model
    "Tag",
    "TagBuilder",
    "tag",
    "value",
    "identifier_is_legal",
    "validate_identifier",
    "Value",
    "StringValue",
    "RawStringValue",
    "CharacterValue",
    "Int32Value",
    "Int64Value",
    "Float32Value",
    "Float64Value",
    "DecimalValue",
    "BooleanValue",
    "NullValue",
    "DateValue",
    "LocalDateTimeValue",
    "ZonedDateTimeValue",
    "DurationValue",
    "BinaryValue",
]
