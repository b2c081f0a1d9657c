# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tags and the typed values they carry."""

from sdlang.model.builder import TagBuilder, tag
from sdlang.model.identifiers import identifier_is_legal, validate_identifier
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
    binary_value,
    bool_value,
    char_value,
    date_value,
    datetime_value,
    decimal_value,
    duration_value,
    float32_value,
    float64_value,
    int32_value,
    int64_value,
    is_value,
    null_value,
    string_value,
    value,
)

__all__ = [
    # Values
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
    "binary_value",
    "bool_value",
    "char_value",
    "date_value",
    "datetime_value",
    "decimal_value",
    "duration_value",
    "float32_value",
    "float64_value",
    "int32_value",
    "int64_value",
    "is_value",
    "null_value",
    "string_value",
    "value",
    # Tags
    "ANONYMOUS_TAG_NAME",
    "Tag",
    "TagBuilder",
    "tag",
    # Identifiers
    "identifier_is_legal",
    "validate_identifier",
]
