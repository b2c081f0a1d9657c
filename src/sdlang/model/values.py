# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed literal values carried by tags as positional values and attributes.

Every literal kind is a frozen pydantic model with a ``kind`` discriminator,
so a value's kind and payload can never diverge once constructed.
"""

from __future__ import annotations

import math
import re
import struct
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Annotated, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class _LiteralValue(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)


class StringValue(_LiteralValue):
    """A double-quoted string; rendered with escapes."""

    kind: Literal["string"] = "string"
    value: str


class RawStringValue(_LiteralValue):
    """A raw (backtick, triple-quoted, or naked) string; never escaped."""

    kind: Literal["string_raw"] = "string_raw"
    value: str

    @field_validator("value")
    @classmethod
    def _check_renderable(cls, v: str) -> str:
        if "`" in v and ('"""' in v or v.endswith('"')):
            raise ValueError('a raw string cannot contain both a backtick and a triple quote or trailing quote')
        return v


class CharacterValue(_LiteralValue):
    """A single character."""

    kind: Literal["character"] = "character"
    value: str

    @field_validator("value")
    @classmethod
    def _check_single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"a character value holds exactly one character, got {len(v)}")
        return v


class Int32Value(_LiteralValue):
    """A 32-bit signed integer."""

    kind: Literal["int32"] = "int32"
    value: Annotated[int, _Field(ge=INT32_MIN, le=INT32_MAX)]


class Int64Value(_LiteralValue):
    """A 64-bit signed integer (``L`` suffix)."""

    kind: Literal["int64"] = "int64"
    value: Annotated[int, _Field(ge=INT64_MIN, le=INT64_MAX)]


class Float32Value(_LiteralValue):
    """A binary32 float (``F`` suffix). The payload is rounded to 32 bits."""

    kind: Literal["float32"] = "float32"
    value: float

    @field_validator("value")
    @classmethod
    def _round_to_binary32(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("float values must be finite")
        try:
            return struct.unpack("<f", struct.pack("<f", v))[0]
        except OverflowError:
            raise ValueError(f"{v!r} is out of range for a 32-bit float") from None


class Float64Value(_LiteralValue):
    """A binary64 float; the default for literals with a fraction or exponent."""

    kind: Literal["float64"] = "float64"
    value: float

    @field_validator("value")
    @classmethod
    def _check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("float values must be finite")
        return v


class DecimalValue(_LiteralValue):
    """An arbitrary-precision decimal (``BD`` or ``M`` suffix)."""

    kind: Literal["decimal"] = "decimal"
    value: Decimal

    @field_validator("value")
    @classmethod
    def _check_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("decimal values must be finite")
        return v


class BooleanValue(_LiteralValue):
    """``true``/``on`` or ``false``/``off``."""

    kind: Literal["boolean"] = "boolean"
    value: bool


class NullValue(_LiteralValue):
    """The ``null`` literal."""

    kind: Literal["null"] = "null"

    @property
    def value(self) -> None:
        return None


class DateValue(_LiteralValue):
    """A calendar date without a time of day."""

    kind: Literal["date"] = "date"
    value: date

    @field_validator("value")
    @classmethod
    def _check_plain_date(cls, v: date) -> date:
        if isinstance(v, datetime):
            raise ValueError("a date value cannot carry a time of day")
        return v


class LocalDateTimeValue(_LiteralValue):
    """A date and time of day without a zone, at millisecond precision."""

    kind: Literal["datetime_local"] = "datetime_local"
    value: datetime

    @field_validator("value")
    @classmethod
    def _check_naive(cls, v: datetime) -> datetime:
        if v.tzinfo is not None:
            raise ValueError("a local date-time cannot carry a time zone")
        return _truncate_to_millis(v)


class ZonedDateTimeValue(_LiteralValue):
    """A date and time of day in a named zone, at millisecond precision.

    ``zone`` keeps the zone text exactly as written so it renders unchanged;
    ``value`` is an aware datetime expressed in that zone.
    """

    kind: Literal["datetime_zoned"] = "datetime_zoned"
    value: datetime
    zone: str

    @field_validator("value")
    @classmethod
    def _check_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("a zoned date-time requires an aware datetime")
        return _truncate_to_millis(v)

    @field_validator("zone")
    @classmethod
    def _check_zone(cls, v: str) -> str:
        resolve_zone(v)
        return v

    @model_validator(mode="after")
    def _check_expressed_in_zone(self) -> ZonedDateTimeValue:
        in_zone = self.value.astimezone(resolve_zone(self.zone))
        if in_zone.replace(tzinfo=None) != self.value.replace(tzinfo=None):
            raise ValueError(f"datetime {self.value.isoformat()} is not expressed in zone {self.zone!r}")
        return self


class DurationValue(_LiteralValue):
    """A signed span of days, hours, minutes, seconds, and milliseconds.

    Components are stored as written; a negative span has every non-zero
    component negative.
    """

    kind: Literal["duration"] = "duration"
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    @model_validator(mode="after")
    def _check_components(self) -> DurationValue:
        parts = (self.days, self.hours, self.minutes, self.seconds, self.milliseconds)
        if any(p > 0 for p in parts) and any(p < 0 for p in parts):
            raise ValueError("all duration components must share the same sign")
        if abs(self.minutes) > 59:
            raise ValueError(f"minutes out of range: {self.minutes}")
        if abs(self.seconds) > 59:
            raise ValueError(f"seconds out of range: {self.seconds}")
        if abs(self.milliseconds) > 999:
            raise ValueError(f"milliseconds out of range: {self.milliseconds}")
        if self.days != 0 and abs(self.hours) > 23:
            raise ValueError(f"hours out of range for a span with days: {self.hours}")
        return self

    @property
    def is_negative(self) -> bool:
        return any(p < 0 for p in (self.days, self.hours, self.minutes, self.seconds, self.milliseconds))

    @property
    def value(self) -> timedelta:
        return timedelta(
            days=self.days,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            milliseconds=self.milliseconds,
        )

    @classmethod
    def from_timedelta(cls, span: timedelta) -> DurationValue:
        """Split *span* into components, keeping days only when the span exceeds a day."""
        total_ms = span // timedelta(milliseconds=1)
        sign = -1 if total_ms < 0 else 1
        rest = abs(total_ms)
        days, rest = divmod(rest, 86_400_000)
        hours, rest = divmod(rest, 3_600_000)
        minutes, rest = divmod(rest, 60_000)
        seconds, millis = divmod(rest, 1000)
        return cls(
            days=sign * days,
            hours=sign * hours,
            minutes=sign * minutes,
            seconds=sign * seconds,
            milliseconds=sign * millis,
        )


class BinaryValue(_LiteralValue):
    """A byte sequence, written as base64 between brackets."""

    kind: Literal["binary"] = "binary"
    value: bytes


# Any literal value. The `kind` discriminator keeps dispatch exhaustive.
Value = Annotated[
    StringValue
    | RawStringValue
    | CharacterValue
    | Int32Value
    | Int64Value
    | Float32Value
    | Float64Value
    | DecimalValue
    | BooleanValue
    | NullValue
    | DateValue
    | LocalDateTimeValue
    | ZonedDateTimeValue
    | DurationValue
    | BinaryValue,
    _Field(discriminator="kind"),
]

VALUE_TYPES: tuple[type[BaseModel], ...] = (
    StringValue,
    RawStringValue,
    CharacterValue,
    Int32Value,
    Int64Value,
    Float32Value,
    Float64Value,
    DecimalValue,
    BooleanValue,
    NullValue,
    DateValue,
    LocalDateTimeValue,
    ZonedDateTimeValue,
    DurationValue,
    BinaryValue,
)


def is_value(obj: object) -> bool:
    """Return True if *obj* is one of the literal value models."""
    return isinstance(obj, VALUE_TYPES)


def resolve_zone(zone: str) -> tzinfo:
    """Resolve zone text to a tzinfo.

    Accepts ``UTC``/``GMT``/``Z``, fixed offsets such as ``GMT+02:00`` or
    ``+05:30``, the three-letter short ids (``JST``, ``PST``, ...), and IANA
    names.

    Raises:
        ValueError: If the zone is unknown.
    """
    if zone in ("Z", "UTC", "GMT"):
        return timezone.utc
    zone_key = _SHORT_IDS.get(zone, zone)
    match = _OFFSET_RE.match(zone_key)
    if match:
        sign, hh, mm = match.group(1), int(match.group(2)), int(match.group(3) or 0)
        if hh > 18 or mm > 59:
            raise ValueError(f"Time zone offset out of range: {zone!r}")
        offset = timedelta(hours=hh, minutes=mm)
        return timezone(-offset if sign == "-" else offset)
    try:
        return ZoneInfo(zone_key)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone: {zone!r}") from None


# Native-scalar constructors with explicit kind tagging.


def string_value(text: str, literal: bool = False) -> StringValue | RawStringValue:
    """Return a String value, or a raw String value when *literal* is set."""
    return RawStringValue(value=text) if literal else StringValue(value=text)


def char_value(ch: str) -> CharacterValue:
    return CharacterValue(value=ch)


def int32_value(n: int) -> Int32Value:
    return Int32Value(value=n)


def int64_value(n: int) -> Int64Value:
    return Int64Value(value=n)


def float32_value(x: float) -> Float32Value:
    return Float32Value(value=float(x))


def float64_value(x: float) -> Float64Value:
    return Float64Value(value=float(x))


def decimal_value(d: Decimal | str | int) -> DecimalValue:
    return DecimalValue(value=d if isinstance(d, Decimal) else Decimal(d))


def bool_value(b: bool) -> BooleanValue:
    return BooleanValue(value=b)


def null_value() -> NullValue:
    return NullValue()


def date_value(d: date) -> DateValue:
    return DateValue(value=d.date() if isinstance(d, datetime) else d)


def datetime_value(dt: datetime, zone: str | None = None) -> LocalDateTimeValue | ZonedDateTimeValue:
    """Return a local or zoned date-time value.

    With *zone*, a naive *dt* is taken as wall-clock time in that zone and an
    aware *dt* is converted into it. Without *zone*, a naive *dt* gives a local
    value and an aware *dt* uses its own zone name.
    """
    if zone is None:
        if dt.tzinfo is None:
            return LocalDateTimeValue(value=dt)
        zone = _zone_name(dt)
    tz = resolve_zone(zone)
    in_zone = dt.replace(tzinfo=tz) if dt.tzinfo is None else dt.astimezone(tz)
    return ZonedDateTimeValue(value=in_zone, zone=zone)


def duration_value(span: timedelta) -> DurationValue:
    return DurationValue.from_timedelta(span)


def binary_value(data: bytes | bytearray) -> BinaryValue:
    return BinaryValue(value=bytes(data))


def value(obj: object) -> Value:
    """Coerce a native Python object (or an existing value) into a Value.

    Integers become 32-bit when they fit and 64-bit otherwise; ``str`` becomes
    a String value. Use the explicit constructors for characters, raw strings,
    32-bit floats, or forced integer widths.

    Raises:
        TypeError: If the object has no SDL representation.
    """
    if is_value(obj):
        return obj  # type: ignore[return-value]
    if obj is None:
        return NullValue()
    if isinstance(obj, bool):
        return BooleanValue(value=obj)
    if isinstance(obj, int):
        if INT32_MIN <= obj <= INT32_MAX:
            return Int32Value(value=obj)
        return Int64Value(value=obj)
    if isinstance(obj, float):
        return Float64Value(value=obj)
    if isinstance(obj, Decimal):
        return DecimalValue(value=obj)
    if isinstance(obj, str):
        return StringValue(value=obj)
    if isinstance(obj, (bytes, bytearray)):
        return BinaryValue(value=bytes(obj))
    if isinstance(obj, datetime):
        return datetime_value(obj)
    if isinstance(obj, date):
        return DateValue(value=obj)
    if isinstance(obj, timedelta):
        return DurationValue.from_timedelta(obj)
    raise TypeError(f"{type(obj).__name__} is not coercible to an SDL value")


# ################
# Implementation
# ################

# Legacy three-letter zone ids and the zones they stand for.
_SHORT_IDS: dict[str, str] = {
    "ACT": "Australia/Darwin",
    "AET": "Australia/Sydney",
    "AGT": "America/Argentina/Buenos_Aires",
    "ART": "Africa/Cairo",
    "AST": "America/Anchorage",
    "BET": "America/Sao_Paulo",
    "BST": "Asia/Dhaka",
    "CAT": "Africa/Harare",
    "CNT": "America/St_Johns",
    "CST": "America/Chicago",
    "CTT": "Asia/Shanghai",
    "EAT": "Africa/Addis_Ababa",
    "ECT": "Europe/Paris",
    "EST": "-05:00",
    "HST": "-10:00",
    "IET": "America/Indiana/Indianapolis",
    "IST": "Asia/Kolkata",
    "JST": "Asia/Tokyo",
    "MIT": "Pacific/Apia",
    "MST": "-07:00",
    "NET": "Asia/Yerevan",
    "NST": "Pacific/Auckland",
    "PLT": "Asia/Karachi",
    "PNT": "America/Phoenix",
    "PRT": "America/Puerto_Rico",
    "PST": "America/Los_Angeles",
    "SST": "Pacific/Guadalcanal",
    "VST": "Asia/Ho_Chi_Minh",
}

_OFFSET_RE = re.compile(r"^(?:GMT|UTC)?([+-])(\d{1,2})(?::?(\d{2}))?$")


def _truncate_to_millis(dt: datetime) -> datetime:
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def _zone_name(dt: datetime) -> str:
    """Pick renderable zone text for an aware datetime."""
    key = getattr(dt.tzinfo, "key", None)
    if key:
        return key
    offset = dt.utcoffset()
    assert offset is not None
    if offset == timedelta(0):
        return "UTC"
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hh, mm = divmod(abs(total_minutes), 60)
    return f"GMT{sign}{hh:02d}:{mm:02d}"
