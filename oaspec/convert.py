"""Conversions from request strings (query, header, path values) to typed values."""

from __future__ import annotations

import math
import re
import struct
import uuid
from collections.abc import Callable, Sequence
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import TypeVar

T = TypeVar("T")

_DATETIME_PREFIX = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(Z|[+-]\d{2}:\d{2})?", re.ASCII
)
_TIME_PREFIX = re.compile(r"\d{2}:\d{2}:\d{2}(?:\.\d+)?(Z|[+-]\d{2}:\d{2})?", re.ASCII)
_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

_DATETIME_FULL = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)
_TIME_FULL = re.compile(r"(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})", re.ASCII)

_DURATION = re.compile(
    r"P(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)W)?(?:(\d+)D)?"
    r"(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?",
    re.ASCII,
)

_SIGNED_INT = re.compile(r"[+-]?\d+", re.ASCII)
_UNSIGNED_INT = re.compile(r"\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

_BOOLS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}


def _zone(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours >= 24 or minutes >= 60:
        raise ValueError(f"time zone offset out of range: {text}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _microseconds(fraction: str | None) -> int:
    if not fraction:
        return 0
    return int((fraction + "000000")[:6])


def string_to_datetime(s: str) -> datetime:
    """Parse an RFC 3339 "date-time" production into an aware datetime."""
    if not _DATETIME_PREFIX.match(s):
        raise ValueError("must be a valid date-time")
    m = _DATETIME_FULL.fullmatch(s)
    if m is None:
        raise ValueError(f"cannot parse {s!r} as an RFC 3339 date-time")
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    return datetime(
        year, month, day, hour, minute, second,
        _microseconds(m.group(7)), tzinfo=_zone(m.group(8)),
    )


def string_to_date(s: str) -> date:
    """Parse an RFC 3339 "full-date" production."""
    if not _DATE.fullmatch(s):
        raise ValueError("must be a valid date")
    return date(int(s[0:4]), int(s[5:7]), int(s[8:10]))


def string_to_time(s: str) -> time:
    """Parse an RFC 3339 "full-time" production into an aware time."""
    if not _TIME_PREFIX.match(s):
        raise ValueError("must be a valid time")
    m = _TIME_FULL.fullmatch(s)
    if m is None:
        raise ValueError(f"cannot parse {s!r} as an RFC 3339 time")
    hour, minute, second = (int(g) for g in m.groups()[:3])
    return time(hour, minute, second, _microseconds(m.group(4)), tzinfo=_zone(m.group(5)))


def string_to_duration(s: str) -> timedelta:
    """Parse an ISO 8601 duration; a year is 365 days and a month 30 days."""
    m = _DURATION.fullmatch(s)
    if m is None:
        raise ValueError("must be a valid duration")
    years, months, weeks, days, hours, minutes, seconds = (int(g or 0) for g in m.groups())
    return timedelta(
        days=years * 365 + months * 30 + weeks * 7 + days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def _bit_size(bits: int) -> int:
    if bits == 0:
        return 64
    if not 0 < bits <= 64:
        raise ValueError(f"invalid bit size {bits}")
    return bits


def string_to_int(s: str, bits: int) -> int:
    """Parse a base 10 signed integer that must fit in ``bits`` bits."""
    size = _bit_size(bits)
    if not _SIGNED_INT.fullmatch(s):
        raise ValueError(f"invalid syntax for integer: {s!r}")
    value = int(s)
    limit = 1 << (size - 1)
    if not -limit <= value < limit:
        raise ValueError(f"value out of range for {size}-bit integer: {s!r}")
    return value


def string_to_uint(s: str, bits: int) -> int:
    """Parse a base 10 unsigned integer that must fit in ``bits`` bits."""
    size = _bit_size(bits)
    if not _UNSIGNED_INT.fullmatch(s):
        raise ValueError(f"invalid syntax for unsigned integer: {s!r}")
    value = int(s)
    if value >= 1 << size:
        raise ValueError(f"value out of range for {size}-bit unsigned integer: {s!r}")
    return value


def string_to_float(s: str, bits: int) -> float:
    """Parse a float; with ``bits`` of 32 the value is rounded to single precision."""
    if not s or s != s.strip() or "_" in s:
        raise ValueError(f"invalid syntax for float: {s!r}")
    try:
        value = float(s)
    except ValueError:
        raise ValueError(f"invalid syntax for float: {s!r}") from None
    if math.isinf(value) and "inf" not in s.lower():
        raise ValueError(f"value out of range for float: {s!r}")
    if bits == 32:
        try:
            (value,) = struct.unpack("f", struct.pack("f", value))
        except OverflowError:
            raise ValueError(f"value out of range for 32-bit float: {s!r}") from None
    return value


def string_to_bool(s: str) -> bool:
    """Parse the boolean spellings 1, t, T, TRUE, true, True and their false forms."""
    try:
        return _BOOLS[s]
    except KeyError:
        raise ValueError(f"invalid syntax for bool: {s!r}") from None


def string_to_decimal(s: str) -> Decimal:
    """Parse a finite decimal number."""
    if not _DECIMAL.fullmatch(s):
        raise ValueError(f"can't convert {s} to decimal")
    try:
        return Decimal(s)
    except InvalidOperation:
        raise ValueError(f"can't convert {s} to decimal") from None


def string_to_uuid(s: str) -> uuid.UUID:
    """Parse a UUID in any of its textual forms."""
    try:
        return uuid.UUID(s)
    except ValueError:
        raise ValueError(f"invalid UUID: {s!r}") from None


def string_noop(s: str) -> str:
    """Return a string value unchanged, for use where a conversion is expected.

    Anything that is not a string is rejected, as every other conversion
    only accepts strings too.
    """
    if not isinstance(s, str):
        raise TypeError(f"expected a string, got {type(s).__name__}")
    return s


def exploded_form_array_to_list(
    form_array: Sequence[str], convert: Callable[[str], T]
) -> list[T]:
    """Convert every value of a repeated form key (``color=blue&color=black``)."""
    out = []
    for index, value in enumerate(form_array):
        try:
            out.append(convert(value))
        except ValueError as err:
            raise ValueError(f"error converting form value ({index}): {err}") from err
    return out


def flat_form_array_to_list(
    form_array: Sequence[str], convert: Callable[[str], T]
) -> list[T]:
    """Split the first form value on commas (``color=blue,black``) and convert each part."""
    if not form_array:
        raise ValueError("form array must hold at least one value")
    out = []
    for index, value in enumerate(form_array[0].split(",")):
        try:
            out.append(convert(value))
        except ValueError as err:
            raise ValueError(f"error converting form value ({index}): {err}") from err
    return out