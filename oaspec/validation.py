"""Validators for values against schema constraints; each raises ValueError on failure."""

from __future__ import annotations

import itertools
import math
import re
from collections.abc import Mapping, Sequence

_UUID_V4 = re.compile(
    r"^[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$", re.IGNORECASE
)
_DECIMAL = re.compile(r"[0-9]+(?:\.[0-9]*)?")


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def validate_format_uuid_v4(s: str) -> None:
    """Check that ``s`` has the shape of a version 4 UUID."""
    if not _UUID_V4.match(s):
        raise ValueError("must be a valid uuid v4")


def validate_format_decimal(s: str) -> None:
    """Check that ``s`` contains a decimal number."""
    if not _DECIMAL.search(s):
        raise ValueError("must be a valid decimal number")


def validate_max_number(val: float, maximum: float, exclusive: bool) -> None:
    """Check ``val <= maximum``, or ``val < maximum`` when exclusive."""
    if exclusive:
        if val >= maximum:
            raise ValueError(f"must be less than {_format_number(maximum)}")
    elif val > maximum:
        raise ValueError(f"must be less than or equal to {_format_number(maximum)}")


def validate_min_number(val: float, minimum: float, exclusive: bool) -> None:
    """Check ``val >= minimum``, or ``val > minimum`` when exclusive."""
    if exclusive:
        if val <= minimum:
            raise ValueError(f"must be greater than {_format_number(minimum)}")
    elif val < minimum:
        raise ValueError(f"must be greater than or equal to {_format_number(minimum)}")


def validate_multiple_of_int(val: int, factor: int) -> None:
    """Check that ``val`` is an integer multiple of ``factor``."""
    if val % factor != 0:
        raise ValueError(f"must be a multiple of {factor}")


def validate_multiple_of_float(val: float, factor: float) -> None:
    """Check that ``val / factor`` has no fractional part."""
    quotient = val / factor
    if math.isinf(quotient):
        return
    if math.isnan(quotient) or math.trunc(quotient) != quotient:
        raise ValueError(f"must be a multiple of {factor:f}")


def validate_max_length(s: str, maximum: int) -> None:
    """Check that the UTF-8 length of ``s`` is at most ``maximum`` bytes."""
    if len(s.encode("utf-8")) > maximum:
        raise ValueError(f"length must be less than or equal to {maximum}")


def validate_min_length(s: str, minimum: int) -> None:
    """Check that the UTF-8 length of ``s`` is at least ``minimum`` bytes."""
    if len(s.encode("utf-8")) < minimum:
        raise ValueError(f"length must be greater than or equal to {minimum}")


def validate_max_items(items: Sequence[object], maximum: int) -> None:
    """Check that ``items`` holds at most ``maximum`` elements."""
    if len(items) > maximum:
        raise ValueError(f"length must be less than or equal to {maximum}")


def validate_min_items(items: Sequence[object], minimum: int) -> None:
    """Check that ``items`` holds at least ``minimum`` elements."""
    if len(items) < minimum:
        raise ValueError(f"length must be greater than or equal to {minimum}")


def validate_unique_items(items: Sequence[object]) -> None:
    """Check by pairwise equality that no two elements of ``items`` are equal."""
    if any(a == b for a, b in itertools.combinations(items, 2)):
        raise ValueError("items must all be unique")


def validate_max_properties(mapping: Mapping[str, object], maximum: int) -> None:
    """Check that ``mapping`` has at most ``maximum`` keys."""
    if len(mapping) > maximum:
        raise ValueError(f"number of properties must be less than or equal to {maximum}")


def validate_min_properties(mapping: Mapping[str, object], minimum: int) -> None:
    """Check that ``mapping`` has at least ``minimum`` keys."""
    if len(mapping) < minimum:
        raise ValueError(f"number of properties must be greater than or equal to {minimum}")


def validate_pattern(s: str, pattern: str) -> None:
    """Check that ``pattern`` matches somewhere in ``s``; a bad pattern raises re.error."""
    if re.search(pattern, s) is None:
        raise ValueError(f"must conform to the pattern `{pattern}`")


def validate_enum(s: str, whitelist: Sequence[str]) -> None:
    """Check that ``s`` is one of the allowed values."""
    if s not in whitelist:
        joined = '", "'.join(whitelist)
        raise ValueError(f'must be one of: "{joined}"')