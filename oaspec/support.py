"""Helpers for request handlers: error collections and JSON bodies."""

from __future__ import annotations

import contextlib
import json
from collections.abc import Mapping, MutableMapping
from typing import Any, BinaryIO, Protocol

Errors = dict[str, list[str]]

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class NoBodyError(Exception):
    """Raised when a handler expects a request body and there is none."""

    def __init__(self, message: str = "no body") -> None:
        super().__init__(message)


class _Response(Protocol):
    headers: MutableMapping[str, str]

    def write(self, data: bytes) -> object: ...


def add_errs(errs: Errors | None, key: str, *args: BaseException) -> Errors | None:
    """Append the messages of ``args`` under ``key`` and return the map."""
    if not args:
        return errs
    if errs is None:
        errs = {}
    errs.setdefault(key, []).extend(str(e) for e in args)
    return errs


def add_errs_flatten(
    errs: Errors | None, key: str, to_add: Mapping[str, list[str]] | None
) -> Errors | None:
    """Add the entries of ``to_add`` under ``key.<field>`` and return the map."""
    if not to_add:
        return errs
    if errs is None:
        errs = {}
    for field, field_errs in to_add.items():
        errs[f"{key}.{field}"] = field_errs
    return errs


def merge_errs(dst: Errors | None, src: Mapping[str, list[str]] | None) -> Errors | None:
    """Copy the entries of ``src`` into ``dst``, overwriting colliding keys."""
    if not src:
        return dst
    if dst is None:
        dst = {}
    for key, messages in src.items():
        dst[key] = list(messages)
    return dst


def _encode(obj: Any) -> bytes:
    text = json.dumps(
        obj, separators=(",", ":"), ensure_ascii=False, sort_keys=True, allow_nan=False
    )
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


def write_json(response: _Response, obj: Any) -> None:
    """Encode ``obj`` as compact JSON and write it to ``response`` with its content type."""
    data = _encode(obj)
    response.headers["Content-Type"] = "application/json"
    response.write(data)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value: {name}")


def read_json(body: BinaryIO) -> Any:
    """Read all of ``body``, close it and decode it as JSON."""
    with contextlib.closing(body):
        raw = body.read()
    return json.loads(raw, parse_constant=_reject_constant)