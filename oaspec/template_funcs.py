"""Helper functions made available to code generation templates."""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Mapping
from typing import Any

from oaspec.schema import Schema, SchemaRef

_STATUS_TEXT = {
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",
    103: "Early Hints",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi-Status",
    208: "Already Reported",
    226: "IM Used",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request URI Too Long",
    415: "Unsupported Media Type",
    416: "Requested Range Not Satisfiable",
    417: "Expectation Failed",
    418: "I'm a teapot",
    421: "Misdirected Request",
    422: "Unprocessable Entity",
    423: "Locked",
    424: "Failed Dependency",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    510: "Not Extended",
    511: "Network Authentication Required",
}


def http_status(code: int) -> str:
    """Return the reason phrase of an HTTP status code, or "" if it is unknown."""
    return _STATUS_TEXT.get(code, "")


def ref_name(ref: str) -> str:
    """Return the last segment of a ``$ref`` such as ``#/components/schemas/Pet``."""
    return ref.rsplit("/", 1)[-1]


def deref(value: Any) -> Any:
    """Return a value copy of a specification object; other values pass through.

    None stays None, dataclass instances are copied shallowly so that the
    template sees the object's value rather than a shared reference.
    """
    if value is None:
        return None
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return copy.copy(value)
    return value


def keys_reflect(mapping: Any) -> list[str]:
    """Return the keys of a mapping whose keys are strings."""
    if not isinstance(mapping, Mapping):
        raise TypeError(f"want a mapping with string keys, got: {type(mapping).__name__}")
    keys = list(mapping)
    if not all(isinstance(key, str) for key in keys):
        raise TypeError(f"want a mapping with string keys, got: {type(mapping).__name__}")
    return keys


def must_validate(schema: Schema) -> bool:
    """Return True if the schema itself carries any constraint that needs checking."""
    return (
        any(
            value is not None
            for value in (
                schema.multiple_of,
                schema.maximum,
                schema.minimum,
                schema.max_length,
                schema.min_length,
                schema.pattern,
                schema.max_items,
                schema.min_items,
                schema.unique_items,
                schema.max_properties,
                schema.min_properties,
            )
        )
        or bool(schema.enum)
    )


def must_validate_recurse(schema: Schema) -> bool:
    """Return True if the schema or any schema reachable from it needs validation."""
    return _must_validate(schema, set())


def _follow(entry: SchemaRef | None, visited: set[str]) -> Schema | None:
    """Return the schema behind ``entry``, or None if absent or already visited."""
    if entry is None:
        return None
    if entry.ref:
        if entry.ref in visited:
            return None
        visited.add(entry.ref)
    return entry.schema


def _must_validate(schema: Schema | None, visited: set[str]) -> bool:
    if schema is None:
        return False
    if must_validate(schema):
        return True

    if schema.type == "array":
        return _must_validate(_follow(schema.items, visited), visited)

    if schema.type == "object":
        found = False
        extra = schema.additional_properties
        if extra is not None and extra.schema_ref is not None:
            found = _must_validate(_follow(extra.schema_ref, visited), visited)
        for entry in (schema.properties or {}).values():
            if found:
                break
            found = _must_validate(_follow(entry, visited), visited)
        return found

    return False