"""Request bodies and responses of an OpenAPI 3 operation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from oaspec.schema import SpecError


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


def _validate_each(label: str, items: Mapping[str, Any] | None) -> None:
    for key, item in (items or {}).items():
        if item is None:
            continue
        try:
            item.validate()
        except ValueError as err:
            raise SpecError(f"{label}({key}).{err}") from err


@dataclass
class RequestBody:
    """The body an operation accepts."""

    description: str | None = _named("description")
    content: dict[str, Any] | None = _named("content")
    required: bool = _named("required", False)

    def validate(self) -> None:
        """Check the body; raise SpecError on the first fault."""
        if self.description is not None and not self.description.strip():
            raise SpecError("description if present must not be blank")
        if not self.content:
            raise SpecError("content must not be empty")
        _validate_each("content", self.content)
        if len(self.content) > 1:
            raise SpecError("content: currently only one body type is supported")


@dataclass
class RequestBodyRef:
    """A request body given inline, or a ``$ref`` pointing at one."""

    ref: str = _named("$ref", "")
    request_body: RequestBody | None = field(default=None, metadata={"embedded": True})

    def validate(self) -> None:
        """Validate the inline body; references are not followed."""
        if self.ref:
            return
        if self.request_body is None:
            raise SpecError("request body must be given when there is no $ref")
        self.request_body.validate()


@dataclass
class Response:
    """A single response of an operation."""

    description: str = _named("description", "")
    headers: dict[str, Any] | None = _named("headers")
    content: dict[str, Any] | None = _named("content")
    links: dict[str, Any] | None = _named("links")
    extensions: dict[str, Any] | None = _named("extensions")

    def validate(self) -> None:
        """Check the response; raise SpecError on the first fault."""
        if not self.description.strip():
            raise SpecError("description must not be blank")
        _validate_each("headers", self.headers)
        _validate_each("content", self.content)
        _validate_each("links", self.links)
        if self.content and len(self.content) > 1:
            raise SpecError("content: only one response type is supported")


@dataclass
class ResponseRef:
    """A response given inline, or a ``$ref`` pointing at one."""

    ref: str = _named("$ref", "")
    response: Response | None = field(default=None, metadata={"embedded": True})

    def validate(self) -> None:
        """Validate the inline response; references are not followed."""
        if self.ref:
            return
        if self.response is None:
            raise SpecError("response must be given when there is no $ref")
        self.response.validate()