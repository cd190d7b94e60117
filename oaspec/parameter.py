"""Operation parameters of an OpenAPI 3 document."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from oaspec.schema import SchemaRef, SpecError

_DEFAULT_STYLES = {"path": "simple", "query": "form", "header": "simple", "cookie": "form"}


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


def _blank(text: str | None) -> bool:
    return text is not None and not text.strip()


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Parameter:
    """A single parameter of an operation, found in the path, query, header or cookie."""

    name: str = _named("name", "")
    in_: str = _named("in", "")
    description: str | None = _named("description")
    required: bool = _named("required", False)
    deprecated: bool = _named("deprecated", False)
    allow_empty_value: bool = _named("allowEmptyValue", False)

    style: str | None = _named("style")
    explode: bool | None = _named("explode")
    allow_reserved: bool = _named("allowReserved", False)
    schema: SchemaRef | None = _named("schema")

    example: Any = _named("example")
    examples: dict[str, Any] | None = _named("examples")

    content: dict[str, Any] | None = _named("content")

    extensions: dict[str, Any] | None = _named("extensions")

    def _schema_type(self) -> str:
        if self.schema is None or self.schema.schema is None:
            return ""
        return self.schema.schema.type

    def validate(self, path_templates: Sequence[str]) -> None:
        """Check the parameter and fill in defaults for style, explode and required."""
        if not self.name.strip():
            raise SpecError("name must not be blank")

        if self.in_ == "path":
            if self.name not in path_templates:
                raise SpecError(
                    f"name {_quote(self.name)} not found in path templates: "
                    f"[{', '.join(path_templates)}]"
                )
            self.required = True
            if self.allow_empty_value:
                raise SpecError("allowEmptyValue must not be false for path parameters")
            if self.allow_reserved:
                raise SpecError("allowReserved must not be true for path parameters")
        elif self.in_ == "header":
            if self.allow_empty_value:
                raise SpecError("allowEmptyValue must not be false for header parameters")
            if self.allow_reserved:
                raise SpecError("allowReserved must not be true for header parameters")
        elif self.in_ == "cookie":
            if self.allow_empty_value:
                raise SpecError("allowEmptyValue must not be false for path parameters")
            if self.allow_reserved:
                raise SpecError("allowReserved must not be true for cookie parameters")
        elif self.in_ != "query":
            raise SpecError("in must be one of: path|query|header|cookie")

        if self.style is None:
            self.style = _DEFAULT_STYLES[self.in_]
        if self.explode is None:
            self.explode = self.style == "form"
        self._validate_style()

        if _blank(self.description):
            raise SpecError("description if present must not be blank")

        if self.schema is not None and self.content:
            raise SpecError("schema and content are mutually exclusive, define one or the other")

        if self.schema is not None:
            try:
                self.schema.validate()
            except ValueError as err:
                raise SpecError(f"schema.{err}") from err

        for key, media in (self.content or {}).items():
            if media is None:
                continue
            try:
                media.validate()
            except ValueError as err:
                raise SpecError(f"content({key}).{err}") from err

    def _validate_style(self) -> None:
        style, where, kind = self.style, self.in_, self._schema_type()
        if style in ("matrix", "label"):
            if where != "path":
                raise SpecError(f"style {_quote(style)} can only be used in path")
        elif style == "form":
            if where not in ("query", "cookie"):
                raise SpecError(f"style {_quote(style)} can only be used in query or cookie")
        elif style == "simple":
            if where not in ("path", "header"):
                raise SpecError(f"style {_quote(style)} can only be used in path or header")
            if kind == "object":
                raise SpecError(
                    "schema can not be of type 'object' when parameter style is simple, "
                    f"got: {kind}"
                )
        elif style in ("spaceDelimited", "pipeDelimited"):
            if where != "query":
                raise SpecError(f"style {_quote(style)} can only be used in query")
            if kind not in ("array", "object"):
                raise SpecError(
                    "schema must be of type 'object' or 'array' when parameter style is "
                    f"spaceDelimited or pipeDelimited, got: {kind}"
                )
        elif style == "deepObject":
            if where != "query":
                raise SpecError(f"style {_quote(style)} can only be used in query")
            if kind != "object":
                raise SpecError(
                    "schema must be of type 'object' when parameter style is deepObject, "
                    f"got: {kind}"
                )
        else:
            raise SpecError(
                "style must be one of matrix|label|form|simple|spaceDelimited|pipeDelimited|"
                f"deepObject but found {style}"
            )


@dataclass
class ParameterRef:
    """A parameter given inline, or a ``$ref`` pointing at one."""

    ref: str = _named("$ref", "")
    parameter: Parameter | None = field(default=None, metadata={"embedded": True})

    def validate(self, path_templates: Sequence[str]) -> None:
        """Validate the inline parameter; an unresolved reference is left alone."""
        if self.parameter is None:
            if self.ref:
                return
            raise SpecError("parameter must be given when there is no $ref")
        self.parameter.validate(path_templates)


def check_duplicate_params(params: Sequence[ParameterRef | None] | None) -> None:
    """Reject repeated name/location pairs and path parameters not marked required."""
    seen: set[tuple[str, str]] = set()
    for entry in params or ():
        if entry is None or entry.parameter is None:
            continue
        param = entry.parameter
        key = (param.name, param.in_)
        if key in seen:
            raise SpecError(f"name {param.name} is duplicated where in is: {param.in_}")
        seen.add(key)
        if not param.required and param.in_ == "path":
            raise SpecError(
                'when in="path" then "required" is itself required and must be set to true'
            )