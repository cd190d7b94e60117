"""Schema objects of an OpenAPI 3 document and the rules they must follow."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

_TYPES = ("object", "array", "boolean", "number", "integer", "string")
_NUMERIC = ("integer", "number")


class SpecError(ValueError):
    """A specification document breaks a rule of the OpenAPI 3 format."""


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


def _blank(text: str | None) -> bool:
    return text is not None and not text.strip()


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Discriminator:
    """Names the property whose value selects one of several schemas."""

    property_name: str = _named("propertyName", "")
    mapping: dict[str, str] | None = _named("mapping")


@dataclass
class AdditionalProperties:
    """Either a plain boolean or a schema for the extra properties of an object."""

    allowed: bool = _named("bool", False)
    schema_ref: SchemaRef | None = field(default=None, metadata={"embedded": True})


@dataclass
class Schema:
    """Definition of a data type: an object, array or primitive."""

    title: str | None = _named("title")
    description: str | None = _named("description")
    default: Any = _named("default")

    type: str = _named("type", "")

    nullable: bool = _named("nullable", False)
    read_only: bool = _named("readOnly", False)
    write_only: bool = _named("writeOnly", False)
    deprecated: bool = _named("deprecated", False)

    example: Any = _named("example")
    external_docs: Any = _named("externalDocs")

    multiple_of: float | None = _named("multipleOf")
    maximum: float | None = _named("maximum")
    exclusive_maximum: bool = _named("exclusiveMaximum", False)
    minimum: float | None = _named("minimum")
    exclusive_minimum: bool = _named("exclusiveMinimum", False)

    max_length: int | None = _named("maxLength")
    min_length: int | None = _named("minLength")

    format: str | None = _named("format")
    pattern: str | None = _named("pattern")

    items: SchemaRef | None = _named("items")
    max_items: int | None = _named("maxItems")
    min_items: int | None = _named("minItems")
    unique_items: bool | None = _named("uniqueItems")

    required: list[str] | None = _named("required")
    enum: list[Any] | None = _named("enum")
    max_properties: int | None = _named("maxProperties")
    min_properties: int | None = _named("minProperties")

    properties: dict[str, SchemaRef] | None = _named("properties")
    additional_properties: AdditionalProperties | None = _named("additionalProperties")

    all_of: list[SchemaRef] | None = _named("allOf")
    any_of: list[SchemaRef] | None = _named("anyOf")
    one_of: list[SchemaRef] | None = _named("oneOf")
    not_: SchemaRef | None = _named("not")
    discriminator: Discriminator | None = _named("discriminator")

    extensions: dict[str, Any] | None = _named("extensions")

    def is_required(self, prop: str) -> bool:
        """Return True if ``prop`` is listed among the required properties."""
        return prop in (self.required or ())

    def validate(self) -> None:
        """Check the schema against the specification; raise SpecError on the first fault."""
        if _blank(self.title):
            raise SpecError("title if present must not be blank")
        if self.type not in _TYPES:
            raise SpecError(
                "type must be one of object|array|boolean|number|integer|string "
                f"but got {_quote(self.type)}"
            )
        if self.enum and self.type != "string":
            raise SpecError("enum cannot contain non-strings")
        if self.type == "array" and self.items is None:
            raise SpecError("items must be present if type is array")
        if _blank(self.description):
            raise SpecError("description if present must not be blank")
        if not self.type.strip():
            raise SpecError("type must not be blank")

        self._validate_required()

        if self.properties is not None and not self.properties:
            raise SpecError("properties if present must not be empty")

        if self.external_docs is not None:
            try:
                self.external_docs.validate()
            except ValueError as err:
                raise SpecError(f"externalDocs.{err}") from err

        self._validate_bounds()

        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as err:
                raise SpecError(
                    f"pattern({self.pattern}): failed to compile regular expression: {err}"
                ) from err

        if self.read_only and self.write_only:
            raise SpecError("readOnly may not be true at the same time as writeOnly")

        exclusives = sum(bool(group) for group in (self.all_of, self.any_of, self.one_of))
        if exclusives > 1:
            raise SpecError("allOf|anyOf|oneOf are mutually exclusive")
        if exclusives and (
            self.properties
            or self.required
            or self.additional_properties is not None
            or self.items is not None
        ):
            raise SpecError(
                "allOf|anyOf|oneOf cannot be used together with "
                "properties|required|additionalProperties|items"
            )

        if self.discriminator is None:
            return
        if not exclusives:
            raise SpecError("discriminator may only be present with anyOf|oneOf")
        if not self.discriminator.property_name:
            raise SpecError("discriminator if present must not be empty")

        if self.one_of or self.any_of:
            self._validate_composed_discriminator()
        else:
            self._validate_all_of_discriminator()

    def _validate_required(self) -> None:
        if self.required is None:
            return
        if not self.required:
            raise SpecError("required if present must not be empty")
        for index, name in enumerate(self.required):
            if self.required.count(name) > 1:
                raise SpecError(f"required has duplicate item: {_quote(name)}")
            if (
                self.additional_properties is None
                and self.properties is not None
                and name not in self.properties
            ):
                raise SpecError(
                    f"required[{index}] item was not found in properties "
                    f"(and additionalProperties not supplied): {_quote(name)}"
                )

    def _require_type(self, keyword: str, allowed: tuple[str, ...]) -> None:
        if self.type not in allowed:
            names = ", ".join(f"'{name}'" for name in allowed)
            raise SpecError(f"{keyword}: cannot be used unless type is one of: {names}")

    def _validate_bounds(self) -> None:
        if self.multiple_of is not None:
            self._require_type("multipleOf", _NUMERIC)
        if self.maximum is not None:
            self._require_type("maximum", _NUMERIC)
        if self.minimum is not None:
            self._require_type("minimum", _NUMERIC)
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise SpecError(
                f"maximum({self.maximum:f}): cannot be less than minimum (was {self.minimum:f})"
            )

        if self.max_length is not None:
            if self.max_length <= 0:
                raise SpecError(f"maxLength: must be greater than 0 (was {self.max_length})")
            self._require_type("maxLength", ("string",))
        if self.min_length is not None:
            if self.min_length < 0:
                raise SpecError(f"minLength: cannot be a negative number (was {self.min_length})")
            self._require_type("minLength", ("string",))
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise SpecError(
                f"maxLength({self.max_length}): cannot be less than minLength({self.min_length})"
            )

        if self.max_items is not None:
            if self.max_items <= 0:
                raise SpecError(f"maxItems: must be greater than 0 (was {self.max_items})")
            self._require_type("maxItems", ("array",))
        if self.min_items is not None:
            if self.min_items < 0:
                raise SpecError(f"minItems: cannot be a negative number (was {self.min_items})")
            self._require_type("minItems", ("array",))
        if (
            self.min_items is not None
            and self.max_items is not None
            and self.min_items > self.max_items
        ):
            raise SpecError(
                f"maxItems({self.max_items}): cannot be less than minItems({self.min_items})"
            )

        if self.unique_items is not None:
            self._require_type("uniqueItems", ("array",))

        if self.max_properties is not None:
            if self.max_properties <= 0:
                raise SpecError(
                    f"maxProperties: must be greater than 0 (was {self.max_properties})"
                )
            if self.additional_properties is None:
                raise SpecError(
                    "maxProperties: cannot use unless additionalProperties is specified"
                )
            self._require_type("maxProperties", ("object",))
        if self.min_properties is not None:
            if self.min_properties < 0:
                raise SpecError(
                    f"minProperties: cannot be a negative number (was {self.min_properties})"
                )
            if self.additional_properties is None:
                raise SpecError(
                    "minProperties: cannot use unless additionalProperties is specified"
                )
            self._require_type("minProperties", ("object",))
        if (
            self.min_properties is not None
            and self.max_properties is not None
            and self.min_properties > self.max_properties
        ):
            raise SpecError(
                f"maxProperties({self.max_properties}): "
                f"cannot be less than minProperties({self.min_properties})"
            )

    def _validate_composed_discriminator(self) -> None:
        assert self.discriminator is not None
        prop = self.discriminator.property_name
        if self.any_of:
            schemas, kind = self.any_of, "anyOf"
        else:
            schemas, kind = self.one_of or [], "oneOf"

        for index, entry in enumerate(schemas):
            if not entry.ref:
                raise SpecError(f"{kind}[{index}]: must be a $ref when using discriminator")
            target = entry.schema
            if target is None or prop not in (target.properties or {}):
                raise SpecError(
                    f"discriminator.propertyName({prop}): not found in {kind}[{index}]"
                )
            if not target.is_required(prop):
                raise SpecError(
                    f"discriminator.propertyName({prop}): "
                    f"must be a required property in {kind}[{index}]"
                )

        seen: set[str] = set()
        refs = [entry.ref for entry in schemas]
        for key, value in (self.discriminator.mapping or {}).items():
            if not value:
                raise SpecError(f"discriminator.mapping({key}): cannot be empty")
            if value in seen:
                raise SpecError(f"discriminator.mapping({key}): duplicates value {value}")
            seen.add(value)
            if value not in refs:
                names = '", "'.join(refs)
                raise SpecError(
                    f'discriminator.mapping({key}): could not find ref {value} '
                    f'amongst schemas ("{names}")'
                )

    def _validate_all_of_discriminator(self) -> None:
        assert self.discriminator is not None
        prop = self.discriminator.property_name
        if prop not in (self.properties or {}):
            raise SpecError(
                f"discriminator.propertyName has {prop} but this property was not found"
            )
        if not self.is_required(prop):
            raise SpecError(f"discriminator.propertyName({prop}): must be a required property")
        if self.discriminator.mapping:
            raise SpecError("discriminator.mapping may not be provided with allOf")


@dataclass
class SchemaRef:
    """A schema given inline, or a ``$ref`` pointing at one."""

    ref: str = _named("$ref", "")
    schema: Schema | None = field(default=None, metadata={"embedded": True})

    def is_ref(self) -> bool:
        """Return True if this is a reference to another schema."""
        return bool(self.ref)

    def has_enum(self) -> bool:
        """Return True if the schema carries enum values."""
        return self.schema is not None and bool(self.schema.enum)

    def validate(self) -> None:
        """Validate the inline schema; references are not followed."""
        if self.ref:
            return
        if self.schema is None:
            raise SpecError("schema must be given when there is no $ref")
        self.schema.validate()