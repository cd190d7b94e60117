"""Operations on a path of an OpenAPI 3 document."""

from __future__ import annotations

import json
from collections.abc import MutableSet, Sequence
from dataclasses import dataclass, field
from typing import Any

from oaspec.bodies import RequestBodyRef, ResponseRef
from oaspec.parameter import ParameterRef, check_duplicate_params
from oaspec.schema import SpecError
from oaspec.security import validate_security_requirement
from oaspec.server import Server


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


def _blank(text: str | None) -> bool:
    return text is not None and not text.strip()


@dataclass
class Operation:
    """A single API operation on a path."""

    tags: list[str] | None = _named("tags")
    summary: str | None = _named("summary")
    description: str | None = _named("description")
    external_docs: Any = _named("externalDocs")

    operation_id: str = _named("operationId", "")
    parameters: list[ParameterRef | None] | None = _named("parameters")
    request_body: RequestBodyRef | None = _named("requestBody")
    responses: dict[str, ResponseRef] | None = _named("responses")
    callbacks: dict[str, Any] | None = _named("callbacks")

    deprecated: bool = _named("deprecated", False)
    security: list[dict[str, list[str]]] | None = _named("security")
    servers: list[Server] | None = _named("servers")

    extensions: dict[str, Any] | None = _named("extensions")

    def validate(
        self,
        path_templates: Sequence[str],
        required_path_templates: Sequence[str],
        operation_ids: MutableSet[str],
    ) -> None:
        """Check the operation, recording its id in ``operation_ids``.

        Tags are sorted in place and parameters receive their defaults.
        """
        if self.tags:
            self.tags.sort()
            for current, following in zip(self.tags, self.tags[1:]):
                if current == following:
                    raise SpecError(f"tags has duplicate: {current}")

        if _blank(self.summary):
            raise SpecError("summary if present must not be blank")
        if _blank(self.description):
            raise SpecError("description if present must not be blank")
        if self.external_docs is not None:
            try:
                self.external_docs.validate()
            except ValueError as err:
                raise SpecError(f"externalDocs.{err}") from err

        if not self.operation_id.strip():
            raise SpecError("operationId must not be blank")
        if self.operation_id in operation_ids:
            raise SpecError(f"operationId is duplicated: {self.operation_id}")
        operation_ids.add(self.operation_id)

        self._validate_parameters(path_templates, required_path_templates)

        if self.request_body is not None:
            try:
                self.request_body.validate()
            except ValueError as err:
                raise SpecError(f"requestBody.{err}") from err

        self._validate_responses()

        for key, callback in (self.callbacks or {}).items():
            validate = getattr(callback, "validate", None)
            if validate is None:
                continue
            try:
                validate()
            except ValueError as err:
                raise SpecError(f"callbacks({key}).{err}") from err

        for index, requirement in enumerate(self.security or ()):
            try:
                validate_security_requirement(requirement)
            except ValueError as err:
                raise SpecError(f"security[{index}].{err}") from err

        for index, server in enumerate(self.servers or ()):
            try:
                server.validate()
            except ValueError as err:
                raise SpecError(f"servers[{index}].{err}") from err

    def _validate_parameters(
        self, path_templates: Sequence[str], required_path_templates: Sequence[str]
    ) -> None:
        try:
            check_duplicate_params(self.parameters)
        except ValueError as err:
            raise SpecError(f"parameters.{err}") from err

        for index, entry in enumerate(self.parameters or ()):
            if entry is None:
                raise SpecError(f"parameters[{index}] cannot be nil")
            name = entry.parameter.name if entry.parameter is not None else ""
            try:
                entry.validate(path_templates)
            except ValueError as err:
                quoted = json.dumps(name, ensure_ascii=False)
                raise SpecError(f"parameters[{index}:{quoted}].{err}") from err

        declared = {
            entry.parameter.name
            for entry in self.parameters or ()
            if entry is not None and entry.parameter is not None and entry.parameter.in_ == "path"
        }
        for template in required_path_templates:
            if template not in declared:
                raise SpecError(f"parameters: missing path parameter {template}")

    def _validate_responses(self) -> None:
        if not self.responses:
            raise SpecError("responses must not be empty")
        default = self.responses.get("default")
        if default is not None and default.response is not None and not default.response.content:
            raise SpecError(
                "responses(default).content content must not be empty for default response"
            )
        for key, response in self.responses.items():
            if response is None:
                continue
            try:
                response.validate()
            except ValueError as err:
                raise SpecError(f"responses({key}).{err}") from err