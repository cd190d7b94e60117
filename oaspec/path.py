"""Path items of an OpenAPI 3 document and the operations they hold."""

from __future__ import annotations

from collections.abc import MutableSet, Sequence
from dataclasses import dataclass, field
from typing import Any

from oaspec.operation import Operation
from oaspec.parameter import ParameterRef, check_duplicate_params
from oaspec.schema import SpecError
from oaspec.server import Server

_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


def _blank(text: str | None) -> bool:
    return text is not None and not text.strip()


@dataclass
class Path:
    """The operations available on a single path."""

    summary: str | None = _named("summary")
    description: str | None = _named("description")
    get: Operation | None = _named("get")
    put: Operation | None = _named("put")
    post: Operation | None = _named("post")
    delete: Operation | None = _named("delete")
    options: Operation | None = _named("options")
    head: Operation | None = _named("head")
    patch: Operation | None = _named("patch")
    trace: Operation | None = _named("trace")
    servers: list[Server] | None = _named("servers")
    parameters: list[ParameterRef | None] | None = _named("parameters")

    extensions: dict[str, Any] | None = _named("extensions")

    def operations(self) -> dict[str, Operation]:
        """Return the operations that are set, keyed by lower case HTTP method."""
        found = {method: getattr(self, method) for method in _METHODS}
        return {method: op for method, op in found.items() if op is not None}

    def validate(self, path_templates: Sequence[str], operation_ids: MutableSet[str]) -> None:
        """Check the path and its operations; raise SpecError on the first fault."""
        if _blank(self.summary):
            raise SpecError("summary if present must not be blank")
        if _blank(self.description):
            raise SpecError("description if present must not be blank")

        shared = {
            entry.parameter.name
            for entry in self.parameters or ()
            if entry is not None and entry.parameter is not None
        }
        required = [template for template in path_templates if template not in shared]

        for method, op in self.operations().items():
            try:
                op.validate(path_templates, required, operation_ids)
            except ValueError as err:
                raise SpecError(f"{method}.{err}") from err

        try:
            check_duplicate_params(self.parameters)
        except ValueError as err:
            raise SpecError(f"parameters.{err}") from err

        for index, entry in enumerate(self.parameters or ()):
            if entry is None:
                raise SpecError(f"parameters[{index}] cannot be nil")
            try:
                entry.validate(path_templates)
            except ValueError as err:
                raise SpecError(f"parameters[{index}].{err}") from err

        for index, server in enumerate(self.servers or ()):
            try:
                server.validate()
            except ValueError as err:
                raise SpecError(f"servers[{index}].{err}") from err


@dataclass
class PathRef:
    """A path item given inline, or a ``$ref`` pointing at one."""

    ref: str = _named("$ref", "")
    path: Path | None = field(default=None, metadata={"embedded": True})

    def validate(self, path_templates: Sequence[str], operation_ids: MutableSet[str]) -> None:
        """Validate the inline path; references are not followed."""
        if self.ref:
            return
        if self.path is None:
            raise SpecError("path cannot be nil")
        self.path.validate(path_templates, operation_ids)