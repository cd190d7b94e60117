"""Data handed to code generation templates as they walk a specification."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TemplateData:
    """What a template sees: the spec, generator parameters and the object in focus.

    Copies made by the helper functions below share ``imports`` with the data
    they came from, so an import recorded anywhere is seen by every copy.
    """

    spec: Any = None
    params: dict[str, str] | None = None
    imports: set[str] = field(default_factory=set)
    name: str = ""
    object: Any = None
    required: bool = False

    def param_exists(self, param: str) -> bool:
        """Return True if the generator parameter ``param`` was given."""
        return param in (self.params or {})

    def param_equals(self, param: str, want: str) -> bool:
        """Return True if the generator parameter ``param`` was given and equals ``want``."""
        params = self.params or {}
        return param in params and params[param] == want

    def add_import(self, import_name: str) -> str:
        """Record that the generated file needs ``import_name``; return an empty string."""
        self.imports.add(import_name)
        return ""


def new_data(old: TemplateData, name: str, obj: Any) -> TemplateData:
    """Return a copy of ``old`` focused on ``obj`` under ``name``."""
    return dataclasses.replace(old, name=name, object=obj)


def new_data_required(old: TemplateData, name: str, obj: Any, required: bool) -> TemplateData:
    """Return a copy of ``old`` focused on ``obj`` under ``name`` with ``required`` set."""
    return dataclasses.replace(old, name=name, object=obj, required=required)


def recurse_data(old: TemplateData, next_name: str, next_obj: Any) -> TemplateData:
    """Return a copy of ``old`` focused on ``next_obj`` with ``next_name`` appended to the name."""
    return dataclasses.replace(old, name=old.name + next_name, object=next_obj)


def recurse_data_set_required(
    old: TemplateData, next_name: str, next_obj: Any, required: bool
) -> TemplateData:
    """Like recurse_data, also setting ``required``."""
    return dataclasses.replace(
        old, name=old.name + next_name, object=next_obj, required=required
    )


def new_template_data(spec: Any, params: dict[str, str] | None) -> TemplateData:
    """Create template data for a specification with no object in focus."""
    return TemplateData(spec=spec, params=params)


def new_template_data_with_object(
    spec: Any, params: dict[str, str] | None, name: str, obj: Any, required: bool
) -> TemplateData:
    """Create template data for a specification focused on ``obj``."""
    return TemplateData(spec=spec, params=params, name=name, object=obj, required=required)