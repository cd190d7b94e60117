"""Tag objects that add metadata to the tags used by operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from oaspec.schema import SpecError


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


@dataclass
class Tag:
    """Metadata for a single tag."""

    name: str = _named("name", "")
    description: str | None = _named("description")
    external_docs: Any = _named("externalDocs")

    def validate(self) -> None:
        """Check the tag; raise SpecError on the first fault."""
        if not self.name.strip():
            raise SpecError("name cannot be blank")
        if self.description is not None and not self.description.strip():
            raise SpecError("description if present must not be blank")
        if self.external_docs is not None:
            try:
                self.external_docs.validate()
            except ValueError as err:
                raise SpecError(f"externalDocs.{err}") from err