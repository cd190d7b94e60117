"""Server objects of an OpenAPI 3 document and their URL template variables."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from oaspec.schema import SpecError

_SERVER_KEYS = re.compile(r"\{([^}]+)?\}")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


def _blank(text: str | None) -> bool:
    return text is not None and not text.strip()


def _check_url(url: str) -> None:
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in url):
        raise ValueError("invalid control character in URL")
    if url.startswith(":"):
        raise ValueError("missing protocol scheme")
    if _BAD_ESCAPE.search(url):
        raise ValueError("invalid URL escape")
    urlsplit(url)


def find_server_variables_in_url(s: str) -> list[str]:
    """Return the names of the ``{...}`` variables in a server URL, in order."""
    return [match.group(1) or "" for match in _SERVER_KEYS.finditer(s)]


@dataclass
class ServerVariable:
    """A substitution for a variable in a server URL template."""

    enum: list[str] | None = _named("enum")
    default: str = _named("default", "")
    description: str | None = _named("description")
    extensions: dict[str, Any] | None = _named("extensions")

    def validate(self) -> None:
        """Check the variable; raise SpecError on the first fault."""
        if self.enum is not None and not self.enum:
            raise SpecError("enum must not be an empty array")
        for index, value in enumerate(self.enum or ()):
            if not value.strip():
                raise SpecError(f"enum[{index}] must not be blank")
        if not self.default.strip():
            raise SpecError("default is required and must not be blank")
        if self.enum and self.default not in self.enum:
            raise SpecError(
                f"default value {json.dumps(self.default, ensure_ascii=False)} "
                "is not present in 'enum' property"
            )
        if _blank(self.description):
            raise SpecError("description if present must not be blank")


@dataclass
class Server:
    """A server hosting the API."""

    url: str = _named("url", "")
    description: str | None = _named("description")
    variables: dict[str, ServerVariable | None] | None = _named("variables")
    extensions: dict[str, Any] | None = _named("extensions")

    def validate(self) -> None:
        """Check the server and its variables; raise SpecError on the first fault."""
        try:
            _check_url(self.url)
        except ValueError as err:
            raise SpecError(f"url must be a valid url: {err}") from err

        if _blank(self.description):
            raise SpecError("description if present must not be blank")

        variables = self.variables or {}
        url_keys = find_server_variables_in_url(self.url)
        for key in url_keys:
            if key not in variables:
                raise SpecError(f"serverVariable[{key}] has no corresponding variables entry")

        for name, variable in variables.items():
            if name not in url_keys:
                raise SpecError(f"serverVariable[{name}] not found in url provided")
            if variable is None:
                continue
            try:
                variable.validate()
            except ValueError as err:
                raise SpecError(f"serverVariable[{name}].{err}") from err