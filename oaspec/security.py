"""Security schemes and requirements of an OpenAPI 3 document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from oaspec.schema import SpecError


def _named(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"name": name})


@dataclass
class OAuthFlow:
    """Configuration of a single OAuth2 flow."""

    authorization_url: str = _named("authorizationUrl", "")
    token_url: str = _named("tokenUrl", "")
    refresh_url: str | None = _named("refreshUrl")
    scopes: dict[str, str] | None = _named("scopes")
    extensions: dict[str, Any] | None = _named("extensions")


@dataclass
class OAuthFlows:
    """The OAuth2 flows a security scheme supports."""

    implicit: OAuthFlow | None = _named("implicit")
    password: OAuthFlow | None = _named("password")
    client_credentials: OAuthFlow | None = _named("clientCredentials")
    authorization_code: OAuthFlow | None = _named("authorizationCode")
    extensions: dict[str, Any] | None = _named("extensions")


@dataclass
class SecurityScheme:
    """A scheme operations can be secured with: HTTP auth, API key, OAuth2 or OpenID Connect."""

    type: str = _named("type", "")
    description: str | None = _named("description")
    name: str = _named("name", "")
    in_: str = _named("in", "")
    scheme: str = _named("scheme", "")
    bearer_format: str | None = _named("bearerFormat")
    flows: OAuthFlows = field(default_factory=OAuthFlows, metadata={"name": "flows"})
    open_id_connect_url: str = _named("openIdConnectUrl", "")


@dataclass
class SecuritySchemeRef:
    """A security scheme given inline, or a ``$ref`` pointing at one."""

    ref: str = _named("$ref", "")
    security_scheme: SecurityScheme | None = field(default=None, metadata={"embedded": True})


def validate_security_requirement(requirement: Mapping[str, Any]) -> None:
    """Check that a requirement maps scheme names to lists of scope names."""
    for name, scopes in requirement.items():
        if not isinstance(name, str):
            raise SpecError("security requirement names must be strings")
        if not isinstance(scopes, (list, tuple)) or not all(
            isinstance(scope, str) for scope in scopes
        ):
            raise SpecError(f"{name}: scopes must be a list of strings")