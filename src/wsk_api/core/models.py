"""Domain models for wsk-api.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and conversion to/from the gateway's JSON
shape.  They carry zero I/O and zero dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# HTTP verbs
# ---------------------------------------------------------------------------

class ApiVerb(str, enum.Enum):
    """Closed set of HTTP verbs an API route may expose."""

    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"

    @classmethod
    def names(cls) -> list[str]:
        """Accepted verb spellings, sorted."""
        return sorted(member.value for member in cls)


BACKEND_METHOD: str = ApiVerb.POST.value
"""Bound actions are always invoked with a blocking POST."""

DEFAULT_API_NAME: str = "/"
DEFAULT_BASE_PATH: str = "/"


# ---------------------------------------------------------------------------
# Client configuration snapshot
# ---------------------------------------------------------------------------

DEFAULT_NAMESPACE: str = "_"
"""Shorthand the platform resolves to the caller's own namespace."""


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Process-wide client settings, read but never mutated by the core."""

    host: str = ""
    """API host, with or without an ``https://`` scheme."""

    namespace: str = DEFAULT_NAMESPACE

    auth_token: str = ""
    """``uuid:key`` credential."""

    insecure: bool = False
    """Skip TLS certificate verification."""

    @property
    def host_name(self) -> str:
        """Host without any scheme or trailing slash."""
        host = self.host
        for scheme in ("https://", "http://"):
            if host.startswith(scheme):
                host = host[len(scheme):]
                break
        return host.rstrip("/")


# ---------------------------------------------------------------------------
# Qualified entity name
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class QualifiedName:
    """An entity name with its owning namespace."""

    namespace: str
    """Owning namespace; empty when none was given or resolved."""

    entity_name: str
    """``action`` or ``package/action``; may be empty."""


# ---------------------------------------------------------------------------
# Action binding
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ActionBinding:
    """The backend action invoked when the API is called."""

    name: str
    namespace: str
    backend_url: str
    backend_method: str = BACKEND_METHOD
    auth_token: str = ""

    def to_dict(self) -> dict[str, str]:
        raw = {
            "name": self.name,
            "namespace": self.namespace,
            "backendMethod": self.backend_method,
            "backendUrl": self.backend_url,
            "authkey": self.auth_token,
        }
        return {key: value for key, value in raw.items() if value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActionBinding:
        return cls(
            name=str(data.get("name") or ""),
            namespace=str(data.get("namespace") or ""),
            backend_url=str(data.get("backendUrl") or ""),
            backend_method=str(data.get("backendMethod") or BACKEND_METHOD),
            auth_token=str(data.get("authkey") or ""),
        )


# ---------------------------------------------------------------------------
# API resource
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApiResource:
    """A gateway route (base path + relative path + verb) bound to an action.

    Built once per command invocation and handed straight to the
    client; identity and persistence are assigned server-side.
    """

    namespace: str
    """Owner namespace, copied from the client configuration."""

    gateway_rel_path: str
    """Relative URL path.  Case is preserved — gateway matching is case-sensitive."""

    gateway_method: str
    """Upper-cased HTTP verb."""

    action: ActionBinding

    api_name: str = DEFAULT_API_NAME
    """API collection name used to group routes."""

    gateway_base_path: str = DEFAULT_BASE_PATH

    gateway_full_path: str | None = None
    """Externally reachable URL; only set on resources returned by the server."""

    @property
    def id(self) -> str:
        """``namespace:basepath`` — the api name does not take part."""
        return f"{self.namespace}:{self.gateway_base_path}"

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the gateway's field names, omitting empty values."""
        raw: dict[str, Any] = {
            "namespace": self.namespace,
            "apiName": self.api_name,
            "gatewayBasePath": self.gateway_base_path,
            "gatewayPath": self.gateway_rel_path,
            "gatewayMethod": self.gateway_method,
            "id": self.id,
            "gatewayFullPath": self.gateway_full_path,
        }
        doc = {key: value for key, value in raw.items() if value}
        action = self.action.to_dict()
        if action:
            doc["action"] = action
        return doc

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApiResource:
        """Parse a gateway response document.

        Missing optional fields fall back to the same defaults the
        request builder uses.
        """
        action_data = data.get("action")
        if not isinstance(action_data, dict):
            action_data = {}
        return cls(
            namespace=str(data.get("namespace") or ""),
            gateway_rel_path=str(data.get("gatewayPath") or ""),
            gateway_method=str(data.get("gatewayMethod") or "").upper(),
            action=ActionBinding.from_dict(action_data),
            api_name=str(data.get("apiName") or DEFAULT_API_NAME),
            gateway_base_path=str(data.get("gatewayBasePath") or DEFAULT_BASE_PATH),
            gateway_full_path=data.get("gatewayFullPath") or None,
        )


# ---------------------------------------------------------------------------
# List filter
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApiListOptions:
    """Filters and paging window for ``api list``."""

    action: str = ""
    rel_path: str = ""
    verb: str = ""
    skip: int = 0
    limit: int = 30
    docs: bool = False

    def to_params(self) -> dict[str, str | int]:
        """Query parameters; empty filters are left out, paging always sent."""
        params: dict[str, str | int] = {}
        if self.action:
            params["action"] = self.action
        if self.rel_path:
            params["relpath"] = self.rel_path
        if self.verb:
            params["operation"] = self.verb.upper()
        params["limit"] = self.limit
        params["skip"] = self.skip
        if self.docs:
            params["docs"] = "true"
        return params
