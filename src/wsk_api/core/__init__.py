"""Core / service layer — request building, validation, orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from wsk_api.core.api_builder import build_api, validate_verb
from wsk_api.core.api_service import ApiService
from wsk_api.core.models import (
    ActionBinding,
    ApiListOptions,
    ApiResource,
    ApiVerb,
    ClientConfig,
    QualifiedName,
)
from wsk_api.core.protocols import ApiClient
from wsk_api.core.qualified_name import parse_qualified_name

__all__: list[str] = [
    "ActionBinding",
    "ApiClient",
    "ApiListOptions",
    "ApiResource",
    "ApiService",
    "ApiVerb",
    "ClientConfig",
    "QualifiedName",
    "build_api",
    "parse_qualified_name",
    "validate_verb",
]
