"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from wsk_api.core.models import ApiListOptions, ApiResource


class ApiClient(Protocol):
    """Contract for route-management backends.

    Any object that implements these four methods with the correct
    signatures satisfies this protocol structurally (no explicit
    inheritance required).  Implementations must map all
    backend-specific exceptions to
    :class:`~wsk_api.exceptions.WskApiError` subclasses.
    """

    def insert(self, api: ApiResource, *, overwrite: bool) -> ApiResource:
        """Create *api*, or replace an existing route when *overwrite* is set.

        Returns the stored resource, including its ``gateway_full_path``.

        Raises
        ------
        GatewayError
            When the service rejects the request or cannot be reached.
        """
        ...  # pragma: no cover

    def get(self, api: ApiResource) -> ApiResource:
        """Fetch the stored route matching *api*'s base path, path and verb."""
        ...  # pragma: no cover

    def delete(self, api: ApiResource) -> None:
        """Remove the route matching *api*."""
        ...  # pragma: no cover

    def list(self, options: ApiListOptions) -> list[ApiResource]:
        """Return the routes matching *options*, one page only."""
        ...  # pragma: no cover
