"""Core API service — orchestrates build, validate and client calls.

This is the central service class consumed by the CLI layer.  It
depends on an :class:`~wsk_api.core.protocols.ApiClient` injected at
construction time (dependency inversion), keeping the core free of any
HTTP imports.

Guarantees
----------
* Validation always happens before the client is called.
* Builder failures escape as :class:`~wsk_api.exceptions.UsageError`.
* Client failures escape as :class:`~wsk_api.exceptions.RemoteError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from wsk_api.core.api_builder import build_api, validate_verb
from wsk_api.core.models import ApiListOptions, ApiResource, ClientConfig
from wsk_api.core.protocols import ApiClient
from wsk_api.exceptions import RemoteError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class ApiService:
    """Stateless service behind the ``api`` sub-commands.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`ApiClient` protocol.
    config:
        Client settings snapshot used to build resources.
    """

    def __init__(self, client: ApiClient, config: ClientConfig) -> None:
        self._client: ApiClient = client
        self._config: ClientConfig = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(
        self,
        args: Sequence[str],
        *,
        api_name: str | None = None,
        base_path: str | None = None,
    ) -> tuple[ApiResource, ApiResource]:
        """Create a route.  Returns ``(requested, stored)``."""
        api = build_api(args, self._config, api_name=api_name, base_path=base_path)
        stored = self._call(
            "create api",
            lambda: self._client.insert(api, overwrite=False),
        )
        return api, stored

    def update(
        self,
        args: Sequence[str],
        *,
        api_name: str | None = None,
        base_path: str | None = None,
    ) -> tuple[ApiResource, ApiResource]:
        """Replace an existing route.  Returns ``(requested, stored)``."""
        api = build_api(args, self._config, api_name=api_name, base_path=base_path)
        stored = self._call(
            "update api",
            lambda: self._client.insert(api, overwrite=True),
        )
        return api, stored

    def get(self, args: Sequence[str]) -> tuple[ApiResource, ApiResource]:
        """Fetch a route.  Returns ``(requested, stored)``."""
        api = build_api(args, self._config)
        stored = self._call("get api", lambda: self._client.get(api))
        return api, stored

    def delete(self, args: Sequence[str]) -> ApiResource:
        """Delete a route.  Returns the resource that was addressed."""
        api = build_api(args, self._config)
        self._call("delete api", lambda: self._client.delete(api))
        return api

    def list(self, options: ApiListOptions) -> list[ApiResource]:
        """List routes.  An empty verb filter is not validated."""
        if options.verb:
            validate_verb(options.verb)
        return self._call(
            "obtain the list of apis",
            lambda: self._client.list(options),
        )

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _call(operation: str, func: Callable[[], _T]) -> _T:
        """Run *func*; wrap any failure as :class:`RemoteError`.

        A ``GatewayError`` is wrapped too, so every message names the
        operation; its hint and HTTP status carry over.
        """
        try:
            return func()
        except Exception as exc:
            logger.debug("client %s failed: %r", operation, exc)
            raise RemoteError(
                f"Unable to {operation}: {exc}",
                status_code=getattr(exc, "status_code", None),
                hint=getattr(exc, "hint", None),
            ) from exc
