"""requests-backed implementation of :class:`~wsk_api.core.protocols.ApiClient`.

This module is the **only** place in the codebase that imports
``requests``.  All transport and HTTP errors are caught here and
re-raised as :class:`~wsk_api.exceptions.GatewayError` — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from wsk_api.core.models import ApiListOptions, ApiResource, ClientConfig
from wsk_api.exceptions import GatewayError

logger = logging.getLogger(__name__)

ROUTE: str = "api/v1/experimental/routemgmt"

_DEFAULT_TIMEOUT_S: tuple[float, float] = (10.0, 60.0)
"""(connect, read) timeouts in seconds."""


class GatewayClient:
    """Concrete :class:`ApiClient` talking to the route-management service.

    Usage::

        with GatewayClient(config) as client:
            stored = client.insert(api, overwrite=False)

    This class satisfies the :class:`~wsk_api.core.protocols.ApiClient`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: requests.Session | None = None,
        timeout: tuple[float, float] = _DEFAULT_TIMEOUT_S,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self.session = session or self.create_session()

    def create_session(self) -> requests.Session:
        """Create a session that does not retry and carries the credentials."""
        session = requests.Session()
        session.mount(prefix=self.base_url, adapter=HTTPAdapter(max_retries=0))
        session.headers["Accept"] = "application/json"
        session.verify = not self.config.insecure
        if self.config.auth_token:
            user, _, key = self.config.auth_token.partition(":")
            session.auth = (user, key)
        return session

    @property
    def base_url(self) -> str:
        host = self.config.host.rstrip("/")
        if not host.startswith(("http://", "https://")):
            host = f"https://{host}"
        return host

    @property
    def url(self) -> str:
        return f"{self.base_url}/{ROUTE}"

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> GatewayClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def insert(self, api: ApiResource, *, overwrite: bool) -> ApiResource:
        params = {"overwrite": "true"} if overwrite else None
        doc = self._request("POST", params=params, json={"apidoc": api.to_dict()})
        return ApiResource.from_dict(self._unwrap(doc))

    def get(self, api: ApiResource) -> ApiResource:
        doc = self._request("GET", params=self._route_params(api))
        docs = self._unwrap_many(doc)
        if not docs:
            raise GatewayError(
                f"API {api.gateway_rel_path} {api.gateway_method} not found.",
                status_code=404,
            )
        return ApiResource.from_dict(docs[0])

    def delete(self, api: ApiResource) -> None:
        self._request("DELETE", params=self._route_params(api))

    def list(self, options: ApiListOptions) -> list[ApiResource]:
        doc = self._request("GET", params=options.to_params())
        return [ApiResource.from_dict(item) for item in self._unwrap_many(doc)]

    # ------------------------------------------------------------------
    # Request / response plumbing
    # ------------------------------------------------------------------

    @staticmethod
    def _route_params(api: ApiResource) -> dict[str, str]:
        params = {
            "basepath": api.gateway_base_path,
            "relpath": api.gateway_rel_path,
            "operation": api.gateway_method,
        }
        if api.action.name:
            params["action"] = api.action.name
        return params

    def _request(
        self,
        method: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s params=%r", method, self.url, params)
        try:
            response = self.session.request(
                method,
                self.url,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise GatewayError(
                f"Request to {self.base_url} failed: {exc}",
                hint="Check --apihost and your network connection.",
            ) from exc

        logger.debug("%s %s -> %s", method, self.url, response.status_code)
        if not response.ok:
            raise GatewayError(
                self._error_message(response),
                status_code=response.status_code,
                hint=self._error_hint(response.status_code),
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError(
                "The gateway returned a response that is not JSON.",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        detail = ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = str(body.get("error") or body.get("message") or "")
        if not detail:
            detail = response.reason or "request failed"
        return f"{detail} (HTTP {response.status_code})"

    @staticmethod
    def _error_hint(status_code: int) -> str | None:
        if status_code in (401, 403):
            return "Check the authorization key (--auth or AUTH in ~/.wskprops)."
        if status_code == 404:
            return "Check the API path, verb and base path."
        return None

    @staticmethod
    def _unwrap(doc: Any) -> dict[str, Any]:
        """Strip the ``value`` / ``apidoc`` envelopes the service may add."""
        if isinstance(doc, dict) and isinstance(doc.get("value"), dict):
            doc = doc["value"]
        if isinstance(doc, dict) and isinstance(doc.get("apidoc"), dict):
            doc = doc["apidoc"]
        if not isinstance(doc, dict):
            raise GatewayError("The gateway returned an unexpected data structure.")
        return doc

    @classmethod
    def _unwrap_many(cls, doc: Any) -> list[dict[str, Any]]:
        if isinstance(doc, dict) and "apis" in doc:
            doc = doc["apis"]
        if isinstance(doc, dict):
            return [cls._unwrap(doc)] if doc else []
        if not isinstance(doc, list):
            raise GatewayError("The gateway returned an unexpected data structure.")
        return [cls._unwrap(item) for item in doc]
