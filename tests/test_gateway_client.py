"""Tests for the requests-backed gateway client (infra/gateway_client.py).

The ``requests.Session`` is replaced with a mock — no network.  These
tests verify:

* URL, query parameters and body for each protocol method
* Session credentials and TLS settings
* Response envelope unwrapping
* Exception mapping (transport / HTTP / bad JSON → ``GatewayError``)
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from wsk_api.core.api_builder import build_api
from wsk_api.core.models import ApiListOptions, ClientConfig
from wsk_api.exceptions import GatewayError
from wsk_api.infra.gateway_client import GatewayClient

ROUTE_URL = "https://example.com/api/v1/experimental/routemgmt"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _response(status: int = 200, body: Any = None, *, raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "Reason"
    if raw is not None:
        response._content = raw
    else:
        response._content = b"" if body is None else json.dumps(body).encode()
    return response


def _client(config: ClientConfig, response: requests.Response | Exception) -> tuple[GatewayClient, MagicMock]:
    session = MagicMock()
    if isinstance(response, Exception):
        session.request.side_effect = response
    else:
        session.request.return_value = response
    return GatewayClient(config, session=session), session


def _api_doc(**overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "namespace": "ns",
        "gatewayBasePath": "/",
        "gatewayPath": "/hello",
        "gatewayMethod": "GET",
        "gatewayFullPath": "https://gw.example.com/api/1234/hello",
        "action": {"name": "act", "namespace": "ns"},
    }
    doc.update(overrides)
    return doc


# ---------------------------------------------------------------------------
# Session setup
# ---------------------------------------------------------------------------

class TestSession:
    def test_base_url_adds_scheme(self, config: ClientConfig) -> None:
        client = GatewayClient(config)
        assert client.url == ROUTE_URL
        client.close()

    def test_base_url_keeps_explicit_scheme(self) -> None:
        client = GatewayClient(ClientConfig(host="http://localhost:9000/"))
        assert client.base_url == "http://localhost:9000"
        client.close()

    def test_basic_auth_from_token(self, config: ClientConfig) -> None:
        with GatewayClient(config) as client:
            assert client.session.auth == ("user-uuid", "secret-key")
            assert client.session.verify is True

    def test_insecure_disables_verification(self) -> None:
        with GatewayClient(ClientConfig(host="example.com", insecure=True)) as client:
            assert client.session.verify is False

    def test_context_manager_closes_session(self, config: ClientConfig) -> None:
        session = MagicMock()
        with GatewayClient(config, session=session):
            pass
        session.close.assert_called_once()


# ---------------------------------------------------------------------------
# Protocol methods
# ---------------------------------------------------------------------------

class TestInsert:
    def test_create_posts_apidoc(self, config: ClientConfig) -> None:
        client, session = _client(config, _response(200, {"apidoc": _api_doc()}))
        api = build_api(["/hello", "get", "act"], config)
        stored = client.insert(api, overwrite=False)

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert (method, url) == ("POST", ROUTE_URL)
        assert kwargs["json"] == {"apidoc": api.to_dict()}
        assert kwargs["params"] is None
        assert stored.gateway_full_path == "https://gw.example.com/api/1234/hello"

    def test_update_sets_overwrite(self, config: ClientConfig) -> None:
        client, session = _client(config, _response(200, _api_doc()))
        client.insert(build_api(["/hello", "get", "act"], config), overwrite=True)
        assert session.request.call_args.kwargs["params"] == {"overwrite": "true"}

    def test_value_envelope_unwrapped(self, config: ClientConfig) -> None:
        body = {"value": {"apidoc": _api_doc(gatewayPath="/wrapped")}}
        client, _ = _client(config, _response(200, body))
        stored = client.insert(build_api(["/hello", "get", "act"], config), overwrite=False)
        assert stored.gateway_rel_path == "/wrapped"


class TestGetAndDelete:
    def test_get_sends_route_params(self, config: ClientConfig) -> None:
        client, session = _client(config, _response(200, {"apis": [_api_doc()]}))
        stored = client.get(build_api(["/hello", "get"], config))
        assert session.request.call_args.args == ("GET", ROUTE_URL)
        assert session.request.call_args.kwargs["params"] == {
            "basepath": "/",
            "relpath": "/hello",
            "operation": "GET",
        }
        assert stored.action.name == "act"

    def test_get_accepts_single_document(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(200, _api_doc()))
        assert client.get(build_api(["/hello", "get"], config)).gateway_rel_path == "/hello"

    def test_get_not_found_when_empty(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(200, {"apis": []}))
        with pytest.raises(GatewayError, match="not found") as exc_info:
            client.get(build_api(["/hello", "get"], config))
        assert exc_info.value.status_code == 404

    def test_delete_includes_action(self, config: ClientConfig) -> None:
        client, session = _client(config, _response(204))
        client.delete(build_api(["/hello", "delete", "act"], config))
        assert session.request.call_args.args == ("DELETE", ROUTE_URL)
        assert session.request.call_args.kwargs["params"]["action"] == "act"


class TestList:
    def test_list_params_and_parsing(self, config: ClientConfig) -> None:
        body = {"apis": [{"value": {"apidoc": _api_doc()}}, _api_doc(gatewayPath="/b")]}
        client, session = _client(config, _response(200, body))
        apis = client.list(ApiListOptions(verb="get", limit=2))
        assert session.request.call_args.kwargs["params"] == {
            "operation": "GET",
            "limit": 2,
            "skip": 0,
        }
        assert [api.gateway_rel_path for api in apis] == ["/hello", "/b"]

    def test_list_empty_body(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(200))
        assert client.list(ApiListOptions()) == []


# ---------------------------------------------------------------------------
# Exception mapping
# ---------------------------------------------------------------------------

class TestErrors:
    def test_transport_error(self, config: ClientConfig) -> None:
        client, _ = _client(config, requests.exceptions.ConnectionError("refused"))
        with pytest.raises(GatewayError, match="refused") as exc_info:
            client.list(ApiListOptions())
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)
        assert exc_info.value.status_code is None

    def test_http_error_uses_body_message(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(401, {"error": "The supplied authentication is invalid"}))
        with pytest.raises(GatewayError) as exc_info:
            client.list(ApiListOptions())
        assert str(exc_info.value) == "The supplied authentication is invalid (HTTP 401)"
        assert exc_info.value.status_code == 401
        assert "--auth" in (exc_info.value.hint or "")

    def test_http_error_without_body(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(502, raw=b"<html>bad gateway</html>"))
        with pytest.raises(GatewayError, match=r"Reason \(HTTP 502\)"):
            client.list(ApiListOptions())

    def test_non_json_success(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(200, raw=b"not json"))
        with pytest.raises(GatewayError, match="not JSON"):
            client.list(ApiListOptions())

    def test_unexpected_structure(self, config: ClientConfig) -> None:
        client, _ = _client(config, _response(200, "a string"))
        with pytest.raises(GatewayError, match="unexpected data structure"):
            client.list(ApiListOptions())
