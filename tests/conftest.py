"""Shared pytest fixtures and configuration for the wsk-api test suite.

Guidelines
----------
* No network access in any test.
* requests is mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on the user's ~/.wskprops or WSK_* environment.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from wsk_api.core.models import ClientConfig


@pytest.fixture(autouse=True)
def _isolated_wsk_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the properties file at an empty temp location."""
    props = tmp_path / "wskprops"
    monkeypatch.setenv("WSK_CONFIG_FILE", str(props))
    for name in ("WSK_APIHOST", "WSK_NAMESPACE", "WSK_AUTH"):
        monkeypatch.delenv(name, raising=False)
    return props


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(
        host="example.com",
        namespace="ns",
        auth_token="user-uuid:secret-key",
    )
