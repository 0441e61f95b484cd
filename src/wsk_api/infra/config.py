"""Client configuration loading.

Settings are merged from three sources, later ones winning:

1. the properties file (``$WSK_CONFIG_FILE`` or ``~/.wskprops``),
   ``KEY=VALUE`` lines with keys ``APIHOST``, ``NAMESPACE`` and ``AUTH``;
2. the environment (``WSK_APIHOST``, ``WSK_NAMESPACE``, ``WSK_AUTH``);
3. explicit overrides from the command line.

A missing properties file is not an error.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from wsk_api.core.models import DEFAULT_NAMESPACE, ClientConfig
from wsk_api.exceptions import ConfigurationError
from wsk_api.utils.log import mask_secret

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV: str = "WSK_CONFIG_FILE"
DEFAULT_CONFIG_FILE: str = ".wskprops"

# ClientConfig field -> (properties-file key, environment variable)
_SOURCES: dict[str, tuple[str, str]] = {
    "host": ("APIHOST", "WSK_APIHOST"),
    "namespace": ("NAMESPACE", "WSK_NAMESPACE"),
    "auth_token": ("AUTH", "WSK_AUTH"),
}


def config_file_path(environ: Mapping[str, str] | None = None) -> Path:
    """Location of the properties file."""
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_FILE_ENV)
    if explicit:
        return Path(explicit).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILE


def read_properties(path: Path) -> dict[str, str]:
    """Parse *path* as ``KEY=VALUE`` lines; ``{}`` when it does not exist."""
    if not path.is_file():
        logger.debug("No properties file at %s", path)
        return {}
    values = dotenv_values(path)
    return {key: value for key, value in values.items() if value is not None}


def load_config(
    overrides: Mapping[str, str | bool | None] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Resolve the effective :class:`ClientConfig`.

    Parameters
    ----------
    overrides:
        Command-line values keyed by ``ClientConfig`` field name.
        ``None`` and empty strings are ignored.
    environ:
        Environment mapping; defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    overrides = overrides or {}
    props = read_properties(config_file_path(env))

    resolved: dict[str, str] = {}
    for field, (prop_key, env_key) in _SOURCES.items():
        value = props.get(prop_key, "")
        value = env.get(env_key) or value
        override = overrides.get(field)
        if isinstance(override, str) and override:
            value = override
        resolved[field] = value

    config = ClientConfig(
        host=resolved["host"],
        namespace=resolved["namespace"] or DEFAULT_NAMESPACE,
        auth_token=resolved["auth_token"],
        insecure=bool(overrides.get("insecure")),
    )
    logger.debug(
        "Resolved config: host=%r namespace=%r auth=%s insecure=%s",
        config.host,
        config.namespace,
        mask_secret(config.auth_token),
        config.insecure,
    )
    return config


def require_gateway_settings(config: ClientConfig) -> None:
    """Raise :class:`ConfigurationError` unless host and auth are set."""
    if not config.host:
        raise ConfigurationError(
            "The API host is not configured.",
            hint="Pass --apihost HOST or set APIHOST in ~/.wskprops.",
        )
    if not config.auth_token:
        raise ConfigurationError(
            "The authorization key is not configured.",
            hint="Pass --auth KEY or set AUTH in ~/.wskprops.",
        )
