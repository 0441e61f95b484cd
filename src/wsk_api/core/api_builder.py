"""Request builder — turns command arguments into an :class:`ApiResource`.

Every ``api`` sub-command except ``list`` goes through
:func:`build_api` before any network call is made, so a malformed
invocation never reaches the gateway.

Guarantees
----------
* No I/O besides debug logging.
* Only :class:`~wsk_api.exceptions.UsageError` escapes.
* Flag values arrive as explicit parameters; nothing is read from
  module or process state other than the *config* snapshot passed in.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from wsk_api.core.models import (
    BACKEND_METHOD,
    DEFAULT_API_NAME,
    DEFAULT_BASE_PATH,
    ActionBinding,
    ApiResource,
    ApiVerb,
    ClientConfig,
    QualifiedName,
)
from wsk_api.core.qualified_name import parse_qualified_name
from wsk_api.exceptions import QualifiedNameError, UsageError
from wsk_api.utils.log import mask_secret

logger = logging.getLogger(__name__)

_EMPTY_NAME = QualifiedName(namespace="", entity_name="")


def validate_verb(verb: str) -> None:
    """Raise :class:`UsageError` unless *verb* is a known HTTP verb.

    The comparison is case-insensitive.
    """
    if verb.upper() in ApiVerb.__members__:
        return
    logger.debug("Invalid API verb: %s", verb)
    raise UsageError(
        f"'{verb}' is not a valid API verb.  "
        f"Valid values are: {', '.join(ApiVerb.names())}",
    )


def backend_url(host: str, namespace: str, action: str) -> str:
    """Blocking invocation URL of *action* in *namespace*."""
    return (
        f"https://{host}/api/v1/namespaces/{namespace}"
        f"/actions/{action}?blocking=true"
    )


def _resolve_action(raw: str, default_namespace: str) -> QualifiedName:
    try:
        qname = parse_qualified_name(raw, default_namespace)
    except QualifiedNameError as exc:
        logger.debug("parse_qualified_name(%r) failed: %s", raw, exc)
        raise UsageError(f"'{raw}' is not a valid action name: {exc}") from exc

    if not qname.entity_name:
        logger.debug("Action name %r is invalid", raw)
        raise UsageError(f"'{raw}' is not a valid action name.")
    return qname


def build_api(
    args: Sequence[str],
    config: ClientConfig,
    *,
    api_name: str | None = None,
    base_path: str | None = None,
) -> ApiResource:
    """Build and validate the resource addressed by *args*.

    Parameters
    ----------
    args:
        ``(path, verb)`` or ``(path, verb, action)``.  The caller has
        already checked the count.
    config:
        Client settings; supplies namespace, host and auth token.
    api_name, base_path:
        ``--apiname`` / ``--basepath`` overrides.  ``None`` or empty
        means ``"/"``.

    Raises
    ------
    UsageError
        On an invalid verb, or an action name that cannot be parsed or
        resolves to an empty entity.
    """
    rel_path, verb = args[0], args[1]
    validate_verb(verb)

    qname = _resolve_action(args[2], config.namespace) if len(args) > 2 else _EMPTY_NAME

    action = ActionBinding(
        name=qname.entity_name,
        namespace=qname.namespace,
        backend_url=backend_url(config.host_name, qname.namespace, qname.entity_name),
        backend_method=BACKEND_METHOD,
        auth_token=config.auth_token,
    )
    api = ApiResource(
        namespace=config.namespace,
        gateway_rel_path=rel_path,
        gateway_method=verb.upper(),
        action=action,
        api_name=api_name or DEFAULT_API_NAME,
        gateway_base_path=base_path or DEFAULT_BASE_PATH,
    )

    logger.debug(
        "Parsed api: id=%s path=%s verb=%s action=%s/%s auth=%s",
        api.id,
        api.gateway_rel_path,
        api.gateway_method,
        action.namespace,
        action.name,
        mask_secret(action.auth_token),
    )
    return api
