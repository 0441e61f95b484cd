"""Parsing of namespace-qualified entity names.

Accepted shapes::

    action                  -> (default namespace, "action")
    package/action          -> (default namespace, "package/action")
    /namespace/action       -> ("namespace", "action")
    /namespace/pkg/action   -> ("namespace", "pkg/action")

A leading ``/`` marks the first segment as the namespace.  The parser
does not reject an empty entity name (``/ns``, ``/``); callers that need
one must check for themselves.
"""

from __future__ import annotations

from wsk_api.core.models import QualifiedName
from wsk_api.exceptions import QualifiedNameError

SEPARATOR: str = "/"

_MAX_QUALIFIED_PARTS: int = 3
"""namespace / package / action"""

_MAX_UNQUALIFIED_PARTS: int = 2
"""package / action"""


def parse_qualified_name(raw: str, default_namespace: str = "") -> QualifiedName:
    """Split *raw* into namespace and entity name.

    Parameters
    ----------
    raw:
        The user-typed name.
    default_namespace:
        Namespace to report when *raw* does not start with ``/``.

    Raises
    ------
    QualifiedNameError
        If *raw* is empty or has more segments than
        ``namespace/package/action``.
    """
    if not raw:
        raise QualifiedNameError("An entity name must be specified.")

    if raw.startswith(SEPARATOR):
        parts = raw[1:].split(SEPARATOR)
        if len(parts) > _MAX_QUALIFIED_PARTS:
            raise QualifiedNameError(
                f"A qualified name has at most {_MAX_QUALIFIED_PARTS} parts "
                "(/namespace/package/action).",
            )
        return QualifiedName(
            namespace=parts[0],
            entity_name=SEPARATOR.join(parts[1:]),
        )

    if len(raw.split(SEPARATOR)) > _MAX_UNQUALIFIED_PARTS:
        raise QualifiedNameError(
            "A name without a namespace has at most "
            f"{_MAX_UNQUALIFIED_PARTS} parts (package/action).",
            hint="Prefix the name with '/' to qualify it with a namespace.",
        )
    return QualifiedName(namespace=default_namespace, entity_name=raw)
