"""Custom exception hierarchy for wsk-api.

All exceptions that cross layer boundaries must inherit from
:class:`WskApiError`.  Raw third-party exceptions (e.g. from requests)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Every error carries the three things the CLI error boundary needs:
a user-facing message, an :class:`ErrorKind` classification that maps
onto a process exit code, and a flag saying whether command usage
should be shown alongside the message.  The underlying cause, when
there is one, travels as ``__cause__`` (``raise ... from exc``).

Hierarchy
---------
WskApiError
├── UsageError
├── RemoteError
│   └── GatewayError
├── QualifiedNameError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Exit-code classification of an error."""

    GENERAL = "general"
    NETWORK = "network"


class WskApiError(Exception):
    """Base exception for all wsk-api errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    kind: ErrorKind = ErrorKind.GENERAL
    show_usage: bool = False
    usage: str | None = None
    """Usage text of the failing command, attached by the CLI layer."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        show_usage: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""
        if show_usage is not None:
            self.show_usage = show_usage


# --- Invocation / validation -----------------------------------------------

class UsageError(WskApiError):
    """Raised for a malformed invocation.

    Wrong argument count, invalid verb, malformed or empty action name.
    Always displays command usage.
    """

    show_usage = True


class QualifiedNameError(WskApiError):
    """Raised when a qualified entity name cannot be parsed."""


# --- Remote calls ----------------------------------------------------------

class RemoteError(WskApiError):
    """Raised when a call to the route-management service fails.

    *status_code* is the HTTP status of the failed response, when there
    was one.
    """

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code


class GatewayError(RemoteError):
    """Raised by the HTTP client for transport or non-2xx responses."""


# --- Environment / configuration -------------------------------------------

class ConfigurationError(WskApiError):
    """Raised when a required client setting (host, auth) is missing."""


class EnvironmentError(WskApiError):
    """Raised when a required runtime dependency is not available."""
