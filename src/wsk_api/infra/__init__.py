"""Infrastructure layer — external system integration.

This layer wraps all interaction with the route-management service and
the local properties file.  Every raw third-party exception must be
caught here and re-raised as a :class:`~wsk_api.exceptions.WskApiError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from wsk_api.infra.config import load_config, require_gateway_settings
from wsk_api.infra.gateway_client import GatewayClient

__all__: list[str] = [
    "GatewayClient",
    "load_config",
    "require_gateway_settings",
]
