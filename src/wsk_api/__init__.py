"""wsk-api — manage API gateway routes bound to serverless actions.

Translates ``wsk-api api ...`` commands into calls against the
route-management service and renders the responses.
"""

from wsk_api.version import __version__

__all__: list[str] = ["__version__"]
