"""Allow ``python -m wsk_api`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m wsk_api`` behaves identically to the ``wsk-api``
console script.
"""

from __future__ import annotations

from wsk_api.cli.app import cli

if __name__ == "__main__":
    cli()
