"""``wsk-api property get`` — show the effective client configuration.

Collects the resolved settings and renders a Rich table (plain text
when Rich is missing).  The auth key is always masked.
"""

from __future__ import annotations

import platform
import sys

from wsk_api.cli import exit_codes
from wsk_api.cli.console import err_console, rich_available
from wsk_api.core.models import ClientConfig
from wsk_api.infra.config import config_file_path
from wsk_api.utils.log import mask_secret
from wsk_api.version import __version__


def _rows(config: ClientConfig) -> list[tuple[str, str]]:
    """Return (label, value) pairs in display order."""
    path = config_file_path()
    path_value = str(path) if path.is_file() else f"{path} (not found)"
    return [
        ("wsk-api version", __version__),
        ("API host", config.host or "<unset>"),
        ("Namespace", config.namespace),
        ("Auth", mask_secret(config.auth_token)),
        ("Insecure", "yes" if config.insecure else "no"),
        ("Config file", path_value),
        ("Python", platform.python_version()),
    ]


def _print_plain_table(rows: list[tuple[str, str]]) -> None:
    print("\nwsk-api properties", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    for label, value in rows:
        print(f"{label:<18} {value}", file=sys.stderr)
    print(file=sys.stderr)


def run_property_get(config: ClientConfig) -> int:
    """Render the settings table.  Always returns :data:`exit_codes.SUCCESS`."""
    rows = _rows(config)

    if not rich_available():
        _print_plain_table(rows)
        return exit_codes.SUCCESS

    from rich.markup import escape
    from rich.table import Table

    table = Table(
        title="wsk-api properties",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Property", style="bold", min_width=16)
    table.add_column("Value", min_width=20)
    for label, value in rows:
        table.add_row(label, escape(value))

    err_console.print()
    err_console.print(table)
    err_console.print()
    return exit_codes.SUCCESS
