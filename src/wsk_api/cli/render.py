"""Rendering of ``api`` command results.

Human-readable lines go through the console proxy (Rich markup when
available); JSON is written verbatim so it stays machine-readable.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from wsk_api.cli.console import console, escape_markup as _esc, rich_available
from wsk_api.core.models import ApiResource
from wsk_api.utils.log import mask_secret

OK = "[bold green]ok:[/bold green]"


def display_dict(api: ApiResource) -> dict[str, Any]:
    """Wire document with the action's auth key masked."""
    doc = api.to_dict()
    action = doc.get("action")
    if isinstance(action, dict) and "authkey" in action:
        action["authkey"] = mask_secret(action["authkey"])
    return doc


# ---------------------------------------------------------------------------
# Per-command output
# ---------------------------------------------------------------------------

def render_inserted(api: ApiResource, stored: ApiResource, *, updated: bool) -> None:
    """``ok: created api /path GET for action name`` plus the full URL."""
    what = "updated" if updated else "created"
    console.print(
        f"{OK} {what} api {_esc(api.gateway_rel_path)} {api.gateway_method} "
        f"for action [bold]{_esc(api.action.name)}[/bold]",
    )
    if stored.gateway_full_path:
        console.print_plain(stored.gateway_full_path)


def render_got(stored: ApiResource, *, summary: bool) -> None:
    if summary:
        render_summary(stored)
        return
    console.print(
        f"{OK} api for path {_esc(stored.gateway_rel_path)} "
        f"verb {stored.gateway_method}",
    )
    console.print_plain(json.dumps(display_dict(stored), indent=4))


def render_summary(api: ApiResource) -> None:
    console.print(
        f"[bold]api {_esc(api.gateway_rel_path)} {api.gateway_method}[/bold]",
    )
    rows = (
        ("name", api.api_name),
        ("basepath", api.gateway_base_path),
        ("action", _qualified(api)),
        ("url", api.gateway_full_path or ""),
    )
    for label, value in rows:
        console.print(f"   [dim]{label}:[/dim] {_esc(value)}")


def render_deleted(api: ApiResource) -> None:
    console.print(
        f"{OK} deleted api {_esc(api.gateway_rel_path)} {api.gateway_method}",
    )


def render_list(apis: Sequence[ApiResource]) -> None:
    """Table of action, verb, api name and URL; one row per route."""
    if not rich_available():
        _print_plain_list(apis)
        return

    from rich.table import Table

    table = Table(
        title="apis",
        title_justify="left",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Action", style="bold")
    table.add_column("Verb")
    table.add_column("API Name")
    table.add_column("URL")
    for api in apis:
        table.add_row(
            _esc(_qualified(api)),
            api.gateway_method,
            _esc(api.api_name),
            _esc(api.gateway_full_path or ""),
        )
    console.print(table)


def _print_plain_list(apis: Sequence[ApiResource]) -> None:
    console.print_plain("apis")
    for api in apis:
        console.print_plain(
            f"{_qualified(api):<40} {api.gateway_method:<7} "
            f"{api.api_name:<20} {api.gateway_full_path or ''}",
        )


def _qualified(api: ApiResource) -> str:
    if not api.action.name:
        return ""
    if not api.action.namespace:
        return api.action.name
    return f"/{api.action.namespace}/{api.action.name}"
