"""CLI application entry point and command routing for wsk-api.

This module is the **sole error boundary** for the entire application.
It catches :class:`~wsk_api.exceptions.WskApiError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Flag values are handed to the core as explicit parameters; no parsed
  namespace object travels past the handlers in this module.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from typing import NoReturn

from wsk_api.cli import exit_codes
from wsk_api.cli.console import err_console, escape_markup
from wsk_api.cli.render import (
    render_deleted,
    render_got,
    render_inserted,
    render_list,
)
from wsk_api.core.api_service import ApiService
from wsk_api.core.models import ApiListOptions, ClientConfig
from wsk_api.exceptions import ErrorKind, UsageError, WskApiError
from wsk_api.infra.config import load_config, require_gateway_settings
from wsk_api.infra.gateway_client import GatewayClient
from wsk_api.utils.log import configure_logging
from wsk_api.version import __version__

logger = logging.getLogger(__name__)

PROG = "wsk-api"

_ARGS_PATH_VERB_ACTION = "An API path, an API verb, and an action name are required."
_ARGS_PATH_VERB = "An API path and an API verb are required."

# command -> (positional count, message on mismatch); list takes none
_ARITY: dict[str, tuple[int, str]] = {
    "create": (3, _ARGS_PATH_VERB_ACTION),
    "update": (3, _ARGS_PATH_VERB_ACTION),
    "get": (2, _ARGS_PATH_VERB),
    "delete": (3, _ARGS_PATH_VERB_ACTION),
}

Handler = Callable[[argparse.Namespace, ApiService], int]


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input as :class:`UsageError`.

    The error then reaches the :func:`cli` boundary like every other
    usage failure instead of exiting from inside argparse.
    """

    def error(self, message: str) -> NoReturn:
        exc = UsageError(message)
        exc.usage = self.format_usage()
        raise exc


def _add_global_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--apihost", metavar="HOST", help="whisk API host")
    parser.add_argument("--namespace", metavar="NAMESPACE", help="namespace to act in")
    parser.add_argument("-u", "--auth", metavar="KEY", help="authorization key")
    parser.add_argument(
        "-i",
        "--insecure",
        action="store_true",
        help="bypass certificate checking",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="debug level output",
    )


def _add_route_command(
    commands: argparse._SubParsersAction,
    name: str,
    positionals: str,
    help_text: str,
) -> argparse.ArgumentParser:
    parser = commands.add_parser(
        name,
        help=help_text,
        description=help_text,
        usage=f"{PROG} api {name} {positionals} [options]",
    )
    # Arity is checked in main() so a wrong count is reported like
    # every other usage error.
    parser.add_argument("args", nargs="*", help=positionals)
    return parser


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``wsk-api api create|update|get|delete|list``
    * ``wsk-api property get``
    * ``wsk-api --version``
    """
    parser = _ArgumentParser(
        prog=PROG,
        description="Manage API gateway routes bound to actions.",
    )
    _add_global_flags(parser)
    groups = parser.add_subparsers(
        dest="group", metavar="{api,property}", parser_class=_ArgumentParser,
    )

    api_parser = groups.add_parser("api", help="work with APIs")
    api_parser.set_defaults(group_parser=api_parser)
    api_commands = api_parser.add_subparsers(dest="command", parser_class=_ArgumentParser)

    create = _add_route_command(
        api_commands, "create", "API_PATH API_VERB ACTION", "create a new API",
    )
    create.add_argument(
        "-n", "--apiname", metavar="NAME", help="API collection NAME (default /)",
    )
    create.add_argument(
        "-b",
        "--basepath",
        metavar="BASE_PATH",
        help="the API BASE_PATH to which the API_PATH is relative",
    )
    create.set_defaults(handler=_handle_create, command_parser=create)

    update = _add_route_command(
        api_commands, "update", "API_PATH API_VERB ACTION", "update an existing API",
    )
    update.add_argument("-n", "--apiname", metavar="NAME", help="API collection NAME")
    update.add_argument("-b", "--basepath", metavar="BASE_PATH", help="API BASE_PATH")
    update.set_defaults(handler=_handle_update, command_parser=update)

    get = _add_route_command(api_commands, "get", "API_PATH API_VERB", "get API")
    get.add_argument(
        "-s", "--summary", action="store_true", help="summarize API details",
    )
    get.set_defaults(handler=_handle_get, command_parser=get)

    delete = _add_route_command(
        api_commands, "delete", "API_PATH API_VERB ACTION", "delete an API",
    )
    delete.set_defaults(handler=_handle_delete, command_parser=delete)

    list_parser = api_commands.add_parser("list", help="list APIs", description="list APIs")
    list_parser.add_argument(
        "-a", "--action", default="", metavar="ACTION",
        help="ACTION to invoke when API is called",
    )
    list_parser.add_argument(
        "-p", "--path", default="", metavar="API_PATH", help="relative API_PATH of API",
    )
    list_parser.add_argument(
        "-m", "--method", default="", metavar="API_VERB", help="API API_VERB",
    )
    list_parser.add_argument(
        "-s", "--skip", type=int, default=0, metavar="SKIP",
        help="exclude the first SKIP number of APIs from the result",
    )
    list_parser.add_argument(
        "-l", "--limit", type=int, default=30, metavar="LIMIT",
        help="only return LIMIT number of APIs from the collection",
    )
    list_parser.set_defaults(handler=_handle_list, command_parser=list_parser)

    property_parser = groups.add_parser("property", help="work with client properties")
    property_parser.set_defaults(group_parser=property_parser)
    property_commands = property_parser.add_subparsers(
        dest="command", parser_class=_ArgumentParser,
    )
    property_get = property_commands.add_parser(
        "get", help="show the effective client properties",
    )
    property_get.set_defaults(command_parser=property_get)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _merge_positionals(
    parser: argparse.ArgumentParser,
    ns: argparse.Namespace,
    extras: list[str],
) -> None:
    """Fold positionals that followed an option back into ``ns.args``.

    ``nargs="*"`` stops at the first option, so in
    ``api create /hello -b /v1 get act`` the trailing ``get act`` come
    back as leftovers.  Leftover options are still errors.
    """
    if not extras:
        return
    owner = getattr(ns, "command_parser", parser)
    if not hasattr(ns, "args") or any(arg.startswith("-") for arg in extras):
        owner.error(f"unrecognized arguments: {' '.join(extras)}")
    ns.args = [*ns.args, *extras]


def _check_args(command: str, args: Sequence[str]) -> None:
    if command not in _ARITY:
        return
    count, message = _ARITY[command]
    if len(args) != count:
        raise UsageError(f"Invalid argument(s) for 'api {command}'. {message}")


def _handle_create(ns: argparse.Namespace, service: ApiService) -> int:
    api, stored = service.create(ns.args, api_name=ns.apiname, base_path=ns.basepath)
    render_inserted(api, stored, updated=False)
    return exit_codes.SUCCESS


def _handle_update(ns: argparse.Namespace, service: ApiService) -> int:
    api, stored = service.update(ns.args, api_name=ns.apiname, base_path=ns.basepath)
    render_inserted(api, stored, updated=True)
    return exit_codes.SUCCESS


def _handle_get(ns: argparse.Namespace, service: ApiService) -> int:
    _, stored = service.get(ns.args)
    render_got(stored, summary=ns.summary)
    return exit_codes.SUCCESS


def _handle_delete(ns: argparse.Namespace, service: ApiService) -> int:
    api = service.delete(ns.args)
    render_deleted(api)
    return exit_codes.SUCCESS


def _handle_list(ns: argparse.Namespace, service: ApiService) -> int:
    options = ApiListOptions(
        action=ns.action,
        rel_path=ns.path,
        verb=ns.method,
        skip=ns.skip,
        limit=ns.limit,
    )
    render_list(service.list(options))
    return exit_codes.SUCCESS


def _run_api_command(handler: Handler, ns: argparse.Namespace, config: ClientConfig) -> int:
    """Run *handler* against a live gateway client."""
    require_gateway_settings(config)
    with GatewayClient(config) as client:
        return handler(ns, ApiService(client, config))


def _config_from(ns: argparse.Namespace) -> ClientConfig:
    return load_config(
        {
            "host": ns.apihost,
            "namespace": ns.namespace,
            "auth_token": ns.auth,
            "insecure": ns.insecure,
        },
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the wsk-api CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    WskApiError
        Any known failure; usage errors carry the failing command's usage.
    """
    parser = _build_parser()
    ns, extras = parser.parse_known_args(argv)
    _merge_positionals(parser, ns, extras)
    configure_logging(debug=ns.debug)

    if ns.group is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if ns.command is None:
        ns.group_parser.print_help()
        return exit_codes.SUCCESS

    config = _config_from(ns)

    if ns.group == "property":
        from wsk_api.cli.property import run_property_get

        return run_property_get(config)

    try:
        _check_args(ns.command, getattr(ns, "args", ()))
        return _run_api_command(ns.handler, ns, config)
    except WskApiError as exc:
        if exc.show_usage and exc.usage is None:
            exc.usage = ns.command_parser.format_usage()
        raise


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def exit_code_for(exc: WskApiError) -> int:
    """Map an error's classification onto a process exit code."""
    if exc.kind is ErrorKind.NETWORK:
        return exit_codes.NETWORK_ERROR
    return exit_codes.GENERAL_ERROR


def report_error(exc: WskApiError) -> None:
    """Print message, hint and (for usage errors) the command usage."""
    err_console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
    if exc.hint:
        err_console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
    if exc.show_usage and exc.usage:
        err_console.print_plain(exc.usage.rstrip())
        err_console.print_plain(f"Run '{PROG} api --help' for more information.")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except WskApiError as exc:
        logger.debug("command failed", exc_info=exc)
        report_error(exc)
        sys.exit(exit_code_for(exc))
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
