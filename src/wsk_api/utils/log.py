"""Logging setup and secret masking shared by every layer."""

from __future__ import annotations

import logging

PACKAGE_LOGGER: str = "wsk_api"

_FORMAT = "%(name)s %(message)s"


def _make_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)-15s %(levelname)s " + _FORMAT),
        )
        return handler
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def configure_logging(*, debug: bool = False) -> None:
    """Route the package's log records to stderr, via Rich when installed.

    The default level is WARNING; *debug* lowers it to DEBUG.  Calling
    again replaces the previously installed handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(_make_handler())
    logger.propagate = False

    # tell noisy loggers to be quiet
    logging.getLogger("urllib3.connectionpool").propagate = False


def mask_secret(value: str | None) -> str:
    """Show only the first four characters of *value*."""
    if not value:
        return "<unset>"
    return value[:4] + "*" * max(len(value) - 4, 4)
