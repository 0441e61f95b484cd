"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Command results go to stdout (:data:`console`); errors and diagnostics
go to stderr (:data:`err_console`).
"""

from __future__ import annotations

import re
import sys
from typing import Any

from wsk_api.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = False) -> Any:
	"""Create a Rich console instance targeting stdout or stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, highlight=False)


def rich_available() -> bool:
	"""Whether Rich can be imported."""
	try:
		_load_rich_console_class()
	except EnvironmentError:
		return False
	return True


def escape_markup(value: str | None) -> str:
	"""Escape user-supplied text so Rich does not read it as markup."""
	if not value:
		return ""
	if not rich_available():
		return value
	from rich.markup import escape

	return escape(value)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool = False) -> None:
		self._stderr = stderr

	def _stream(self) -> Any:
		return sys.stderr if self._stderr else sys.stdout

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*(_strip_markup(obj) for obj in objects), file=self._stream())
			return
		rich_console.print(*objects)

	def print_plain(self, text: str) -> None:
		"""Write *text* verbatim, with no markup or highlighting."""
		print(text, file=self._stream())


def _strip_markup(obj: object) -> object:
	"""Drop the Rich ``[style]`` tags used in this package's messages."""
	if not isinstance(obj, str):
		return obj
	return re.sub(r"\[/?(?:bold|dim|red|green|yellow|cyan)(?: [a-z]+)?\]", "", obj)


console = _ConsoleProxy()
err_console = _ConsoleProxy(stderr=True)
