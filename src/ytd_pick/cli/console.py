"""CLI console and logging helpers with optional Rich support.

Optional UI dependencies are imported lazily so bootstrap paths
(``--help``, ``--version``) keep working when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from ytd_pick.exceptions import EnvironmentError

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(verbose: bool = False) -> logging.Logger:
	"""Route ``ytd_pick`` log records to stderr.

	Uses ``rich.logging.RichHandler`` when Rich is installed and a plain
	stream handler otherwise.  WARNING by default, DEBUG when *verbose*.
	"""
	handler: logging.Handler
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter(_LOG_FORMAT))
	else:
		handler = RichHandler(console=get_rich_console(), show_path=False)

	package_logger = logging.getLogger("ytd_pick")
	package_logger.handlers[:] = [handler]
	package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
	return package_logger
