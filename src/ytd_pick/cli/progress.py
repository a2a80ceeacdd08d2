"""Rich progress bar driven by byte-fetch progress callbacks.

:class:`RichProgressHook` is passed as ``progress_callback`` to
:class:`~ytd_pick.core.download_service.DownloadService`; the fetcher
calls it with ``(downloaded_bytes, total_bytes_or_None)`` after every
chunk.
"""

from __future__ import annotations

from typing import Any

from ytd_pick.cli.console import get_rich_console
from ytd_pick.exceptions import EnvironmentError

_MAX_DESCRIPTION = 50


class RichProgressHook:
    """Callable progress adapter for Rich.

    Usage::

        with RichProgressHook("My video.mp4") as hook:
            service.download_variant(variant, progress_callback=hook)
    """

    def __init__(self, description: str = "Downloading") -> None:
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeRemainingColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._description: str = shorten_description(description)
        self._task_id: Any = None
        self._started: bool = False

    def __enter__(self) -> RichProgressHook:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the display; safe to call more than once."""
        if self._started:
            self._progress.stop()
            self._started = False

    def __call__(self, downloaded: int, total: int | None) -> None:
        if not self._started:
            return
        if self._task_id is None:
            self._task_id = self._progress.add_task(self._description, total=total)
        if total is not None:
            self._progress.update(self._task_id, total=total, completed=downloaded)
        else:
            self._progress.update(self._task_id, completed=downloaded)

    @property
    def completed(self) -> int:
        """Bytes reported so far (0 before the first chunk)."""
        if self._task_id is None:
            return 0
        return int(self._progress.tasks[0].completed)


def shorten_description(text: str) -> str:
    """Trim *text* to fit the progress column."""
    text = text or "Downloading"
    if len(text) > _MAX_DESCRIPTION:
        return text[: _MAX_DESCRIPTION - 3] + "..."
    return text
