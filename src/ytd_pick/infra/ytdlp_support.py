"""Shared yt-dlp plumbing for the infrastructure adapters.

yt-dlp is imported lazily so that ``--help`` and ``--version`` keep
working when it is not installed.
"""

from __future__ import annotations

from typing import Any

from ytd_pick.exceptions import EnvironmentError


def import_yt_dlp() -> Any:
    """Return the ``yt_dlp`` module or raise :class:`EnvironmentError`."""
    try:
        import yt_dlp
        import yt_dlp.utils  # noqa: F401
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "yt-dlp is not installed. Install with: pip install yt-dlp",
        ) from exc
    return yt_dlp


def base_options(**overrides: Any) -> dict[str, Any]:
    """Return quiet ``YoutubeDL`` options that never write to disk."""
    opts: dict[str, Any] = {
        "quiet": True,
        "no_warnings": True,
        "no_color": True,
        "skip_download": True,
    }
    opts.update(overrides)
    return opts
