"""yt-dlp backed implementation of :class:`~ytd_pick.core.protocols.MetadataProvider`.

All yt-dlp exceptions are caught here and re-raised as typed
:class:`~ytd_pick.exceptions.YtdPickError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any

from ytd_pick.exceptions import MetadataExtractionError, VideoUnavailableError
from ytd_pick.infra.ytdlp_support import base_options, import_yt_dlp

logger = logging.getLogger(__name__)


class YtDlpMetadataProvider:
    """Concrete :class:`MetadataProvider` backed by ``YoutubeDL.extract_info``.

    Usage::

        provider = YtDlpMetadataProvider()
        info = provider.fetch_info("https://www.youtube.com/watch?v=...")
    """

    # Substrings in yt-dlp error messages that mean the identifier does
    # not resolve, as opposed to a transient extraction failure.
    _UNAVAILABLE_SIGNALS: tuple[str, ...] = (
        "unavailable",
        "private video",
        "removed",
        "not available",
        "account terminated",
        "incomplete youtube id",
        "sign in to confirm your age",
    )

    def fetch_info(self, url: str) -> dict[str, Any]:
        """Extract metadata for *url* without downloading.

        Raises
        ------
        VideoUnavailableError
            When yt-dlp reports the video as unavailable / private / removed.
        MetadataExtractionError
            For all other extraction failures.
        """
        yt_dlp = import_yt_dlp()
        logger.debug("Extracting metadata for %s", url)

        try:
            with yt_dlp.YoutubeDL(base_options()) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected yt-dlp error: {exc}",
            ) from exc

        if not isinstance(info, dict):
            raise MetadataExtractionError(
                "yt-dlp returned no metadata for the given URL.",
                hint="The URL may not point to a single video.",
            )

        logger.debug(
            "Got %d raw formats for %r",
            len(info.get("formats") or []),
            info.get("title"),
        )
        return dict(info)

    @classmethod
    def _raise_mapped(cls, exc: Exception) -> None:
        """Translate a yt-dlp ``DownloadError`` into a domain exception."""
        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._UNAVAILABLE_SIGNALS):
            raise VideoUnavailableError(
                str(exc),
                hint="The video may be private, removed, or geo-restricted.",
            ) from exc
        raise MetadataExtractionError(str(exc)) from exc
