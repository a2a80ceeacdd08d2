"""yt-dlp backed implementation of :class:`~ytd_pick.core.protocols.ByteFetcher`.

Requests go through ``YoutubeDL.urlopen`` so they carry the same
headers, cookies and proxy settings yt-dlp used to resolve the variant.
"""

from __future__ import annotations

import logging
from typing import Any

from ytd_pick.core.protocols import ProgressCallback
from ytd_pick.exceptions import TransportError
from ytd_pick.infra.ytdlp_support import base_options, import_yt_dlp
from ytd_pick.utils.constants import FETCH_CHUNK_SIZE

logger = logging.getLogger(__name__)


class YtDlpByteFetcher:
    """Fetch a whole response body, reporting progress chunk by chunk."""

    def __init__(self, chunk_size: int = FETCH_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._chunk_size: int = chunk_size

    def fetch_bytes(
        self,
        url: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Return the full payload at *url*.

        Raises
        ------
        TransportError
            For any network or HTTP error reported by yt-dlp.
        """
        yt_dlp = import_yt_dlp()
        logger.debug("Fetching %s", url)

        try:
            with yt_dlp.YoutubeDL(base_options()) as ydl:
                response = ydl.urlopen(url)
                try:
                    data = self._read_all(response, progress_callback)
                finally:
                    response.close()
        except yt_dlp.utils.YoutubeDLError as exc:
            raise TransportError(
                str(exc),
                hint="Check your network connection; variant URLs also expire "
                "after a few hours.",
            ) from exc
        except OSError as exc:
            raise TransportError(f"Network error: {exc}") from exc
        except Exception as exc:
            raise TransportError(f"Unexpected yt-dlp fetch error: {exc}") from exc

        logger.debug("Fetched %d bytes from %s", len(data), url)
        return data

    def _read_all(
        self,
        response: Any,
        progress_callback: ProgressCallback | None,
    ) -> bytes:
        total = _content_length(response)
        buffer = bytearray()
        while True:
            chunk = response.read(self._chunk_size)
            if not chunk:
                break
            buffer.extend(chunk)
            if progress_callback is not None:
                progress_callback(len(buffer), total)
        return bytes(buffer)


def _content_length(response: Any) -> int | None:
    """Return the advertised body size, or ``None`` if absent or bogus."""
    headers = getattr(response, "headers", None)
    if headers is None:
        return None
    raw = headers.get("Content-Length")
    try:
        length = int(raw)
    except (TypeError, ValueError):
        return None
    return length if length >= 0 else None
