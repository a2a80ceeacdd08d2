"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

ProgressCallback = Callable[[int, int | None], None]
"""Called with ``(downloaded_bytes, total_bytes_or_None)`` while fetching."""


class MetadataProvider(Protocol):
    """Contract for metadata extraction backends."""

    def fetch_info(self, url: str) -> dict[str, Any]:
        """Fetch raw metadata for *url* and return a provider-specific dict.

        The returned dict must contain at least:

        * ``"title"`` — video title (``str``)
        * ``"formats"`` — list of format dicts (``list[dict]``), each
          with ``"url"`` and ``"ext"`` and ideally ``"height"``

        Raises
        ------
        MetadataExtractionError
            When the backend fails to extract metadata.
        VideoUnavailableError
            When the target video is confirmed unavailable.
        """
        ...  # pragma: no cover


class ByteFetcher(Protocol):
    """Contract for the "fetch bytes from URL" capability."""

    def fetch_bytes(
        self,
        url: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Return the full response payload for *url*.

        Raises
        ------
        TransportError
            On any network or protocol failure.
        """
        ...  # pragma: no cover


class FileSink(Protocol):
    """Contract for the local destination of materialised variants."""

    def ensure_directory(self, path: Path) -> None:
        """Create *path* and any missing parents.

        Raises
        ------
        FilesystemError
            When the directory cannot be created.
        """
        ...  # pragma: no cover

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Create or truncate *path* and write *data* to it.

        Raises
        ------
        FilesystemError
            When the file cannot be created or written.
        """
        ...  # pragma: no cover
