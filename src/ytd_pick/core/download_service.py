"""Core download service — materialises a chosen variant to disk.

The service fetches bytes through a
:class:`~ytd_pick.core.protocols.ByteFetcher` and writes them through a
:class:`~ytd_pick.core.protocols.FileSink`, both injected at
construction time.  It is responsible for:

* Picking the variant to download from a collection.
* Deriving a safe filename when the caller gives none.
* Ensuring only :class:`~ytd_pick.exceptions.YtdPickError` subclasses
  escape.

Guarantees
----------
* No direct network or filesystem access, no ``print()``, no logging.
* No yt-dlp import.
"""

from __future__ import annotations

from pathlib import Path

from ytd_pick.core.collection import VariantCollection
from ytd_pick.core.models import Variant
from ytd_pick.core.naming import default_filename
from ytd_pick.core.protocols import ByteFetcher, FileSink, ProgressCallback
from ytd_pick.exceptions import FilesystemError, TransportError, YtdPickError


class DownloadService:
    """Stateless service that drives fetch-and-write for one variant.

    Parameters
    ----------
    fetcher:
        Any object satisfying the :class:`ByteFetcher` protocol.
    sink:
        Any object satisfying the :class:`FileSink` protocol.
    """

    def __init__(self, fetcher: ByteFetcher, sink: FileSink) -> None:
        self._fetcher: ByteFetcher = fetcher
        self._sink: FileSink = sink

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def download(
        self,
        collection: VariantCollection,
        directory: str = "",
        filename: str = "",
        quality: str = "",
        format: str = "",
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> Path:
        """Filter *collection* and download the first surviving variant.

        Ties between equally ranked variants go to the one listed first.

        Raises
        ------
        NoMatchingVariantError
            When no variant matches *quality* / *format*.
        TransportError
            When the variant's bytes cannot be fetched.
        FilesystemError
            When the destination cannot be written.
        """
        narrowed = collection.filter(quality, format)
        return self.download_variant(
            narrowed[0],
            directory,
            filename,
            progress_callback=progress_callback,
        )

    def download_variant(
        self,
        variant: Variant,
        directory: str = "",
        filename: str = "",
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> Path:
        """Fetch *variant* and write it to ``directory/filename``.

        An empty *directory* means the current working directory; an
        empty *filename* means the sanitised ``title + extension``.
        Returns the path that was written.
        """
        data = self._fetch(variant.source_url, progress_callback)

        # A failed mkdir only matters if the write fails as well; the
        # directory may already exist.
        directory_error: FilesystemError | None = None
        if directory:
            try:
                self._sink.ensure_directory(Path(directory))
            except FilesystemError as exc:
                directory_error = exc

        if len(filename) == 0:
            filename = default_filename(variant)
        target = self.build_target_path(directory, filename)

        try:
            self._sink.write_bytes(target, data)
        except FilesystemError as exc:
            if directory_error is not None:
                raise directory_error from exc
            raise
        return target

    # ------------------------------------------------------------------
    # Path construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def build_target_path(directory: str, filename: str) -> Path:
        """Join *directory* and *filename*; empty directory → cwd-relative."""
        if not directory:
            return Path(filename)
        return Path(directory) / filename

    # ------------------------------------------------------------------
    # Fetcher delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, url: str, progress_callback: ProgressCallback | None) -> bytes:
        try:
            return self._fetcher.fetch_bytes(url, progress_callback=progress_callback)
        except YtdPickError:
            raise
        except Exception as exc:
            raise TransportError(f"Unexpected fetch error: {exc}") from exc
