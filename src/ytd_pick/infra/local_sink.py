"""Local filesystem implementation of :class:`~ytd_pick.core.protocols.FileSink`."""

from __future__ import annotations

import logging
from pathlib import Path

from ytd_pick.exceptions import FilesystemError

logger = logging.getLogger(__name__)


class LocalFileSink:
    """Write materialised variants to the local disk.

    ``OSError`` is re-raised as :class:`FilesystemError`; a half-written
    file is left in place.
    """

    def __init__(self, directory_mode: int = 0o777) -> None:
        self._directory_mode: int = directory_mode

    def ensure_directory(self, path: Path) -> None:
        try:
            path.mkdir(mode=self._directory_mode, parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f"Cannot create directory {path}: {exc}",
            ) from exc
        logger.debug("Directory ready: %s", path)

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            with open(path, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise FilesystemError(
                f"Cannot write {path}: {exc}",
                hint="Check that the destination is writable.",
            ) from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)
