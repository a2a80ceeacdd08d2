"""Default settings shared by the CLI and the service layer.

There is no configuration file; the CLI exposes each default below as
an argparse option.
"""

from __future__ import annotations

DEFAULT_FORMAT: str = "video/mp4"
"""Container format requested when the user does not pass ``--format``."""

DEFAULT_QUALITY: str = ""
"""Empty means "best available" via the ranked quality fallback."""

DEFAULT_OUTPUT_DIR: str = "./"
"""Destination directory when none is given on the command line."""

FETCH_CHUNK_SIZE: int = 1024 * 1024
"""Bytes read per chunk while streaming a variant."""

WATCH_URL_TEMPLATE: str = "https://www.youtube.com/watch?v={video_id}"
"""Canonical page URL for a bare video identifier."""
