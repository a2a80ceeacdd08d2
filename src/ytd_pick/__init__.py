"""ytd-pick — pick one encoded variant of a video and save it to disk.

Variant metadata and bytes come from the yt-dlp Python API; selection
and naming are pure core logic.
"""

from ytd_pick.version import __version__

__all__: list[str] = ["__version__"]
