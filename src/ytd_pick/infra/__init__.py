"""Infrastructure layer — external system integration.

This layer wraps all interaction with yt-dlp and the local filesystem.
Every raw third-party exception and ``OSError`` is caught here and
re-raised as a :class:`~ytd_pick.exceptions.YtdPickError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output; diagnostics go to ``logging`` only.
"""

from ytd_pick.infra.local_sink import LocalFileSink
from ytd_pick.infra.ytdlp_fetcher import YtDlpByteFetcher
from ytd_pick.infra.ytdlp_provider import YtDlpMetadataProvider

__all__: list[str] = [
    "LocalFileSink",
    "YtDlpByteFetcher",
    "YtDlpMetadataProvider",
]
