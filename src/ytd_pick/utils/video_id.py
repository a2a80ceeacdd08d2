"""Video identifier helpers.

Pure string / URL parsing — no network access.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from ytd_pick.exceptions import InvalidURLError
from ytd_pick.utils.constants import WATCH_URL_TEMPLATE

_VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

_SHORT_LINK_HOSTS: frozenset[str] = frozenset({"youtu.be", "www.youtu.be"})


def looks_like_video_id(value: str) -> bool:
    """Return ``True`` for an 11-character YouTube-style identifier."""
    return bool(_VIDEO_ID_PATTERN.match(value))


def extract_video_id(url: str) -> str:
    """Pull the video identifier out of a watch, short-link or shorts URL.

    >>> extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=1")
    'dQw4w9WgXcQ'
    >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ")
    'dQw4w9WgXcQ'

    Raises
    ------
    InvalidURLError
        When no identifier can be found.
    """
    parsed = urlparse(url.strip())
    query_id = parse_qs(parsed.query).get("v", [""])[0]
    if query_id:
        return query_id

    segments = [segment for segment in parsed.path.split("/") if segment]
    if parsed.netloc.lower() in _SHORT_LINK_HOSTS and segments:
        return segments[0]
    if len(segments) >= 2 and segments[0] in ("shorts", "embed", "live"):
        return segments[1]

    raise InvalidURLError(
        f"No video identifier found in URL: {url}",
        hint="Expected a link like https://www.youtube.com/watch?v=<id>",
    )


def watch_url(video_id: str) -> str:
    """Return the canonical watch-page URL for *video_id*."""
    return WATCH_URL_TEMPLATE.format(video_id=video_id)
