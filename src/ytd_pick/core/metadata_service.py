"""Core metadata service — turns provider metadata into variants.

This service depends on a :class:`~ytd_pick.core.protocols.MetadataProvider`
injected at construction time, keeping the core free of any
external-system imports.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``, no filesystem access.
* Only :class:`~ytd_pick.exceptions.YtdPickError` subclasses escape.
"""

from __future__ import annotations

from typing import Any

from ytd_pick.core.collection import VariantCollection
from ytd_pick.core.models import QualityTier, Variant
from ytd_pick.core.naming import format_for_extension
from ytd_pick.core.protocols import MetadataProvider
from ytd_pick.exceptions import (
    InvalidURLError,
    MetadataExtractionError,
    VideoUnavailableError,
    YtdPickError,
    append_ytdlp_upgrade_suggestion,
)
from ytd_pick.utils.video_id import extract_video_id, looks_like_video_id, watch_url

# Minimum frame height for each known tier, best first.
_TIER_MIN_HEIGHT: tuple[tuple[int, QualityTier], ...] = (
    (1081, QualityTier.HIGHRES),
    (1080, QualityTier.HD1080),
    (720, QualityTier.HD720),
    (480, QualityTier.LARGE),
    (360, QualityTier.MEDIUM),
    (0, QualityTier.SMALL),
)

# Protocols whose URL is one complete file; HLS and DASH URLs are manifests.
_DIRECT_PROTOCOLS: frozenset[str] = frozenset({"http", "https"})


class MetadataService:
    """Stateless service that resolves a video to its variant collection.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`MetadataProvider` protocol.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider: MetadataProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_variants(self, target: str) -> VariantCollection:
        """Return every downloadable variant of *target*.

        *target* is either a page URL or a bare video identifier.

        Raises
        ------
        InvalidURLError
            If *target* is empty or neither a URL nor an identifier.
        MetadataExtractionError
            If the backend fails to return metadata.
        VideoUnavailableError
            If the video is unavailable or offers no downloadable variant.
        """
        url = self.resolve_target(target)
        info = self._fetch(url)
        collection = VariantCollection(title=str(info.get("title") or ""))
        for raw in self._extract_raw_formats(info):
            if self._is_progressive(raw):
                collection.append(self._parse_variant(raw))

        if not collection:
            raise VideoUnavailableError(
                f"No downloadable variants found for {url}",
                hint=append_ytdlp_upgrade_suggestion(
                    "The video may only offer separate audio and video streams.",
                ),
            )
        return collection

    # ------------------------------------------------------------------
    # Target validation
    # ------------------------------------------------------------------

    @staticmethod
    def resolve_target(target: str) -> str:
        """Return a fetchable page URL for a URL or bare identifier.

        Inputs without a scheme, such as ``www.youtube.com/watch?v=<id>``
        or ``youtu.be/<id>``, are reduced to their identifier and turned
        into a canonical watch URL.
        """
        stripped = target.strip()
        if not stripped:
            raise InvalidURLError("URL must not be empty.")
        if stripped.startswith(("http://", "https://")):
            return stripped
        if looks_like_video_id(stripped):
            return watch_url(stripped)
        if "://" not in stripped:
            try:
                return watch_url(extract_video_id(f"https://{stripped}"))
            except InvalidURLError as exc:
                raise InvalidURLError(
                    f"Invalid URL: {stripped}",
                    hint="Pass an http(s) URL or an 11-character video ID.",
                ) from exc
        raise InvalidURLError(
            f"Invalid URL: {stripped}",
            hint="Pass an http(s) URL or an 11-character video ID.",
        )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, url: str) -> dict[str, Any]:
        try:
            return self._provider.fetch_info(url)
        except YtdPickError:
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected provider error: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_raw_formats(info: dict[str, Any]) -> list[dict[str, Any]]:
        """Safely pull the ``formats`` list from a raw info dict."""
        raw: object = info.get("formats")
        if not isinstance(raw, list):
            return []
        return [entry for entry in raw if isinstance(entry, dict)]

    @classmethod
    def _is_progressive(cls, raw: dict[str, Any]) -> bool:
        """A single-URL file carrying both audio and video.

        Manifest protocols (HLS, DASH, storyboards) are rejected: their
        URL points at a playlist, not the media.  Missing
        codec or protocol information is given the benefit of the doubt.
        """
        if not raw.get("url"):
            return False
        if cls._protocol_of(raw) not in _DIRECT_PROTOCOLS:
            return False
        return raw.get("vcodec") != "none" and raw.get("acodec") != "none"

    @staticmethod
    def _protocol_of(raw: dict[str, Any]) -> str:
        """Return the declared protocol, or guess it from the URL."""
        protocol = str(raw.get("protocol") or "").lower()
        if protocol:
            return protocol
        url = str(raw.get("url") or "")
        if ".m3u8" in url:
            return "m3u8"
        if ".mpd" in url:
            return "http_dash_segments"
        return "https"

    @staticmethod
    def quality_for(raw: dict[str, Any]) -> str:
        """Return the tier token for a raw format dict.

        A ``format_note`` that already names a known tier wins; otherwise
        the tier is derived from the frame height.  Without either the
        token is empty.
        """
        note = str(raw.get("format_note") or "").lower()
        if QualityTier.from_token(note) is not QualityTier.UNKNOWN:
            return note

        height = raw.get("height")
        if not isinstance(height, int) or isinstance(height, bool):
            return ""
        for min_height, tier in _TIER_MIN_HEIGHT:
            if height >= min_height:
                return tier.value
        return ""

    @classmethod
    def _parse_variant(cls, raw: dict[str, Any]) -> Variant:
        """Convert one raw format dict to a :class:`Variant`."""
        return Variant(
            source_url=str(raw.get("url", "")),
            quality=cls.quality_for(raw),
            format=format_for_extension(str(raw.get("ext") or "")),
        )
