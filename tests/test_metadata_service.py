"""Tests for MetadataService (core/metadata_service.py).

The :class:`MetadataProvider` dependency is mocked — no internet access,
no yt-dlp invocation.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from ytd_pick.core.collection import VariantCollection
from ytd_pick.core.metadata_service import MetadataService
from ytd_pick.exceptions import (
    InvalidURLError,
    MetadataExtractionError,
    VideoUnavailableError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_provider(info: dict[str, Any] | Exception) -> MagicMock:
    provider = MagicMock()
    if isinstance(info, Exception):
        provider.fetch_info.side_effect = info
    else:
        provider.fetch_info.return_value = info
    return provider


def _raw_format(
    *,
    url: str | None = "https://cdn.example/18",
    ext: str = "mp4",
    height: Any = 360,
    vcodec: str | None = "avc1.42001E",
    acodec: str | None = "mp4a.40.2",
    format_note: str | None = None,
    protocol: str | None = None,
) -> dict[str, Any]:
    d: dict[str, Any] = {"url": url, "ext": ext, "height": height}
    if protocol is not None:
        d["protocol"] = protocol
    if vcodec is not None:
        d["vcodec"] = vcodec
    if acodec is not None:
        d["acodec"] = acodec
    if format_note is not None:
        d["format_note"] = format_note
    return d


def _info(formats: list[Any], title: str = "Sample Video") -> dict[str, Any]:
    return {"id": "abc123def45", "title": title, "formats": formats}


def _service(formats: list[Any], **kwargs: Any) -> MetadataService:
    return MetadataService(_fake_provider(_info(formats, **kwargs)))


# ---------------------------------------------------------------------------
# Target resolution
# ---------------------------------------------------------------------------

class TestResolveTarget:
    @pytest.mark.parametrize("target", ["", "   "])
    def test_empty_raises(self, target: str) -> None:
        with pytest.raises(InvalidURLError, match="empty"):
            MetadataService.resolve_target(target)

    def test_url_passes_through(self) -> None:
        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        assert MetadataService.resolve_target(f"  {url} ") == url

    def test_bare_id_becomes_watch_url(self) -> None:
        assert (
            MetadataService.resolve_target("dQw4w9WgXcQ")
            == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        )

    @pytest.mark.parametrize("target", ["ftp://example.com/v", "not a video"])
    def test_garbage_raises(self, target: str) -> None:
        with pytest.raises(InvalidURLError, match="Invalid URL"):
            MetadataService.resolve_target(target)

    @pytest.mark.parametrize(
        "target",
        [
            "www.youtube.com/watch?v=dQw4w9WgXcQ",
            "youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "youtu.be/dQw4w9WgXcQ",
            "m.youtube.com/shorts/dQw4w9WgXcQ",
        ],
    )
    def test_schemeless_url_becomes_watch_url(self, target: str) -> None:
        assert (
            MetadataService.resolve_target(target)
            == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        )

    def test_schemeless_url_without_id_raises(self) -> None:
        with pytest.raises(InvalidURLError, match="Invalid URL") as exc_info:
            MetadataService.resolve_target("www.youtube.com/feed/trending")
        assert isinstance(exc_info.value.__cause__, InvalidURLError)

    def test_provider_receives_resolved_url(self) -> None:
        provider = _fake_provider(_info([_raw_format()]))
        MetadataService(provider).get_variants("dQw4w9WgXcQ")
        provider.fetch_info.assert_called_once_with(
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        )


# ---------------------------------------------------------------------------
# get_variants — parsing
# ---------------------------------------------------------------------------

class TestGetVariants:
    def test_returns_collection_with_title(self) -> None:
        result = _service([_raw_format()], title="Clip").get_variants("dQw4w9WgXcQ")
        assert isinstance(result, VariantCollection)
        assert result.title == "Clip"
        assert result[0].title == "Clip"

    def test_variant_fields(self) -> None:
        result = _service(
            [_raw_format(url="https://cdn/22", ext="mp4", height=720)],
        ).get_variants("dQw4w9WgXcQ")
        variant = result[0]
        assert variant.source_url == "https://cdn/22"
        assert variant.quality == "hd720"
        assert variant.format == "video/mp4"

    def test_skips_adaptive_streams(self) -> None:
        formats = [
            _raw_format(url="video-only", acodec="none"),
            _raw_format(url="audio-only", vcodec="none"),
            _raw_format(url="muxed"),
        ]
        result = _service(formats).get_variants("dQw4w9WgXcQ")
        assert [v.source_url for v in result] == ["muxed"]

    def test_missing_codec_info_is_kept(self) -> None:
        result = _service(
            [_raw_format(vcodec=None, acodec=None)],
        ).get_variants("dQw4w9WgXcQ")
        assert len(result) == 1

    def test_skips_entries_without_url_and_non_dicts(self) -> None:
        formats = [_raw_format(url=None), "garbage", _raw_format(url="ok")]
        result = _service(formats).get_variants("dQw4w9WgXcQ")
        assert [v.source_url for v in result] == ["ok"]

    def test_webm_and_3gp_formats(self) -> None:
        formats = [_raw_format(ext="webm"), _raw_format(ext="3gp", height=144)]
        result = _service(formats).get_variants("dQw4w9WgXcQ")
        assert [(v.quality, v.format) for v in result] == [
            ("medium", "video/webm"),
            ("small", "video/3gpp"),
        ]

    def test_no_usable_formats_raises_unavailable(self) -> None:
        service = _service([_raw_format(acodec="none")])
        with pytest.raises(VideoUnavailableError) as exc_info:
            service.get_variants("dQw4w9WgXcQ")
        assert exc_info.value.hint is not None
        assert "pip install --upgrade yt-dlp" in exc_info.value.hint

    def test_formats_not_a_list(self) -> None:
        provider = _fake_provider({"title": "x", "formats": "nope"})
        with pytest.raises(VideoUnavailableError):
            MetadataService(provider).get_variants("dQw4w9WgXcQ")

    def test_missing_title_leaves_variants_flagged(self) -> None:
        provider = _fake_provider({"formats": [_raw_format()]})
        result = MetadataService(provider).get_variants("dQw4w9WgXcQ")
        assert result.find_malformed() == [(0, ["title"])]


# ---------------------------------------------------------------------------
# get_variants — direct-file protocols only
# ---------------------------------------------------------------------------

class TestDirectProtocols:
    @pytest.mark.parametrize(
        "protocol", ["m3u8_native", "m3u8", "http_dash_segments", "mhtml"],
    )
    def test_manifest_protocols_skipped(self, protocol: str) -> None:
        formats = [
            _raw_format(url="https://manifest/x", protocol=protocol),
            _raw_format(url="https://cdn/18", protocol="https"),
        ]
        result = _service(formats).get_variants("dQw4w9WgXcQ")
        assert [v.source_url for v in result] == ["https://cdn/18"]

    @pytest.mark.parametrize("protocol", ["http", "https", "HTTPS"])
    def test_http_protocols_kept(self, protocol: str) -> None:
        result = _service(
            [_raw_format(protocol=protocol)],
        ).get_variants("dQw4w9WgXcQ")
        assert len(result) == 1

    @pytest.mark.parametrize(
        "url",
        [
            "https://manifest/hls/96/index.m3u8",
            "https://manifest/dash/video.mpd",
        ],
    )
    def test_manifest_url_without_protocol_skipped(self, url: str) -> None:
        formats = [_raw_format(url=url), _raw_format(url="https://cdn/18")]
        result = _service(formats).get_variants("dQw4w9WgXcQ")
        assert [v.source_url for v in result] == ["https://cdn/18"]

    def test_best_mp4_is_the_single_file_stream(self) -> None:
        formats = [
            _raw_format(
                url="https://cdn/18", ext="mp4", height=360, protocol="https",
            ),
            _raw_format(
                url="https://manifest/hls/96/index.m3u8",
                ext="mp4",
                height=1080,
                protocol="m3u8_native",
            ),
            _raw_format(
                url="https://manifest/hls/95/index.m3u8",
                ext="mp4",
                height=720,
                protocol="m3u8_native",
            ),
        ]
        collection = _service(formats).get_variants("dQw4w9WgXcQ")
        chosen = collection.filter("", "video/mp4")
        assert [(v.source_url, v.quality) for v in chosen] == [
            ("https://cdn/18", "medium"),
        ]

    def test_only_manifests_raises_unavailable(self) -> None:
        service = _service([_raw_format(protocol="m3u8_native")])
        with pytest.raises(VideoUnavailableError):
            service.get_variants("dQw4w9WgXcQ")


# ---------------------------------------------------------------------------
# quality_for — tier derivation
# ---------------------------------------------------------------------------

class TestQualityFor:
    @pytest.mark.parametrize(
        ("height", "tier"),
        [
            (2160, "highres"),
            (1440, "highres"),
            (1080, "hd1080"),
            (720, "hd720"),
            (480, "large"),
            (360, "medium"),
            (240, "small"),
            (144, "small"),
        ],
    )
    def test_from_height(self, height: int, tier: str) -> None:
        assert MetadataService.quality_for({"height": height}) == tier

    def test_known_format_note_wins(self) -> None:
        raw = {"height": 360, "format_note": "Large"}
        assert MetadataService.quality_for(raw) == "large"

    def test_unknown_format_note_ignored(self) -> None:
        raw = {"height": 720, "format_note": "720p60"}
        assert MetadataService.quality_for(raw) == "hd720"

    @pytest.mark.parametrize("height", [None, "720", True, -1])
    def test_unusable_height_is_empty(self, height: Any) -> None:
        assert MetadataService.quality_for({"height": height}) == ""


# ---------------------------------------------------------------------------
# Exception mapping
# ---------------------------------------------------------------------------

class TestExceptionMapping:
    def test_unavailable_propagates(self) -> None:
        provider = _fake_provider(VideoUnavailableError("private"))
        with pytest.raises(VideoUnavailableError, match="private"):
            MetadataService(provider).get_variants("dQw4w9WgXcQ")

    def test_extraction_error_propagates(self) -> None:
        provider = _fake_provider(MetadataExtractionError("boom"))
        with pytest.raises(MetadataExtractionError, match="boom"):
            MetadataService(provider).get_variants("dQw4w9WgXcQ")

    def test_unexpected_error_wrapped_and_chained(self) -> None:
        original = RuntimeError("kaboom")
        provider = _fake_provider(original)
        with pytest.raises(MetadataExtractionError, match="Unexpected") as exc_info:
            MetadataService(provider).get_variants("dQw4w9WgXcQ")
        assert exc_info.value.__cause__ is original
