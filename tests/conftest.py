"""Shared pytest fixtures and configuration for the ytd-pick test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp must be mocked at the infra boundary.
* Core tests must be pure — filesystem access only through ``tmp_path``.
"""

from __future__ import annotations

import pytest

from ytd_pick.core.collection import VariantCollection
from ytd_pick.core.models import Variant


@pytest.fixture
def scenario_collection() -> VariantCollection:
    """Three variants of one video: hd720/mp4, medium/mp4, medium/webm."""
    return VariantCollection(
        title="T",
        variants=[
            Variant("url1", "hd720", "video/mp4"),
            Variant("url2", "medium", "video/mp4"),
            Variant("url3", "medium", "video/webm"),
        ],
    )
