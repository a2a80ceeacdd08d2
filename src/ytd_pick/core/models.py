"""Domain models for ytd-pick.

:class:`Variant` is a frozen value object: one concrete encoded
representation of a video.  :class:`QualityTier` names the quality
tokens the selection engine knows how to rank.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ytd_pick.exceptions import MalformedVariantError


# ---------------------------------------------------------------------------
# Quality tiers
# ---------------------------------------------------------------------------

class QualityTier(enum.Enum):
    """Known quality tiers in fallback priority order, best first.

    ``UNKNOWN`` stands for any token outside the known set and always
    ranks below ``SMALL``.
    """

    HIGHRES = "highres"
    HD1080 = "hd1080"
    HD720 = "hd720"
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"
    UNKNOWN = "unknown"

    @classmethod
    def known(cls) -> tuple[QualityTier, ...]:
        """Return every tier except ``UNKNOWN``, best first."""
        return tuple(tier for tier in cls if tier is not cls.UNKNOWN)

    @classmethod
    def from_token(cls, token: str) -> QualityTier:
        """Map a raw quality token to a tier; unrecognised → ``UNKNOWN``."""
        for tier in cls.known():
            if tier.value == token:
                return tier
        return cls.UNKNOWN


# ---------------------------------------------------------------------------
# Variant
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Variant:
    """One encoded rendition of a video.

    A well-formed variant has all four fields non-empty.  Emptiness is a
    defect in whatever produced the variant; it is surfaced by
    :meth:`find_missing_fields` rather than rejected on construction.
    """

    source_url: str
    """Opaque locator the bytes are fetched from."""

    quality: str
    """Quality tier token (e.g. ``hd720``)."""

    format: str
    """MIME-style container token (e.g. ``video/mp4``)."""

    title: str = ""
    """Title of the logical video; assigned by the owning collection."""

    @property
    def tier(self) -> QualityTier:
        return QualityTier.from_token(self.quality)

    def find_missing_fields(self) -> list[str]:
        """Return the names of required fields that are empty."""
        missing: list[str] = []
        if not self.quality:
            missing.append("quality")
        if not self.format:
            missing.append("format")
        if not self.source_url:
            missing.append("source_url")
        if not self.title:
            missing.append("title")
        return missing

    def ensure_well_formed(self) -> None:
        """Raise :class:`MalformedVariantError` if any field is empty."""
        missing = self.find_missing_fields()
        if missing:
            raise MalformedVariantError(missing)
