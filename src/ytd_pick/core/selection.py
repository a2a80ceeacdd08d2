"""Pure variant selection logic.

Every function in this module is a pure transformation over a sequence
of :class:`~ytd_pick.core.models.Variant`: no I/O, no mutation of the
input, and original relative order is always preserved.

Pipeline order (enforced by :func:`select_variants`):

1. **Format stage** — exact, case-sensitive match when a format is given.
2. **Quality stage** — exact match when a quality is given, otherwise
   the ranked fallback over :class:`~ytd_pick.core.models.QualityTier`.
"""

from __future__ import annotations

from collections.abc import Sequence

from ytd_pick.core.models import QualityTier, Variant
from ytd_pick.exceptions import NoMatchingVariantError


# ---------------------------------------------------------------------------
# 1. Format stage
# ---------------------------------------------------------------------------

def filter_by_format(variants: Sequence[Variant], format: str) -> list[Variant]:
    """Keep variants whose format equals *format*; empty means no-op."""
    if not format:
        return list(variants)
    return [v for v in variants if v.format == format]


# ---------------------------------------------------------------------------
# 2. Quality stage
# ---------------------------------------------------------------------------

def filter_by_quality(variants: Sequence[Variant], quality: str) -> list[Variant]:
    """Keep variants whose quality token equals *quality* exactly."""
    return [v for v in variants if v.quality == quality]


def rank_by_quality(variants: Sequence[Variant]) -> list[Variant]:
    """Return every variant of the best tier present in *variants*.

    Known tiers are tried best first and the first one with at least one
    match wins.  When none of them is present, the first non-empty
    unrecognised token wins instead.  The result never mixes two quality
    tokens.
    """
    for tier in QualityTier.known():
        matches = filter_by_quality(variants, tier.value)
        if matches:
            return matches

    for variant in variants:
        if variant.quality and variant.tier is QualityTier.UNKNOWN:
            return filter_by_quality(variants, variant.quality)
    return []


# ---------------------------------------------------------------------------
# Composite pipeline
# ---------------------------------------------------------------------------

def select_variants(
    variants: Sequence[Variant],
    quality: str = "",
    format: str = "",
) -> list[Variant]:
    """Run the format stage, then the quality stage.

    Raises
    ------
    NoMatchingVariantError
        When nothing survives both stages.
    """
    candidates = filter_by_format(variants, format)
    if quality:
        selected = filter_by_quality(candidates, quality)
    else:
        selected = rank_by_quality(candidates)

    if not selected:
        raise NoMatchingVariantError(quality, format)
    return selected
