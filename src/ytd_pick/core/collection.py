"""The ordered set of variants known for one logical video."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

from ytd_pick.core.models import Variant
from ytd_pick.core.selection import select_variants


@dataclass(slots=True)
class VariantCollection:
    """All known variants of one video, sharing a single title.

    Every variant held by the collection carries the collection's title;
    :meth:`append` (and construction) rewrite the title of incoming
    variants.  :meth:`filter` never mutates the receiver; it returns a
    narrowed collection, so callers may filter the same instance
    repeatedly.
    """

    title: str
    variants: list[Variant] = field(default_factory=list)

    def __post_init__(self) -> None:
        incoming = self.variants
        self.variants = []
        self.extend(incoming)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, variant: Variant) -> None:
        """Append *variant*, replacing its title with the collection's."""
        self.variants.append(replace(variant, title=self.title))

    def extend(self, variants: Iterable[Variant]) -> None:
        for variant in variants:
            self.append(variant)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def filter(self, quality: str = "", format: str = "") -> VariantCollection:
        """Return a collection narrowed by *format* then *quality*.

        Empty strings leave the corresponding axis unconstrained; an
        empty *quality* picks the best tier available.

        Raises
        ------
        NoMatchingVariantError
            When no variant survives, carrying both constraints.
        """
        selected = select_variants(self.variants, quality, format)
        return VariantCollection(title=self.title, variants=selected)

    def snapshot(self) -> VariantCollection:
        """Return an independent copy of this collection."""
        return VariantCollection(title=self.title, variants=list(self.variants))

    def find_malformed(self) -> list[tuple[int, list[str]]]:
        """Return ``(index, missing_fields)`` for every malformed variant."""
        report: list[tuple[int, list[str]]] = []
        for index, variant in enumerate(self.variants):
            missing = variant.find_missing_fields()
            if missing:
                report.append((index, missing))
        return report

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def render_table(self) -> str:
        """Render a plain-text table: index, quality and format per row."""
        lines = [
            f"Video title: {self.title}",
            "Index\tQuality\tFormat",
        ]
        lines.extend(
            f" {index}\t{variant.quality}\t{variant.format}"
            for index, variant in enumerate(self.variants)
        )
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render_table()

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.variants)

    def __bool__(self) -> bool:
        return len(self.variants) > 0

    def __iter__(self) -> Iterator[Variant]:
        return iter(self.variants)

    def __getitem__(self, index: int) -> Variant:
        return self.variants[index]
