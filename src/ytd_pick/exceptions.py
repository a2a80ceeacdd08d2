"""Custom exception hierarchy for ytd-pick.

Every exception that crosses a layer boundary inherits from
:class:`YtdPickError`.  Raw third-party and ``OSError`` exceptions are
caught in the infrastructure layer and re-raised as one of the typed
subclasses below, with the original kept as ``__cause__``.

Hierarchy
---------
YtdPickError
├── InvalidURLError
├── MetadataExtractionError
├── VideoUnavailableError
├── NoMatchingVariantError
├── SelectionCancelledError
├── MalformedVariantError
├── TransportError
├── FilesystemError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class YtdPickError(Exception):
    """Base exception for all ytd-pick errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Identifier / URL ------------------------------------------------------

class InvalidURLError(YtdPickError):
    """Raised when a target URL or video identifier fails validation."""


# --- Metadata --------------------------------------------------------------

class MetadataExtractionError(YtdPickError):
    """Raised when the metadata backend fails to describe a video."""


class VideoUnavailableError(YtdPickError):
    """Raised when a video identifier cannot be resolved to any variant."""


# --- Variant selection -----------------------------------------------------

class NoMatchingVariantError(YtdPickError):
    """Raised when filtering leaves no variant to choose from.

    Both requested constraints are kept for diagnostics; an empty string
    means the axis was unconstrained.
    """

    def __init__(self, quality: str, format: str) -> None:
        super().__init__(
            f"No video variant matches quality={quality!r}, format={format!r}.",
            hint="Relax --quality or --format, or run with --list to see "
            "what is available.",
        )
        self.quality: str = quality
        self.format: str = format


class SelectionCancelledError(YtdPickError):
    """Raised when the user dismisses the interactive variant prompt."""


class MalformedVariantError(YtdPickError):
    """Raised by the explicit well-formedness check on a variant."""

    def __init__(self, missing_fields: Sequence[str]) -> None:
        super().__init__(
            "Variant is missing required fields: " + ", ".join(missing_fields),
        )
        self.missing_fields: tuple[str, ...] = tuple(missing_fields)


# --- Transport / filesystem ------------------------------------------------

class TransportError(YtdPickError):
    """Raised when fetching remote bytes fails."""


class FilesystemError(YtdPickError):
    """Raised when a directory or destination file cannot be written."""


# --- Environment -----------------------------------------------------------

class EnvironmentError(YtdPickError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
