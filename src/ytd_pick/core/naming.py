"""Filename derivation for materialised variants.

A variant's ``format`` is a MIME-style token used for matching; the
filesystem suffix is looked up separately in :data:`FORMAT_EXTENSIONS`.
"""

from __future__ import annotations

from ytd_pick.core.models import Variant

FORMAT_EXTENSIONS: dict[str, str] = {
    "video/mp4": ".mp4",
    "video/webm": ".webm",
    "video/3gpp": ".3gp",
    "video/x-flv": ".flv",
    "video/quicktime": ".mov",
    "video/x-matroska": ".mkv",
    "audio/mp4": ".m4a",
    "audio/webm": ".weba",
}

# Characters that are reserved in filenames on at least one common
# filesystem, and what each one is replaced with.
_RESERVED_CHAR_MAP: dict[int, str] = str.maketrans(
    {
        "/": ".",
        "\\": ".",
        ":": "-",
        "*": "-",
        "?": "-",
        '"': "-",
        "<": "-",
        ">": "-",
        "|": "-",
    }
)


def extension_for_format(format: str) -> str:
    """Return the file suffix (with leading dot) for a format token.

    Unlisted ``type/subtype`` tokens fall back to ``"." + subtype`` with
    any ``x-`` prefix dropped; a token without a subtype yields ``""``.

    >>> extension_for_format("video/mp4")
    '.mp4'
    >>> extension_for_format("video/x-ms-wmv")
    '.ms-wmv'
    """
    known = FORMAT_EXTENSIONS.get(format)
    if known is not None:
        return known
    _, sep, subtype = format.partition("/")
    subtype = subtype.split(";", 1)[0].strip()
    if not sep or not subtype:
        return ""
    if subtype.startswith("x-"):
        subtype = subtype[2:]
    return "." + subtype


def sanitize_filename(name: str) -> str:
    """Replace filesystem-reserved characters one-for-one.

    ``/`` and ``\\`` become ``.``; ``: * ? " < > |`` become ``-``.  All
    other characters pass through, so the result has exactly as many
    code points as *name*.
    """
    return name.translate(_RESERVED_CHAR_MAP)


def default_filename(variant: Variant) -> str:
    """Build the sanitised ``title + extension`` name for *variant*."""
    return sanitize_filename(variant.title + extension_for_format(variant.format))


def format_for_extension(ext: str) -> str:
    """Return the format token for a bare container extension.

    Inverse of :data:`FORMAT_EXTENSIONS`; unlisted extensions are
    assumed to be ``video/<ext>``.

    >>> format_for_extension("3gp")
    'video/3gpp'
    """
    ext = ext.strip().lstrip(".").lower()
    if not ext:
        return ""
    for token, suffix in FORMAT_EXTENSIONS.items():
        if suffix == "." + ext:
            return token
    return f"video/{ext}"
