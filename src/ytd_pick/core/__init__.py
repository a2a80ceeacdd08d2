"""Core / service layer — selection logic and orchestration.

Rules
-----
* No ``print()`` calls and no logging.
* No direct filesystem or network I/O; both go through protocols.
* No imports from ``cli`` or ``infra``.
"""

from ytd_pick.core.collection import VariantCollection
from ytd_pick.core.download_service import DownloadService
from ytd_pick.core.metadata_service import MetadataService
from ytd_pick.core.models import QualityTier, Variant
from ytd_pick.core.protocols import ByteFetcher, FileSink, MetadataProvider

__all__: list[str] = [
    "ByteFetcher",
    "DownloadService",
    "FileSink",
    "MetadataProvider",
    "MetadataService",
    "QualityTier",
    "Variant",
    "VariantCollection",
]
