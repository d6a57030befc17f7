"""Domain Types — enums and identity types shared across layers.

Invariants:
    - All valid actions encoded as an Enum; no raw string matching outside parse_action()
    - DownloadId wraps the string form of a UUID4
"""

from enum import Enum
from typing import NewType


DownloadId = NewType("DownloadId", str)


class VideoAction(str, Enum):
    """Operations selectable through the `action` query parameter."""
    SEARCH = "search"
    INFO = "info"
    DOWNLOAD = "download"


class DownloadStatus(str, Enum):
    """Lifecycle of a download ticket. Only QUEUED is produced today."""
    QUEUED = "queued"


def parse_action(raw: str | None) -> VideoAction | None:
    """Map the raw query value to a VideoAction, or None if unsupported."""
    if raw is None:
        return None
    try:
        return VideoAction(raw)
    except ValueError:
        return None
