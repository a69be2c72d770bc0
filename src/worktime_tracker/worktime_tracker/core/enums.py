from __future__ import annotations

from enum import Enum


class DurationStyle(str, Enum):
    """Rendering style for formatted durations."""

    FULL = "full"
    COMPACT = "compact"
