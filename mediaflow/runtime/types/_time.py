"""Time utilities for the types package."""

from __future__ import annotations

from datetime import datetime
from typing import Optional


def _elapsed_ms(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Milliseconds between two timestamps, 0 if either is missing."""
    if start is None or end is None:
        return 0
    return max(0, int((end - start).total_seconds() * 1000))
