"""Announcement Window — pure classification of an announcement against the clock.

Invariants:
    - start_at in the future → PENDING (not active, not stale)
    - end_at in the past → EXPIRED (stale, must be cleaned up)
    - Otherwise ACTIVE; absent bounds never restrict
    - Bounds are inclusive: an announcement is still active at exactly end_at
"""

from datetime import datetime
from enum import Enum


class WindowState(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"


def classify_window(
    start_at: datetime | None, end_at: datetime | None, now: datetime,
) -> WindowState:
    if start_at is not None and now < start_at:
        return WindowState.PENDING
    if end_at is not None and now > end_at:
        return WindowState.EXPIRED
    return WindowState.ACTIVE


def seconds_until(end_at: datetime | None, now: datetime) -> int | None:
    """Whole seconds left before end_at (at least 1), or None when unbounded."""
    if end_at is None:
        return None
    return max(1, int((end_at - now).total_seconds()) + 1)
