"""Announcement Cache — two-key pointer/value protocol for the active banner.

Invariants:
    - announcement:active holds the active id; announcement:<id> holds the body
    - Pointer without value → pointer deleted, no announcement (self-healing)
    - start_at in the future → no announcement, keys untouched
    - end_at in the past → both keys deleted, no announcement (lazy expiry)
    - publish() writes the value before the pointer; a torn write never leaves
      a pointer to a missing value

Design Decisions:
    - No background sweeper: expiry is enforced on every read
    - Read-then-delete is not atomic; concurrent readers may both see a stale
      body once, and the repeated delete is a no-op
    - An unparseable body is treated like a missing one
"""

import logging
import uuid
from datetime import datetime, timezone

from pydantic import ValidationError

from admin_console.core.announcement_window import (
    WindowState, classify_window, seconds_until,
)
from admin_console.core.domain_types import Severity
from admin_console.core.repository_protocols import KeyValueStore
from admin_console.schemas.announcement import Announcement

logger = logging.getLogger(__name__)

ACTIVE_POINTER_KEY = "announcement:active"


def announcement_key(announcement_id: str) -> str:
    return f"announcement:{announcement_id}"


class AnnouncementCache:
    """Reads (and lazily cleans) the active announcement from a KeyValueStore."""

    def __init__(self, store: KeyValueStore, clock=None):
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def get_active(self) -> Announcement | None:
        active_id = await self._store.get(ACTIVE_POINTER_KEY)
        if not active_id:
            return None

        payload = await self._store.get(announcement_key(active_id))
        announcement = self._decode(active_id, payload)
        if announcement is None:
            await self._store.delete(ACTIVE_POINTER_KEY)
            logger.info(
                "Dangling announcement pointer removed",
                extra={"resource_id": active_id},
            )
            return None

        state = classify_window(
            announcement.start_at, announcement.end_at, self._clock(),
        )
        if state is WindowState.PENDING:
            return None
        if state is WindowState.EXPIRED:
            await self._store.delete(ACTIVE_POINTER_KEY, announcement_key(active_id))
            logger.info(
                "Expired announcement removed", extra={"resource_id": active_id},
            )
            return None
        return announcement

    async def publish(
        self,
        message: str,
        severity: Severity,
        start_at: datetime | None = None,
        end_at: datetime | None = None,
    ) -> Announcement:
        """Make a new announcement the active one, replacing any previous one."""
        now = self._clock()
        announcement = Announcement(
            id=str(uuid.uuid4()),
            message=message,
            severity=severity,
            start_at=start_at,
            end_at=end_at,
            created_at=now,
        )
        previous_id = await self._store.get(ACTIVE_POINTER_KEY)
        ttl = seconds_until(end_at, now)
        await self._store.set(
            announcement_key(announcement.id), announcement.to_cache(), ttl_seconds=ttl,
        )
        await self._store.set(ACTIVE_POINTER_KEY, announcement.id, ttl_seconds=ttl)
        if previous_id and previous_id != announcement.id:
            await self._store.delete(announcement_key(previous_id))
        return announcement

    async def clear(self) -> str | None:
        """Deactivate the current announcement. Returns the cleared id, if any."""
        active_id = await self._store.get(ACTIVE_POINTER_KEY)
        if not active_id:
            return None
        await self._store.delete(ACTIVE_POINTER_KEY, announcement_key(active_id))
        return active_id

    def _decode(self, active_id: str, payload: str | None) -> Announcement | None:
        if payload is None:
            return None
        try:
            return Announcement.from_cache(payload)
        except ValidationError as e:
            logger.warning(
                f"Unreadable announcement body: {e}", extra={"resource_id": active_id},
            )
            return None
