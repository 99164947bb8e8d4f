"""AdminAction ORM — append-only audit trail of admin activity.

Invariants:
    - Rows are inserted, never updated or deleted
    - action is one of core.domain_types.AuditAction values
    - Written by services/audit_logger.py only

Design Decisions:
    - JSON column for metadata: each action records a different shape
      (filters, result counts, announcement ids)
    - Mapped attribute is `details` because `metadata` is reserved on declarative models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from admin_console.db.base import Base


class AdminAction(Base):
    """Audit entry for one admin action."""
    __tablename__ = "admin_actions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    action: Mapped[str] = mapped_column(String(40), nullable=False)
    admin_id: Mapped[str] = mapped_column(
        Text, ForeignKey("users.id"), nullable=False, index=True,
    )
    target_user_id: Mapped[str | None] = mapped_column(
        Text, ForeignKey("users.id"), nullable=True,
    )
    target_resource_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_resource_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_resource_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    request_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
