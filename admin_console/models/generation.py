"""Generation ORM — one AI staging run over a source image.

Invariants:
    - status is one of core.domain_types.GenerationStatus values
    - processing_time_ms and completed_at are set only once a run finishes
    - created_at drives the upload/activity charts; completed_at drives processing time
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from admin_console.core.domain_types import GenerationStatus, OperationType
from admin_console.db.base import Base


class Generation(Base):
    __tablename__ = "generations"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        Text, ForeignKey("users.id"), nullable=False, index=True,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False,
    )
    source_image_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("source_images.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    variation_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
    room_type: Mapped[str] = mapped_column(String(20), nullable=False)
    staging_style: Mapped[str] = mapped_column(String(20), nullable=False)
    operation_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OperationType.STAGE_EMPTY.value,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=GenerationStatus.PENDING.value,
    )
    processing_time_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
