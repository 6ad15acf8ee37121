"""
db/models/submission_record.py

One submitted page-count record.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.user import User


class SubmissionRecordRow(Base):
    __tablename__ = "monthly_reports"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type_of_record: Mapped[str] = mapped_column(String(255), nullable=False)
    period_covered: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Comma-separated sub-period labels",
    )
    no_of_pages: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    owner: Mapped["User"] = relationship("User", back_populates="records")

    __table_args__ = (
        Index("ix_monthly_reports_user_id", "user_id"),
        Index("ix_monthly_reports_created_at", "created_at"),
    )
