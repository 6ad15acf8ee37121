"""
db/models/user.py

User model: one submitting division account or administrator.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.submission_record import SubmissionRecordRow


class User(Base, TimestampMixin):
    """
    Account that owns submitted records.

    ``role`` is the division tag (e.g. MSD, ESD, LSD) or the reserved
    administrative role. Reports read it through the records' owner.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        unique=True,
    )

    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Division tag or ADMIN",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    records: Mapped[list["SubmissionRecordRow"]] = relationship(
        "SubmissionRecordRow",
        back_populates="owner",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_users_role", "role"),)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role!r}>"
