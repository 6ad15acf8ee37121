"""
db/repositories/submission_record_repository.py

Read snapshots of submitted records for reporting, and retention deletes.

The caller controls commit/rollback; this repository never commits on its own.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models.submission_record import SubmissionRecordRow
from db.models.user import User
from db.repositories.errors import RecordQueryError
from reporting.types import SubmissionRecord

UNKNOWN_ROLE = "Unknown"


class SubmissionRecordRepository:
    """
    Repository for reading ``monthly_reports`` rows joined to their owner's role.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_created_between(self, start: datetime, end: datetime) -> list[SubmissionRecord]:
        """
        Return every record with ``start <= created_at <= end`` as immutable
        snapshots, oldest first (ties broken by id for a stable order).

        Records whose owner no longer exists carry the role ``"Unknown"``.

        Raises
        ------
        RecordQueryError: When the query fails.
        """
        stmt = (
            select(SubmissionRecordRow, User.role)
            .outerjoin(User, User.id == SubmissionRecordRow.user_id)
            .where(SubmissionRecordRow.created_at >= start)
            .where(SubmissionRecordRow.created_at <= end)
            .order_by(SubmissionRecordRow.created_at.asc(), SubmissionRecordRow.id.asc())
        )
        try:
            result = self._session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise RecordQueryError("Failed to read submitted records.") from exc
        return [_to_snapshot(row, role) for row, role in result]

    # ------------------------------------------------------------------
    # Retention
    # ------------------------------------------------------------------

    def delete_created_before(self, cutoff: datetime) -> int:
        """
        Delete records created strictly before *cutoff*; return the row count.

        Raises
        ------
        RecordQueryError: When the delete fails. The session is not rolled back here.
        """
        stmt = delete(SubmissionRecordRow).where(SubmissionRecordRow.created_at < cutoff)
        try:
            result = self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RecordQueryError("Failed to delete expired records.") from exc
        return int(result.rowcount or 0)


def _to_snapshot(row: SubmissionRecordRow, role: str | None) -> SubmissionRecord:
    return SubmissionRecord(
        type_of_record=row.type_of_record,
        period_covered=row.period_covered,
        no_of_pages=row.no_of_pages,
        role=role or UNKNOWN_ROLE,
        created_at=row.created_at,
        owner_id=row.user_id,
    )
