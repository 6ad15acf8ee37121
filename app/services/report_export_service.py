"""
app/services/report_export_service.py

Report export service.

Bridges the HTTP layer and the pure ``reporting`` pipeline:

    1. Build a validated ReportFilter from request parameters and settings.
    2. Read one record snapshot for the window from the store.
    3. Run ReportOrchestrator (aggregate → build → render).
    4. Optionally write the document into REPORT_OUTPUT_DIR, replacing an
       earlier export of the same window.

Also serves the per-role page summary and the retention purge.

No transformation logic lives in the router, and no grouping or layout
logic lives here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import (
    ReportSettings,
    SignatorySettings,
    get_report_settings,
    get_signatory_settings,
)
from app.logging_utils import log_event
from db.repositories.errors import RecordQueryError
from db.repositories.submission_record_repository import SubmissionRecordRepository
from reporting.aggregator import EmptyResult
from reporting.errors import ReportDataUnavailableError
from reporting.filters import PeriodMode, ReportFilter
from reporting.orchestrator import ReportOrchestrator
from reporting.renderer import RenderedReport
from reporting.summary import RolePageTotal, summarize_pages_by_role
from reporting.table_builder import ColumnLayout, SignatureBlock, TitleBlock
from reporting.types import SubmissionRecord

logger = logging.getLogger(__name__)


class ReportExportService:
    """
    Stateless export entry point.

    Every public method is read-only except :meth:`purge_expired`, which
    commits its own delete. The caller owns the session lifecycle.
    """

    def __init__(
        self,
        report_settings: ReportSettings | None = None,
        signatory_settings: SignatorySettings | None = None,
        orchestrator: ReportOrchestrator | None = None,
    ) -> None:
        self._settings = report_settings or get_report_settings()
        self._signatories = signatory_settings or get_signatory_settings()
        self._orchestrator = orchestrator or ReportOrchestrator()

    # ------------------------------------------------------------------
    # Request shaping
    # ------------------------------------------------------------------

    def build_filter(
        self,
        *,
        mode: PeriodMode | str,
        year: int | None,
        month: int | None = None,
        semester: int | None = None,
        role: str | None = None,
        exclude_admin: bool = True,
        divisions_only: bool = False,
    ) -> ReportFilter:
        """
        Build a validated report window using the configured role policy.

        Raises
        ------
        InvalidFilterError: When the parameters do not describe a valid window.
        """
        return ReportFilter.build(
            mode,
            year=year,
            month=month,
            semester=semester,
            role=role,
            included_roles=self._settings.division_roles if divisions_only else None,
            excluded_roles=(self._settings.admin_role,) if exclude_admin else None,
            timezone=self._settings.timezone,
        )

    def title_block(
        self,
        report_filter: ReportFilter,
        *,
        include_index: bool | None = None,
        include_role: bool | None = None,
    ) -> TitleBlock:
        """Title lines and column layout for *report_filter*; ``None`` means the configured default."""
        columns = ColumnLayout(
            index=self._settings.include_index_column if include_index is None else include_index,
            role=self._settings.include_role_column if include_role is None else include_role,
        )
        signatures = SignatureBlock(
            preparer_name=self._signatories.preparer_name,
            preparer_position=self._signatories.preparer_position,
            preparer_role=self._signatories.preparer_role,
            approver_name=self._signatories.approver_name,
            approver_position=self._signatories.approver_position,
        )
        return TitleBlock(
            organization_name=self._settings.organization_name,
            subtitle=self._settings.report_subtitle,
            period_label=report_filter.period_label,
            target_statement=self._settings.target_statement,
            columns=columns,
            signatures=signatures,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def export(
        self,
        db: Session,
        report_filter: ReportFilter,
        title_block: TitleBlock | None = None,
    ) -> RenderedReport | EmptyResult:
        """
        Generate the document for *report_filter*.

        Returns
        -------
        RenderedReport | EmptyResult
            The workbook, or EmptyResult when no record falls in the window.

        Raises
        ------
        ReportDataUnavailableError: When the record snapshot cannot be read.
        """
        records = self._snapshot(db, report_filter)
        block = title_block or self.title_block(report_filter)
        result = self._orchestrator.generate(records, report_filter, block)

        if isinstance(result, EmptyResult):
            log_event(
                logger,
                logging.INFO,
                "report_export_empty",
                window=report_filter.document_name,
                records_scanned=len(records),
            )
            return result

        saved_path = None
        if self._settings.output_dir:
            saved_path = result.save(self._settings.output_dir)

        log_event(
            logger,
            logging.INFO,
            "report_export_completed",
            window=report_filter.document_name,
            file_name=result.file_name,
            records_scanned=len(records),
            bytes=len(result.content),
            saved_path=saved_path,
        )
        return result

    def summarize_roles(self, db: Session, report_filter: ReportFilter) -> list[RolePageTotal]:
        """
        Per-role page totals for *report_filter*, division roles first.

        Raises
        ------
        ReportDataUnavailableError: When the record snapshot cannot be read.
        """
        records = self._snapshot(db, report_filter)
        return summarize_pages_by_role(records, report_filter, roles=self._settings.division_roles)

    def purge_expired(
        self,
        db: Session,
        *,
        retention_days: int,
        now: datetime | None = None,
    ) -> int:
        """
        Delete records older than *retention_days* and commit.

        Returns
        -------
        int
            Number of deleted records.

        Raises
        ------
        ValueError: When *retention_days* is not positive.
        ReportDataUnavailableError: When the delete fails; the session is rolled back.
        """
        if retention_days < 1:
            raise ValueError("retention_days must be at least 1.")
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=retention_days)
        try:
            deleted = SubmissionRecordRepository(db).delete_created_before(cutoff)
            db.commit()
        except (RecordQueryError, SQLAlchemyError) as exc:
            db.rollback()
            raise ReportDataUnavailableError("Failed to purge expired records.") from exc

        log_event(
            logger,
            logging.INFO,
            "retention_purge_completed",
            cutoff=cutoff,
            deleted=deleted,
        )
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _snapshot(self, db: Session, report_filter: ReportFilter) -> list[SubmissionRecord]:
        start, end = report_filter.bounds()
        try:
            return SubmissionRecordRepository(db).list_created_between(start, end)
        except RecordQueryError as exc:
            logger.exception("Record snapshot failed window=%s", report_filter.document_name)
            raise ReportDataUnavailableError(str(exc)) from exc


# ---------------------------------------------------------------------------
# Singleton factory
# ---------------------------------------------------------------------------


_service: ReportExportService | None = None


def get_report_export_service() -> ReportExportService:
    global _service
    if _service is None:
        _service = ReportExportService()
    return _service
