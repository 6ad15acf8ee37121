"""
app/api/routers/report_export_router.py

Report export endpoints.

GET    /reports/export          spreadsheet download for one window
GET    /reports/summary/roles   per-role page totals (JSON)
DELETE /reports/retention       purge records older than the retention window

Window query parameters
-----------------------
mode      : "monthly" | "semestral" | "yearly"   (default: "monthly")
year      : calendar year (required)
month     : 1–12, monthly only
semester  : 1 (Jan–Jun) or 2 (Jul–Dec), semestral only
role      : optional division filter (case-insensitive)

Responses
---------
200 → XLSX download, Content-Disposition: attachment; filename=<window>.xlsx
400 → malformed window
404 → no records in the window (informational)
503 → record store unavailable

All transformation logic lives in ReportExportService and the reporting
package; the router only handles HTTP plumbing.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.config import get_retention_settings
from app.schemas.report_export import (
    RetentionPurgeResponse,
    RolePageTotalResponse,
    RoleSummaryResponse,
)
from app.services.report_export_service import (
    ReportExportService,
    get_report_export_service,
)
from db.session import get_db
from reporting.aggregator import EmptyResult
from reporting.errors import InvalidFilterError, ReportDataUnavailableError
from reporting.filters import ReportFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


# ---------------------------------------------------------------------------
# Window dependency
# ---------------------------------------------------------------------------


def _window_params(
    mode: str = Query(
        default="monthly",
        description='Report window: "monthly", "semestral", or "yearly".',
    ),
    year: int | None = Query(default=None, description="Calendar year of the window."),
    month: int | None = Query(default=None, description="Month 1–12 (monthly only)."),
    semester: int | None = Query(default=None, description="1 = Jan–Jun, 2 = Jul–Dec (semestral only)."),
    role: str | None = Query(default=None, description="Restrict to one division role."),
    exclude_admin: bool = Query(default=True, description="Drop records owned by the administrative role."),
    divisions_only: bool = Query(default=False, description="Keep only the configured division roles."),
    service: ReportExportService = Depends(get_report_export_service),
) -> ReportFilter:
    try:
        return service.build_filter(
            mode=mode,
            year=year,
            month=month,
            semester=semester,
            role=role,
            exclude_admin=exclude_admin,
            divisions_only=divisions_only,
        )
    except InvalidFilterError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Report data is temporarily unavailable; try again later.",
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/export", summary="Download the report spreadsheet for one window")
def export_report(
    report_filter: ReportFilter = Depends(_window_params),
    include_index: bool | None = Query(default=None, description='Include the "No." column.'),
    include_role: bool | None = Query(default=None, description='Include the "Role" column.'),
    db: Session = Depends(get_db),
    service: ReportExportService = Depends(get_report_export_service),
) -> Response:
    """
    Build the digitization report for the requested window and return it as
    an ``.xlsx`` download. Repeated exports of one window share a file name.
    """
    title_block = service.title_block(
        report_filter, include_index=include_index, include_role=include_role
    )
    try:
        result = service.export(db, report_filter, title_block)
    except ReportDataUnavailableError as exc:
        raise _unavailable() from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Report export failed window=%s", report_filter.document_name)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Export failed; see server logs for details.",
        ) from exc

    if isinstance(result, EmptyResult):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.file_name}"'},
    )


@router.get(
    "/summary/roles",
    response_model=RoleSummaryResponse,
    summary="Page totals per division role",
)
def role_summary(
    report_filter: ReportFilter = Depends(_window_params),
    db: Session = Depends(get_db),
    service: ReportExportService = Depends(get_report_export_service),
) -> RoleSummaryResponse:
    try:
        totals = service.summarize_roles(db, report_filter)
    except ReportDataUnavailableError as exc:
        raise _unavailable() from exc

    return RoleSummaryResponse(
        window=report_filter.document_name,
        period_label=report_filter.period_label,
        roles=[
            RolePageTotalResponse(role=t.role, total_pages=t.total_pages, record_count=t.record_count)
            for t in totals
        ],
    )


@router.delete(
    "/retention",
    response_model=RetentionPurgeResponse,
    summary="Delete records older than the retention window",
)
def purge_expired_records(
    retention_days: int | None = Query(
        default=None,
        ge=1,
        description="Override the configured retention window (days).",
    ),
    db: Session = Depends(get_db),
    service: ReportExportService = Depends(get_report_export_service),
) -> RetentionPurgeResponse:
    days = retention_days or get_retention_settings().retention_days
    try:
        deleted = service.purge_expired(db, retention_days=days)
    except ReportDataUnavailableError as exc:
        raise _unavailable() from exc

    logger.info("Retention purge retention_days=%d deleted=%d", days, deleted)
    return RetentionPurgeResponse(retention_days=days, deleted=deleted)
