"""
app/schemas/report_export.py

Response schemas for report endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RolePageTotalResponse(BaseModel):
    """
    Page total for one division role.
    """

    role: str
    total_pages: int = Field(..., ge=0)
    record_count: int = Field(..., ge=0)


class RoleSummaryResponse(BaseModel):
    """
    Per-role page totals for one report window.
    """

    window: str
    period_label: str
    roles: list[RolePageTotalResponse] = Field(default_factory=list)


class RetentionPurgeResponse(BaseModel):
    """
    Outcome of an age-based purge.
    """

    retention_days: int = Field(..., ge=1)
    deleted: int = Field(..., ge=0)
