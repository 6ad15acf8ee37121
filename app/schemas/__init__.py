"""
app/schemas package marker.
"""

from app.schemas.report_export import (
    RetentionPurgeResponse,
    RolePageTotalResponse,
    RoleSummaryResponse,
)

__all__ = [
    "RetentionPurgeResponse",
    "RolePageTotalResponse",
    "RoleSummaryResponse",
]
