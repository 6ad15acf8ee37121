"""
app/services package marker.
"""

from app.services.report_export_service import (
    ReportExportService,
    get_report_export_service,
)

__all__ = [
    "ReportExportService",
    "get_report_export_service",
]
