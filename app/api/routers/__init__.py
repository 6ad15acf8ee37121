"""
app/api/routers package marker.
"""

from app.api.routers.report_export_router import router as report_export_router

__all__ = [
    "report_export_router",
]
