"""
app/scheduler/jobs.py

APScheduler-based background scheduler for record retention.

Schedule (UTC)
--------------
  retention_purge - daily at RETENTION_PURGE_HOUR_UTC:00, only when
                    RETENTION_PURGE_ENABLED is true

Lifecycle
----------
Call ``build_scheduler()`` once to get a configured ``BackgroundScheduler``.
Start it on app boot; shut it down gracefully on app shutdown.
The scheduler is wired into FastAPI via the ``lifespan`` context in main.py.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from app.config import RetentionSettings, get_retention_settings
from app.services.report_export_service import get_report_export_service
from db.session import SessionLocal
from reporting.errors import ReportDataUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def _session_scope() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def run_retention_purge(settings: RetentionSettings | None = None) -> int:
    """
    Delete records older than the configured retention window.

    Failures are logged and reported as zero deletions so the scheduler
    keeps running.
    """
    active = settings or get_retention_settings()
    with _session_scope() as session:
        try:
            deleted = get_report_export_service().purge_expired(
                session, retention_days=active.retention_days
            )
        except ReportDataUnavailableError:
            logger.exception("Retention purge failed retention_days=%d", active.retention_days)
            return 0
    logger.info("Retention purge job deleted=%d", deleted)
    return deleted


def build_scheduler(settings: RetentionSettings | None = None) -> BackgroundScheduler:
    """
    Build a BackgroundScheduler with the retention job registered when enabled.
    """
    active = settings or get_retention_settings()
    scheduler = BackgroundScheduler(timezone="UTC")
    if active.enabled:
        scheduler.add_job(
            run_retention_purge,
            trigger="cron",
            hour=active.run_hour_utc,
            minute=0,
            id="retention_purge",
            replace_existing=True,
            kwargs={"settings": active},
        )
    else:
        logger.info("Retention purge disabled; scheduler starts with no jobs")
    return scheduler
