"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.submission_record import SubmissionRecordRow
from db.models.user import User

__all__ = [
    "SubmissionRecordRow",
    "User",
]
