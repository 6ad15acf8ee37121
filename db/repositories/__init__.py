"""
Repository layer exports.
"""

from db.repositories.errors import RecordQueryError, RepositoryError
from db.repositories.submission_record_repository import SubmissionRecordRepository

__all__ = [
    "SubmissionRecordRepository",
    "RepositoryError",
    "RecordQueryError",
]
