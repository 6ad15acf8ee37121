"""
Repository-layer exceptions.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for repository failures."""


class RecordQueryError(RepositoryError):
    """Raised when reading or deleting submitted records fails."""
