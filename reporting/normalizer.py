"""
reporting/normalizer.py

Splits a record's packed ``period_covered`` field into period entries.
"""

from __future__ import annotations

import logging

from reporting.types import MISSING_PAGES, PageCount, PageNumber, PeriodEntry, SubmissionRecord

logger = logging.getLogger(__name__)

PERIOD_SEPARATOR = ","


def page_count_of(value: object) -> PageCount:
    """Map a raw ``no_of_pages`` value to a PageCount; anything but an int is missing."""
    if isinstance(value, int) and not isinstance(value, bool):
        return PageNumber(value)
    return MISSING_PAGES


class RecordNormalizer:
    """Stateless splitter for multi-period records.

    Entry count always equals the number of comma-separated segments (empty
    segments included), with a floor of one entry for an empty field. Only
    the first entry carries the record's page count.
    """

    def split_periods(self, period_covered: object) -> list[str]:
        """Return the trimmed period labels of *period_covered*.

        Args:
            period_covered: Raw field value. ``None``, ``""`` and non-string
                values all yield ``[""]``.

        Returns:
            A non-empty list of labels in original order.
        """
        if not isinstance(period_covered, str):
            if period_covered is not None:
                logger.debug(
                    "Non-string period_covered %r treated as empty", type(period_covered).__name__
                )
            return [""]
        if not period_covered:
            return [""]
        return [segment.strip() for segment in period_covered.split(PERIOD_SEPARATOR)]

    def normalize(self, record: SubmissionRecord) -> list[PeriodEntry]:
        """Produce the ordered period entries of one record.

        Args:
            record: The record to split.

        Returns:
            One PeriodEntry per segment. The first carries the record's page
            count (or the missing marker); the rest carry the missing marker
            with ``leading=False``.
        """
        periods = self.split_periods(record.period_covered)
        pages = page_count_of(record.no_of_pages)
        entries = [PeriodEntry(period=periods[0], pages=pages, leading=True)]
        entries.extend(
            PeriodEntry(period=period, pages=MISSING_PAGES, leading=False)
            for period in periods[1:]
        )
        return entries


def normalize(record: SubmissionRecord) -> list[PeriodEntry]:
    """Module-level shortcut for :meth:`RecordNormalizer.normalize`."""
    return _NORMALIZER.normalize(record)


_NORMALIZER = RecordNormalizer()
