"""
reporting/aggregator.py

Filters a record snapshot by a report window and groups the survivors by
``type_of_record``.

Ordering contract
-----------------
Records are consumed in the order given. A group is created the first time
its type is seen, so the group order (and with it the document's row order)
is the first-occurrence order of each type among the filtered records.
Identical input always yields identical output.

Empty windows
-------------
A window with no matching records is not an error: ``aggregate`` returns an
:class:`EmptyResult` carrying the user-facing message instead of a mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from reporting.filters import ReportFilter
from reporting.normalizer import RecordNormalizer
from reporting.types import SubmissionRecord, TypeGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptyResult:
    """No record matched the window."""

    report_filter: ReportFilter

    @property
    def message(self) -> str:
        return f"No reports exist for {self.report_filter.window_label}."


class ReportAggregator:
    """
    Window filtering and type grouping.

    Stateless; one instance may serve any number of calls.
    """

    def __init__(self, normalizer: RecordNormalizer | None = None) -> None:
        self._normalizer = normalizer or RecordNormalizer()

    def select(
        self,
        records: Iterable[SubmissionRecord],
        report_filter: ReportFilter,
    ) -> list[SubmissionRecord]:
        """Return the records inside *report_filter*, in their original order."""
        report_filter.validate()
        return [record for record in records if report_filter.matches(record)]

    def aggregate(
        self,
        records: Iterable[SubmissionRecord],
        report_filter: ReportFilter,
    ) -> dict[str, TypeGroup] | EmptyResult:
        """
        Group the records of one window by type.

        Parameters
        ----------
        records:       Snapshot of records, in the order rows should appear.
        report_filter: Window and role predicates.

        Returns
        -------
        dict[str, TypeGroup] | EmptyResult
            Insertion-ordered groups keyed by ``type_of_record``, or
            ``EmptyResult`` when nothing matched.

        Raises
        ------
        InvalidFilterError: When *report_filter* is malformed; no record is scanned.
        """
        selected = self.select(records, report_filter)
        if not selected:
            logger.info("No records matched window=%s", report_filter.document_name)
            return EmptyResult(report_filter)

        groups: dict[str, TypeGroup] = {}
        for record in selected:
            group = groups.get(record.type_of_record)
            if group is None:
                group = TypeGroup(type_of_record=record.type_of_record)
                groups[record.type_of_record] = group
            group.add(self._normalizer.normalize(record), record.role)

        logger.debug(
            "Aggregated window=%s records=%d groups=%d",
            report_filter.document_name,
            len(selected),
            len(groups),
        )
        return groups


def aggregate(
    records: Iterable[SubmissionRecord],
    report_filter: ReportFilter,
) -> dict[str, TypeGroup] | EmptyResult:
    """Module-level shortcut for :meth:`ReportAggregator.aggregate`."""
    return ReportAggregator().aggregate(records, report_filter)
