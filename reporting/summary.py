"""
reporting/summary.py

Per-role page totals for a report window (dashboard chart data).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from reporting.filters import ReportFilter
from reporting.normalizer import page_count_of
from reporting.types import SubmissionRecord, sum_pages


@dataclass(frozen=True)
class RolePageTotal:
    role: str
    total_pages: int
    record_count: int


def summarize_pages_by_role(
    records: Iterable[SubmissionRecord],
    report_filter: ReportFilter,
    roles: Sequence[str] = (),
) -> list[RolePageTotal]:
    """
    Total the numeric page counts of each role inside *report_filter*.

    Roles listed in *roles* always appear, in that order, even with zero
    records, unless *report_filter* rejects them; any other matching role
    follows in first-seen order. Records without a page count are counted
    but add nothing to the total.
    """
    report_filter.validate()
    listed = dict.fromkeys(r.strip().upper() for r in roles if r.strip())
    order: list[str] = [role for role in listed if report_filter.accepts_role(role)]
    counts: dict[str, list] = {role: [] for role in order}

    for record in records:
        if not report_filter.matches(record):
            continue
        role = (record.role or "").strip().upper()
        if role not in counts:
            counts[role] = []
            order.append(role)
        counts[role].append(page_count_of(record.no_of_pages))

    return [
        RolePageTotal(role=role, total_pages=sum_pages(counts[role]), record_count=len(counts[role]))
        for role in order
    ]
