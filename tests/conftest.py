"""
Shared fixtures: the March 2025 record set used across the report tests.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from reporting.filters import ReportFilter
from reporting.table_builder import ColumnLayout, SignatureBlock, TitleBlock
from reporting.types import SubmissionRecord


def make_record(
    type_of_record: str,
    period_covered: object,
    no_of_pages: int | None,
    *,
    role: str = "MSD",
    created_at: datetime | None = None,
) -> SubmissionRecord:
    return SubmissionRecord(
        type_of_record=type_of_record,
        period_covered=period_covered,
        no_of_pages=no_of_pages,
        role=role,
        created_at=created_at or datetime(2025, 3, 15, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture()
def march_records() -> list[SubmissionRecord]:
    return [
        make_record("A", "Jan 2025, Feb 2025", 10),
        make_record("A", "Mar 2025", 5, role="ESD"),
        make_record("B", "Jan 2025", 7),
    ]


@pytest.fixture()
def march_filter() -> ReportFilter:
    return ReportFilter.monthly(2025, 3)


@pytest.fixture()
def title_block() -> TitleBlock:
    return TitleBlock(
        organization_name="Civil Service Commission Regional Office VI",
        subtitle="DIGITIZATION OF RECORDS",
        period_label="For the month of March 2025",
        target_statement="Target: 100% of Identified Records",
        columns=ColumnLayout(index=True, role=False),
        signatures=SignatureBlock(
            preparer_name="JUAN DELA CRUZ",
            preparer_position="Records Officer",
            preparer_role="MSD",
            approver_name="MARIA SANTOS",
            approver_position="Director III",
        ),
    )


@pytest.fixture()
def record_factory():
    return make_record
