"""
reporting/types.py

Value types shared by the report pipeline.

    SubmissionRecord  – read-only snapshot of one submitted page-count entry
    PageCount         – PageNumber(n) | MissingPages, never mixed with strings
    PeriodEntry       – one sub-period of a record
    TypeGroup         – all entries accumulated under one record type
    Row               – one abstract output row of the tabular document

None of these outlive a single export call.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union


# ---------------------------------------------------------------------------
# Input record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SubmissionRecord:
    """
    One submitted record as read from the store.

    ``period_covered`` is typed loosely on purpose: rows coming from the store
    may carry ``None`` or a malformed value, which the normalizer recovers from.
    """

    type_of_record: str
    period_covered: Any
    no_of_pages: int | None
    role: str
    created_at: datetime
    owner_id: Any = None


# ---------------------------------------------------------------------------
# Page counts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageNumber:
    """A known page count."""

    value: int

    def display(self) -> int:
        return self.value


@dataclass(frozen=True)
class MissingPages:
    """No page count applies. Distinct from zero."""

    def display(self) -> str:
        return "N/A"


MISSING_PAGES = MissingPages()

PageCount = Union[PageNumber, MissingPages]


def sum_pages(counts: Any) -> int:
    """Sum the numeric page counts in *counts*; missing markers are skipped."""
    return sum(c.value for c in counts if isinstance(c, PageNumber))


# ---------------------------------------------------------------------------
# Grouped entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PeriodEntry:
    """
    One sub-period of a record.

    ``leading`` marks the first entry of its source record, the only one that
    carries the record's page count.
    """

    period: str
    pages: PageCount
    leading: bool = True


@dataclass
class TypeGroup:
    """Entries contributed by every record of one type, in encounter order."""

    type_of_record: str
    entries: list[PeriodEntry] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    record_count: int = 0

    def add(self, entries: list[PeriodEntry], role: str | None = None) -> None:
        self.entries.extend(entries)
        self.record_count += 1
        if role and role not in self.roles:
            self.roles.append(role)

    @property
    def total_pages(self) -> int:
        return sum_pages(e.pages for e in self.entries)


# ---------------------------------------------------------------------------
# Abstract rows
# ---------------------------------------------------------------------------


class RowKind(str, enum.Enum):
    TITLE = "title"
    SPACER = "spacer"
    HEADER = "header"
    BODY = "body"
    TOTAL = "total"
    FOOTER = "footer"


_BOLD_KINDS = frozenset({RowKind.TITLE, RowKind.HEADER, RowKind.TOTAL})
_BORDERED_KINDS = frozenset({RowKind.TITLE, RowKind.HEADER, RowKind.BODY, RowKind.TOTAL})


@dataclass(frozen=True)
class Row:
    """
    One output row.

    ``merge_spans`` holds zero-based, inclusive ``(start_col, end_col)`` pairs
    that the renderer turns into single merged cells on this row.
    """

    cells: tuple[Any, ...]
    kind: RowKind
    merge_spans: tuple[tuple[int, int], ...] = ()

    @property
    def is_header(self) -> bool:
        return self.kind is RowKind.HEADER

    @property
    def is_total(self) -> bool:
        return self.kind is RowKind.TOTAL

    @property
    def bold(self) -> bool:
        return self.kind in _BOLD_KINDS

    @property
    def centered(self) -> bool:
        return self.kind in _BOLD_KINDS

    @property
    def bordered(self) -> bool:
        return self.kind in _BORDERED_KINDS
