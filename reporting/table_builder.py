"""
reporting/table_builder.py

Turns aggregated type groups into the ordered rows of a report document.

Row order
---------
    title rows (2–4, merged from the second column to the last)
    blank spacer
    header row
    per group: a single row, or a main row followed by continuation rows
    total row
    blank spacer + signature block

Cells left as ``None`` are "not populated" and receive no styling; blank
strings are populated cells that render empty.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from reporting.types import Row, RowKind, TypeGroup, sum_pages

TOTAL_LABEL = "TOTAL NO. OF PAGES"

COLUMN_INDEX = "index"
COLUMN_TYPE = "type_of_record"
COLUMN_PERIOD = "period_covered"
COLUMN_PAGES = "no_of_pages"
COLUMN_ROLE = "role"

_HEADINGS: dict[str, str] = {
    COLUMN_INDEX: "No.",
    COLUMN_TYPE: "Type of Record",
    COLUMN_PERIOD: "Period Covered",
    COLUMN_PAGES: "No. of Pages",
    COLUMN_ROLE: "Role",
}


@dataclass(frozen=True)
class ColumnLayout:
    """Which optional columns a report variant carries."""

    index: bool = True
    role: bool = False

    @property
    def keys(self) -> tuple[str, ...]:
        keys: list[str] = []
        if self.index:
            keys.append(COLUMN_INDEX)
        keys.extend((COLUMN_TYPE, COLUMN_PERIOD, COLUMN_PAGES))
        if self.role:
            keys.append(COLUMN_ROLE)
        return tuple(keys)

    @property
    def headings(self) -> tuple[str, ...]:
        return tuple(_HEADINGS[key] for key in self.keys)

    def position(self, key: str) -> int:
        return self.keys.index(key)

    def __len__(self) -> int:
        return len(self.keys)


@dataclass(frozen=True)
class SignatureBlock:
    """Static closing lines of a report."""

    prepared_label: str = "Consolidated by:"
    preparer_name: str = ""
    preparer_position: str = ""
    preparer_role: str = ""
    noted_label: str = "Noted by:"
    approver_name: str = ""
    approver_position: str = ""

    def lines(self) -> list[str | None]:
        """Footer lines in order; ``None`` marks a blank line."""
        return [
            self.prepared_label,
            None,
            self.preparer_name,
            self.preparer_position,
            self.preparer_role,
            None,
            self.noted_label,
            self.approver_name,
            self.approver_position,
        ]


@dataclass(frozen=True)
class TitleBlock:
    """Header text and layout of one report."""

    organization_name: str
    subtitle: str
    period_label: str
    target_statement: str | None = None
    columns: ColumnLayout = field(default_factory=ColumnLayout)
    signatures: SignatureBlock = field(default_factory=SignatureBlock)

    @property
    def lines(self) -> list[str]:
        candidates = (self.organization_name, self.subtitle, self.period_label, self.target_statement)
        return [line for line in candidates if line]


class TableBuilder:
    """Builds the abstract row sequence of a report."""

    def build(self, groups: Mapping[str, TypeGroup], title_block: TitleBlock) -> list[Row]:
        """
        Lay out *groups* under *title_block*.

        Parameters
        ----------
        groups:      Insertion-ordered type groups from the aggregator.
        title_block: Title text, column layout and signatures.

        Raises
        ------
        ValueError: When the title block has fewer than two lines.
        """
        columns = title_block.columns
        rows: list[Row] = []
        rows.extend(self._title_rows(title_block))
        rows.append(Row(cells=(), kind=RowKind.SPACER))
        rows.append(Row(cells=columns.headings, kind=RowKind.HEADER))

        for number, group in enumerate(groups.values(), start=1):
            rows.extend(self._group_rows(number, group, columns))

        rows.append(self._total_row(groups, columns))
        rows.append(Row(cells=(), kind=RowKind.SPACER))
        rows.extend(self._signature_rows(title_block.signatures))
        return rows

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _title_rows(self, title_block: TitleBlock) -> list[Row]:
        lines = title_block.lines
        if not 2 <= len(lines) <= 4:
            raise ValueError(f"A title block needs 2 to 4 lines, got {len(lines)}.")
        width = len(title_block.columns)
        span = ((1, width - 1),)
        rows = []
        for line in lines:
            cells: list[Any] = [None] * width
            cells[1] = line
            rows.append(Row(cells=tuple(cells), kind=RowKind.TITLE, merge_spans=span))
        return rows

    def _group_rows(self, number: int, group: TypeGroup, columns: ColumnLayout) -> list[Row]:
        entries = group.entries
        roles = ", ".join(group.roles)

        if len(entries) == 1:
            entry = entries[0]
            return [
                self._body_row(
                    columns,
                    index=number,
                    type_of_record=group.type_of_record,
                    period=entry.period,
                    pages=entry.pages.display(),
                    role=roles,
                )
            ]

        rows = [
            self._body_row(
                columns,
                index=number,
                type_of_record=group.type_of_record,
                period="",
                pages="",
                role=roles,
            )
        ]
        for entry in entries:
            rows.append(
                self._body_row(
                    columns,
                    index="",
                    type_of_record="",
                    period=entry.period,
                    pages=entry.pages.display() if entry.leading else "",
                    role="",
                )
            )
        return rows

    def _body_row(self, columns: ColumnLayout, **values: Any) -> Row:
        by_key = {
            COLUMN_INDEX: values["index"],
            COLUMN_TYPE: values["type_of_record"],
            COLUMN_PERIOD: values["period"],
            COLUMN_PAGES: values["pages"],
            COLUMN_ROLE: values["role"],
        }
        return Row(cells=tuple(by_key[key] for key in columns.keys), kind=RowKind.BODY)

    def _total_row(self, groups: Mapping[str, TypeGroup], columns: ColumnLayout) -> Row:
        total = sum_pages(
            entry.pages for group in groups.values() for entry in group.entries if entry.leading
        )
        cells: list[Any] = [""] * len(columns)
        type_col = columns.position(COLUMN_TYPE)
        period_col = columns.position(COLUMN_PERIOD)
        cells[type_col] = TOTAL_LABEL
        cells[columns.position(COLUMN_PAGES)] = total
        return Row(cells=tuple(cells), kind=RowKind.TOTAL, merge_spans=((type_col, period_col),))

    def _signature_rows(self, signatures: SignatureBlock) -> list[Row]:
        rows = []
        for line in signatures.lines():
            if line is None:
                rows.append(Row(cells=(), kind=RowKind.SPACER))
            else:
                rows.append(Row(cells=(line,), kind=RowKind.FOOTER))
        return rows


def report_total(rows: list[Row]) -> int | None:
    """Return the value of the total row in *rows*, if any."""
    for row in rows:
        if row.is_total:
            return next(cell for cell in reversed(row.cells) if isinstance(cell, int))
    return None
