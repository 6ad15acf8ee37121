"""
reporting/renderer.py

Serializes report rows into a single-sheet ``.xlsx`` workbook.

Styling contract
----------------
- Populated cells of title, header, body and total rows get a thin border.
- Title, header and total rows are bold and centered; body rows are left-aligned.
- Spacer and footer rows are written unstyled.
- Merge spans are applied after the top-left cell is styled so the merged
  region inherits its border.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from reporting.errors import RenderPreconditionError
from reporting.table_builder import (
    COLUMN_INDEX,
    COLUMN_PAGES,
    COLUMN_PERIOD,
    COLUMN_ROLE,
    COLUMN_TYPE,
    ColumnLayout,
)
from reporting.types import Row

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMN_WIDTHS: dict[str, float] = {
    COLUMN_INDEX: 5,
    COLUMN_TYPE: 50,
    COLUMN_PERIOD: 30,
    COLUMN_PAGES: 15,
    COLUMN_ROLE: 12,
}

_SHEET_TITLE_MAX = 31
_SHEET_TITLE_FORBIDDEN = re.compile(r"[\[\]:*?/\\]")
_FILE_NAME_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]+")

_THIN = Side(style="thin")
BORDER_THIN = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
ALIGN_CENTER = Alignment(horizontal="center", vertical="center")
ALIGN_LEFT = Alignment(horizontal="left", vertical="center")
FONT_BOLD = Font(bold=True)


@dataclass(frozen=True)
class RenderedReport:
    """A finished workbook held in memory."""

    file_name: str
    sheet_name: str
    content: bytes
    media_type: str = XLSX_MEDIA_TYPE

    def save(self, directory: str | Path) -> Path:
        """Write the workbook into *directory*, replacing a previous export of the same name."""
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / self.file_name
        target.write_bytes(self.content)
        return target


def sheet_title(name: str) -> str:
    """Excel-safe worksheet title derived from *name*."""
    return _SHEET_TITLE_FORBIDDEN.sub("_", name)[:_SHEET_TITLE_MAX]


def xlsx_file_name(name: str) -> str:
    """Filesystem-safe ``.xlsx`` file name derived from *name*."""
    stem = _FILE_NAME_UNSAFE.sub("_", name).strip("_") or "Report"
    return stem if stem.lower().endswith(".xlsx") else f"{stem}.xlsx"


class DocumentRenderer:
    """Renders abstract rows with openpyxl."""

    def render(
        self,
        rows: Sequence[Row],
        sheet_name: str,
        file_name: str,
        *,
        columns: ColumnLayout | None = None,
    ) -> RenderedReport:
        """
        Render *rows* into an in-memory workbook.

        Parameters
        ----------
        rows:       Output of :class:`reporting.table_builder.TableBuilder`.
        sheet_name: Worksheet title (truncated to Excel's limit).
        file_name:  Document name; ``.xlsx`` is appended when missing.
        columns:    Layout used for the fixed column widths.

        Raises
        ------
        RenderPreconditionError: When *rows* is empty.
        """
        if not rows:
            raise RenderPreconditionError(
                "Nothing to render; empty report windows must be handled before rendering."
            )

        layout = columns or ColumnLayout()
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = sheet_title(sheet_name)

        for row_number, row in enumerate(rows, start=1):
            for col_number, value in enumerate(row.cells, start=1):
                if value is None:
                    continue
                cell = worksheet.cell(row=row_number, column=col_number, value=value)
                if row.bordered:
                    cell.border = BORDER_THIN
                    cell.alignment = ALIGN_CENTER if row.centered else ALIGN_LEFT
                if row.bold:
                    cell.font = FONT_BOLD
            for start_col, end_col in row.merge_spans:
                if end_col <= start_col:
                    continue
                worksheet.merge_cells(
                    start_row=row_number,
                    start_column=start_col + 1,
                    end_row=row_number,
                    end_column=end_col + 1,
                )

        for position, key in enumerate(layout.keys, start=1):
            worksheet.column_dimensions[get_column_letter(position)].width = COLUMN_WIDTHS[key]

        buffer = io.BytesIO()
        workbook.save(buffer)
        rendered = RenderedReport(
            file_name=xlsx_file_name(file_name),
            sheet_name=worksheet.title,
            content=buffer.getvalue(),
        )
        logger.debug("Rendered %s rows=%d bytes=%d", rendered.file_name, len(rows), len(rendered.content))
        return rendered
