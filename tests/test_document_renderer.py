"""
tests/test_document_renderer.py

Pytest unit tests for DocumentRenderer. Workbooks are read back with openpyxl.
"""

from __future__ import annotations

import io

import pytest
from openpyxl import load_workbook

from reporting.aggregator import ReportAggregator
from reporting.errors import RenderPreconditionError
from reporting.renderer import (
    XLSX_MEDIA_TYPE,
    DocumentRenderer,
    RenderedReport,
    sheet_title,
    xlsx_file_name,
)
from reporting.table_builder import TableBuilder


@pytest.fixture()
def rendered(march_records, march_filter, title_block) -> RenderedReport:
    groups = ReportAggregator().aggregate(march_records, march_filter)
    rows = TableBuilder().build(groups, title_block)
    return DocumentRenderer().render(
        rows, "March_2025_Report", "March_2025_Report", columns=title_block.columns
    )


@pytest.fixture()
def worksheet(rendered):
    workbook = load_workbook(io.BytesIO(rendered.content))
    return workbook.active


class TestWorkbook:
    def test_file_metadata(self, rendered) -> None:
        assert rendered.file_name == "March_2025_Report.xlsx"
        assert rendered.sheet_name == "March_2025_Report"
        assert rendered.media_type == XLSX_MEDIA_TYPE

    def test_single_sheet(self, rendered) -> None:
        workbook = load_workbook(io.BytesIO(rendered.content))
        assert workbook.sheetnames == ["March_2025_Report"]

    def test_title_cells_merged_and_styled(self, worksheet) -> None:
        merged = {str(r) for r in worksheet.merged_cells.ranges}
        assert {"B1:D1", "B2:D2", "B3:D3", "B4:D4"} <= merged
        assert worksheet["B1"].value == "Civil Service Commission Regional Office VI"
        assert worksheet["B1"].font.bold
        assert worksheet["B1"].alignment.horizontal == "center"
        assert worksheet["B1"].border.left.style == "thin"
        assert worksheet["A1"].value is None

    def test_header_row(self, worksheet) -> None:
        assert [c.value for c in worksheet[6]] == ["No.", "Type of Record", "Period Covered", "No. of Pages"]
        assert worksheet["A6"].border.top.style == "thin"
        assert worksheet["A6"].font.bold

    def test_body_rows_left_aligned_not_bold(self, worksheet) -> None:
        assert worksheet["B7"].value == "A"
        assert worksheet["C8"].value == "Jan 2025"
        assert worksheet["D8"].value == 10
        assert worksheet["D10"].value == 5
        assert worksheet["D11"].value == 7
        assert worksheet["C8"].alignment.horizontal == "left"
        assert not worksheet["C8"].font.bold
        assert worksheet["C8"].border.bottom.style == "thin"

    def test_total_row(self, worksheet) -> None:
        assert worksheet["B12"].value == "TOTAL NO. OF PAGES"
        assert worksheet["D12"].value == 22
        assert worksheet["B12"].font.bold
        assert "B12:C12" in {str(r) for r in worksheet.merged_cells.ranges}

    def test_footer_unstyled(self, worksheet) -> None:
        assert worksheet["A14"].value == "Consolidated by:"
        assert worksheet["A14"].border.left.style is None
        assert not worksheet["A14"].font.bold

    def test_column_widths(self, worksheet) -> None:
        assert worksheet.column_dimensions["A"].width == 5
        assert worksheet.column_dimensions["B"].width == 50
        assert worksheet.column_dimensions["C"].width == 30
        assert worksheet.column_dimensions["D"].width == 15


class TestPreconditions:
    def test_empty_rows_rejected(self) -> None:
        with pytest.raises(RenderPreconditionError):
            DocumentRenderer().render([], "Empty", "Empty")


class TestNames:
    def test_sheet_title_is_truncated_and_cleaned(self) -> None:
        title = sheet_title("Second_Semester_2025_Report/ESD:extra_long")
        assert len(title) <= 31
        assert "/" not in title and ":" not in title

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("March_2025_Report", "March_2025_Report.xlsx"),
            ("March_2025_Report.xlsx", "March_2025_Report.xlsx"),
            ("March 2025/Report", "March_2025_Report.xlsx"),
            ("", "Report.xlsx"),
        ],
    )
    def test_xlsx_file_name(self, name: str, expected: str) -> None:
        assert xlsx_file_name(name) == expected


class TestSave:
    def test_save_overwrites_previous_export(self, rendered, tmp_path) -> None:
        stale = tmp_path / rendered.file_name
        stale.write_bytes(b"stale")
        path = rendered.save(tmp_path)
        assert path == stale
        assert path.read_bytes() == rendered.content

    def test_save_creates_directory(self, rendered, tmp_path) -> None:
        path = rendered.save(tmp_path / "exports" / "2025")
        assert path.exists()
