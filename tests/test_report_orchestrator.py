"""
tests/test_report_orchestrator.py

End-to-end pipeline tests: records in, workbook (or EmptyResult) out.
"""

from __future__ import annotations

import io
from dataclasses import replace

from openpyxl import load_workbook

from reporting.aggregator import EmptyResult
from reporting.filters import ReportFilter
from reporting.orchestrator import ReportOrchestrator
from reporting.renderer import RenderedReport


def test_worked_example(march_records, march_filter, title_block) -> None:
    result = ReportOrchestrator().generate(march_records, march_filter, title_block)

    assert isinstance(result, RenderedReport)
    assert result.file_name == "March_2025_Report.xlsx"
    sheet = load_workbook(io.BytesIO(result.content)).active
    assert sheet.title == "March_2025_Report"
    assert sheet["B7"].value == "A"
    assert sheet["B11"].value == "B"
    assert sheet["D12"].value == 22


def test_empty_window_renders_nothing(march_records, title_block) -> None:
    result = ReportOrchestrator().generate(march_records, ReportFilter.yearly(2030), title_block)
    assert isinstance(result, EmptyResult)
    assert result.message == "No reports exist for the year 2030."


def test_blank_period_label_filled_from_window(march_records, title_block) -> None:
    semester = ReportFilter.semestral(2025, 1)
    result = ReportOrchestrator().generate(march_records, semester, replace(title_block, period_label=""))
    sheet = load_workbook(io.BytesIO(result.content)).active
    assert sheet["B3"].value == "For the period January - June 2025"
    assert result.file_name == "First_Semester_2025_Report.xlsx"


def test_role_filtered_report_name(march_records, title_block) -> None:
    result = ReportOrchestrator().generate(
        march_records, ReportFilter.monthly(2025, 3, role="esd"), title_block
    )
    assert result.file_name == "ESD_March_2025_Report.xlsx"
    sheet = load_workbook(io.BytesIO(result.content)).active
    # single group, single entry: header row 6, body row 7, total row 8
    assert sheet["C7"].value == "Mar 2025"
    assert sheet["D8"].value == 5


def test_repeated_exports_share_name(march_records, march_filter, title_block) -> None:
    orchestrator = ReportOrchestrator()
    first = orchestrator.generate(march_records, march_filter, title_block)
    second = orchestrator.generate(march_records, march_filter, title_block)
    assert first.file_name == second.file_name
