"""
reporting/orchestrator.py

Runs one export: ReportAggregator → TableBuilder → DocumentRenderer.

Pure over its inputs: the caller fetches the record snapshot beforehand and
receives either a RenderedReport or an EmptyResult. Nothing is kept between
calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from reporting.aggregator import EmptyResult, ReportAggregator
from reporting.filters import ReportFilter
from reporting.renderer import DocumentRenderer, RenderedReport
from reporting.table_builder import TableBuilder, TitleBlock, report_total
from reporting.types import SubmissionRecord

logger = logging.getLogger(__name__)


class ReportOrchestrator:
    """Coordinates the three pipeline stages. Contains no grouping or layout logic."""

    def __init__(
        self,
        aggregator: ReportAggregator | None = None,
        builder: TableBuilder | None = None,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        self._aggregator = aggregator or ReportAggregator()
        self._builder = builder or TableBuilder()
        self._renderer = renderer or DocumentRenderer()

    def generate(
        self,
        records: Iterable[SubmissionRecord],
        report_filter: ReportFilter,
        title_block: TitleBlock,
    ) -> RenderedReport | EmptyResult:
        """Produce the document for one window.

        The title block's period label is replaced by the window's own label
        when left blank.

        Args:
            records: Record snapshot, in display order.
            report_filter: Validated report window.
            title_block: Title lines, column layout and signatures.

        Returns:
            The rendered workbook, or EmptyResult when the window has no records.

        Raises:
            InvalidFilterError: When the window is malformed.
        """
        groups = self._aggregator.aggregate(records, report_filter)
        if isinstance(groups, EmptyResult):
            return groups

        if not title_block.period_label:
            title_block = replace(title_block, period_label=report_filter.period_label)

        rows = self._builder.build(groups, title_block)
        name = report_filter.document_name
        rendered = self._renderer.render(rows, name, name, columns=title_block.columns)

        logger.info(
            "Report generated file=%s groups=%d total_pages=%s",
            rendered.file_name,
            len(groups),
            report_total(rows),
        )
        return rendered
