"""
tests/test_report_export_service.py

Pytest unit tests for ReportExportService.

The repository is replaced with an in-memory fake so no database is needed.

Coverage
--------
- build_filter role policy (admin exclusion, division allow-list, timezone)
- title_block defaults and overrides
- export: workbook, EmptyResult, optional save to the output directory
- Store failures surfaced as ReportDataUnavailableError
- purge_expired: cutoff, commit, rollback on failure
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.config import ReportSettings, SignatorySettings
from app.services import report_export_service as service_module
from app.services.report_export_service import ReportExportService
from db.repositories.errors import RecordQueryError
from reporting.aggregator import EmptyResult
from reporting.errors import InvalidFilterError, ReportDataUnavailableError
from reporting.renderer import RenderedReport


class _FakeSession:
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


def _install_repository(monkeypatch, records=(), *, fail=False, deleted=0):
    calls: dict[str, object] = {}

    class _FakeRepository:
        def __init__(self, session) -> None:
            self._session = session

        def list_created_between(self, start, end):
            calls["bounds"] = (start, end)
            if fail:
                raise RecordQueryError("boom")
            return list(records)

        def delete_created_before(self, cutoff):
            calls["cutoff"] = cutoff
            if fail:
                raise RecordQueryError("boom")
            return deleted

    monkeypatch.setattr(service_module, "SubmissionRecordRepository", _FakeRepository)
    return calls


@pytest.fixture()
def service() -> ReportExportService:
    return ReportExportService(
        report_settings=ReportSettings(),
        signatory_settings=SignatorySettings(),
    )


# ---------------------------------------------------------------------------
# build_filter
# ---------------------------------------------------------------------------


class TestBuildFilter:
    def test_admin_excluded_by_default(self, service) -> None:
        report_filter = service.build_filter(mode="monthly", year=2025, month=3)
        assert report_filter.excluded_roles == frozenset({"ADMIN"})
        assert report_filter.included_roles == frozenset()

    def test_admin_exclusion_can_be_disabled(self, service) -> None:
        report_filter = service.build_filter(mode="yearly", year=2025, exclude_admin=False)
        assert report_filter.excluded_roles == frozenset()

    def test_divisions_only(self, service) -> None:
        report_filter = service.build_filter(mode="yearly", year=2025, divisions_only=True)
        assert report_filter.included_roles == frozenset({"MSD", "ESD", "LSD"})

    def test_configured_timezone(self) -> None:
        service = ReportExportService(
            report_settings=ReportSettings(timezone="Asia/Manila"),
            signatory_settings=SignatorySettings(),
        )
        report_filter = service.build_filter(mode="yearly", year=2025)
        assert str(report_filter.timezone) == "Asia/Manila"

    def test_invalid_window(self, service) -> None:
        with pytest.raises(InvalidFilterError):
            service.build_filter(mode="semestral", year=2025, semester=5)

    def test_admin_role_report_rejected(self, service) -> None:
        with pytest.raises(InvalidFilterError):
            service.build_filter(mode="yearly", year=2025, role="admin")


# ---------------------------------------------------------------------------
# title_block
# ---------------------------------------------------------------------------


class TestTitleBlock:
    def test_defaults(self, service) -> None:
        block = service.title_block(service.build_filter(mode="monthly", year=2025, month=3))
        assert block.lines == [
            "Civil Service Commission Regional Office VI",
            "DIGITIZATION OF RECORDS",
            "For the month of March 2025",
            "Target: 100% of Identified Records",
        ]
        assert block.columns.index is True
        assert block.columns.role is False
        assert block.signatures.approver_position == "Director III"

    def test_overrides(self, service) -> None:
        block = service.title_block(
            service.build_filter(mode="yearly", year=2025), include_index=False, include_role=True
        )
        assert block.columns.keys == ("type_of_record", "period_covered", "no_of_pages", "role")

    def test_target_statement_disabled(self) -> None:
        service = ReportExportService(
            report_settings=ReportSettings(target_statement=None),
            signatory_settings=SignatorySettings(),
        )
        block = service.title_block(service.build_filter(mode="yearly", year=2025))
        assert len(block.lines) == 3


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


class TestExport:
    def test_returns_workbook(self, service, monkeypatch, march_records) -> None:
        calls = _install_repository(monkeypatch, march_records)
        report_filter = service.build_filter(mode="monthly", year=2025, month=3)

        result = service.export(_FakeSession(), report_filter)

        assert isinstance(result, RenderedReport)
        assert result.file_name == "March_2025_Report.xlsx"
        assert calls["bounds"] == report_filter.bounds()

    def test_empty_window(self, service, monkeypatch) -> None:
        _install_repository(monkeypatch, [])
        result = service.export(_FakeSession(), service.build_filter(mode="monthly", year=2025, month=3))
        assert isinstance(result, EmptyResult)

    def test_admin_records_never_exported(self, service, monkeypatch, record_factory) -> None:
        _install_repository(monkeypatch, [record_factory("A", "Jan", 1, role="ADMIN")])
        result = service.export(_FakeSession(), service.build_filter(mode="monthly", year=2025, month=3))
        assert isinstance(result, EmptyResult)

    def test_saves_to_output_dir(self, monkeypatch, march_records, tmp_path) -> None:
        _install_repository(monkeypatch, march_records)
        service = ReportExportService(
            report_settings=ReportSettings(output_dir=str(tmp_path)),
            signatory_settings=SignatorySettings(),
        )
        report_filter = service.build_filter(mode="monthly", year=2025, month=3)

        first = service.export(_FakeSession(), report_filter)
        service.export(_FakeSession(), report_filter)

        saved = list(tmp_path.iterdir())
        assert [p.name for p in saved] == ["March_2025_Report.xlsx"]
        assert saved[0].read_bytes() == first.content

    def test_store_failure(self, service, monkeypatch) -> None:
        _install_repository(monkeypatch, fail=True)
        with pytest.raises(ReportDataUnavailableError):
            service.export(_FakeSession(), service.build_filter(mode="yearly", year=2025))

    def test_summarize_roles_orders_divisions(self, service, monkeypatch, march_records) -> None:
        _install_repository(monkeypatch, march_records)
        totals = service.summarize_roles(
            _FakeSession(), service.build_filter(mode="monthly", year=2025, month=3)
        )
        assert [(t.role, t.total_pages) for t in totals] == [("MSD", 17), ("ESD", 5), ("LSD", 0)]


# ---------------------------------------------------------------------------
# purge_expired
# ---------------------------------------------------------------------------


class TestPurgeExpired:
    def test_deletes_and_commits(self, service, monkeypatch) -> None:
        calls = _install_repository(monkeypatch, deleted=4)
        session = _FakeSession()
        now = datetime(2026, 1, 31, tzinfo=timezone.utc)

        deleted = service.purge_expired(session, retention_days=30, now=now)

        assert deleted == 4
        assert calls["cutoff"] == now - timedelta(days=30)
        assert session.commits == 1
        assert session.rollbacks == 0

    def test_failure_rolls_back(self, service, monkeypatch) -> None:
        _install_repository(monkeypatch, fail=True)
        session = _FakeSession()
        with pytest.raises(ReportDataUnavailableError):
            service.purge_expired(session, retention_days=30)
        assert session.rollbacks == 1
        assert session.commits == 0

    def test_rejects_non_positive_window(self, service) -> None:
        with pytest.raises(ValueError):
            service.purge_expired(_FakeSession(), retention_days=0)
