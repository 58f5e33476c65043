from __future__ import annotations

from dataclasses import replace
from datetime import date

from src.courier_hrms.courier_hrms.core.constants import DAILY_REPORT_TITLE
from src.courier_hrms.courier_hrms.core.exceptions import PersistenceError
from src.courier_hrms.courier_hrms.ingestion.daily_report_pipeline import DailyReportIngestion
from src.courier_hrms.courier_hrms.reports.model import DailyReport


class InMemoryDailyReports:
    def __init__(self, fail_for: set[str] | None = None):
        self.by_key: dict[tuple[str, date], DailyReport] = {}
        self._fail_for = fail_for or set()
        self._id = 0

    def upsert(self, report: DailyReport) -> None:
        if report.fhr_id in self._fail_for:
            raise PersistenceError("deadlock")
        key = (report.fhr_id, report.report_date)
        existing = self.by_key.get(key)
        if existing:
            self.by_key[key] = replace(report, report_id=existing.report_id)
        else:
            self._id += 1
            self.by_key[key] = replace(report, report_id=self._id)


DAY = date(2026, 2, 3)


def _rows(*fhr_ids, delivered=10):
    return [{"CasperFHRID": f, "HubName": "Lanka", "OFD": 20, "OFP": 3, "DEL": delivered, "PICK": 2} for f in fhr_ids]


def test_five_rows_with_unknown_third_row(users, notifier):
    reports = InMemoryDailyReports()
    pipeline = DailyReportIngestion(users, reports, notifier)

    result = pipeline.ingest(_rows("FHR001", "FHR002", "GHOST9", "FHR004", "FHR005"), report_date=DAY)

    assert (result.total, result.success, result.failed) == (5, 4, 1)
    assert result.skipped_identifiers == ["GHOST9"]
    assert sorted(k[0] for k in reports.by_key) == ["FHR001", "FHR002", "FHR004", "FHR005"]
    assert result.to_dict() == {"total": 5, "success": 4, "failed": 1, "skippedIdentifiers": ["GHOST9"]}


def test_reupload_same_day_overwrites(users, notifier):
    reports = InMemoryDailyReports()
    pipeline = DailyReportIngestion(users, reports, notifier)

    pipeline.ingest(_rows("FHR001", delivered=10), report_date=DAY)
    pipeline.ingest(_rows("FHR001", delivered=17), report_date=DAY)

    assert len(reports.by_key) == 1
    assert reports.by_key[("FHR001", DAY)].delivered == 17


def test_duplicate_rows_in_one_sheet_last_write_wins(users):
    reports = InMemoryDailyReports()
    rows = _rows("FHR001", delivered=5) + _rows("fhr001", delivered=9)

    result = DailyReportIngestion(users, reports).ingest(rows, report_date=DAY)

    assert result.success == 2
    assert len(reports.by_key) == 1
    assert reports.by_key[("FHR001", DAY)].delivered == 9


def test_lowercase_identity_is_stored_under_canonical_fhr_id(users):
    reports = InMemoryDailyReports()

    DailyReportIngestion(users, reports).ingest([{"fhrid": "fhr002", "DEL": 4}], report_date=DAY)

    stored = reports.by_key[("FHR002", DAY)]
    assert stored.user_id == 2
    assert stored.hub_name == "Varanasi Hub"
    assert stored.ofd == 0


def test_identity_is_never_substring_matched(users):
    reports = InMemoryDailyReports()

    result = DailyReportIngestion(users, reports).ingest([{"FHRID": "FHR00"}], report_date=DAY)

    assert result.failed == 1
    assert result.skipped_identifiers == ["FHR00"]


def test_blank_identity_fails_without_skipped_entry(users):
    result = DailyReportIngestion(users, InMemoryDailyReports()).ingest(
        [{"FHRID": "   ", "DEL": 3}, {"Name": "no id column"}], report_date=DAY
    )

    assert (result.success, result.failed) == (0, 2)
    assert result.skipped_identifiers == []


def test_notification_failure_never_fails_rows(users, raising_notifier):
    reports = InMemoryDailyReports()
    pipeline = DailyReportIngestion(users, reports, raising_notifier)

    result = pipeline.ingest(_rows("FHR001", "FHR002", "FHR003"), report_date=DAY)

    assert result.success == 3
    assert result.failed == 0
    assert raising_notifier.calls == 3
    assert len(reports.by_key) == 3


def test_employee_is_notified_with_date_and_counts(users, notifier):
    DailyReportIngestion(users, InMemoryDailyReports(), notifier).ingest(_rows("FHR003", delivered=18), report_date=DAY)

    assert len(notifier.sent) == 1
    user_id, title, message = notifier.sent[0]
    assert user_id == 3
    assert title == DAILY_REPORT_TITLE
    assert "03 Feb 2026" in message
    assert "18" in message and "20" in message


def test_storage_error_fails_only_that_row(users, notifier):
    reports = InMemoryDailyReports(fail_for={"FHR002"})

    result = DailyReportIngestion(users, reports, notifier).ingest(_rows("FHR001", "FHR002", "FHR003"), report_date=DAY)

    assert (result.success, result.failed) == (2, 1)
    assert result.skipped_identifiers == []
    assert [u for u, _, _ in notifier.sent] == [1, 3]
