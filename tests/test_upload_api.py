from __future__ import annotations

import io
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from src.courier_hrms.courier_hrms.core.enums import AccountStatus, Role
from src.courier_hrms.courier_hrms.ingestion.daily_report_pipeline import DailyReportIngestion
from src.courier_hrms.courier_hrms.main import create_app
from src.courier_hrms.courier_hrms.users.service import AuthService, UserService

CSV = b"CasperFHRID,HubName,OFD,OFP,DEL,PICK\nFHR001,Lanka,20,3,18,2\nGHOST9,Lanka,5,0,5,0\nfhr002,,12,1,11,1\n"


class ReportSink:
    def __init__(self):
        self.saved = []

    def upsert(self, report):
        self.saved.append(report)


@pytest.fixture
def reports() -> ReportSink:
    return ReportSink()


@pytest.fixture
def client(monkeypatch, tmp_path, users, make_employee, notifier, reports):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("SALARY_SLIP_DIR", str(tmp_path))
    users.add(make_employee(30, password_hash=generate_password_hash("pw")))
    users.add(make_employee(31, role=Role.PENDING, status=AccountStatus.PENDING, is_account_activated=False))

    container = SimpleNamespace(
        auth_service=AuthService(users),
        user_service=UserService(users),
        notification_service=None,
        daily_report_service=None,
        advance_service=None,
        payroll_service=None,
        payslip_service=None,
        daily_report_ingestion=DailyReportIngestion(users, reports, notifier),
        payout_ingestion=None,
        payslip_ingestion=None,
    )
    app = create_app(container=container)
    return app.test_client()


def _login_as(client, role: str, user_id: int = 100) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def _upload(client, data: bytes = CSV, filename: str = "daily.csv", date: str | None = "2026-02-03", field: str = "date"):
    form = {"file": (io.BytesIO(data), filename)}
    if date is not None:
        form[field] = date
    return client.post("/api/daily-reports/upload", data=form, content_type="multipart/form-data")


def test_upload_reports_partial_success(client, reports):
    _login_as(client, "admin")

    resp = _upload(client)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["total"] == 3
    assert body["success"] == 2
    assert body["failed"] == 1
    assert body["skippedIdentifiers"] == ["GHOST9"]
    assert sorted(r.fhr_id for r in reports.saved) == ["FHR001", "FHR002"]
    assert {r.fhr_id: r.hub_name for r in reports.saved}["FHR002"] == "Varanasi Hub"


def test_upload_requires_login(client):
    assert _upload(client).status_code == 401


def test_upload_forbidden_for_employee(client):
    _login_as(client, "employee", user_id=1)

    assert _upload(client).status_code == 403


def test_upload_missing_date(client):
    _login_as(client, "admin")

    resp = _upload(client, date=None)

    assert resp.status_code == 400
    assert "date" in resp.get_json()["error"].lower()


def test_upload_rejects_wrong_extension(client):
    _login_as(client, "admin")

    assert _upload(client, filename="daily.pdf").status_code == 400


def test_upload_unreadable_sheet(client, reports):
    _login_as(client, "admin")

    resp = _upload(client, data=b"\x00\x01not a workbook", filename="daily.xlsx")

    assert resp.status_code == 400
    assert reports.saved == []


def test_login_sets_session(client):
    resp = client.post("/api/auth/login", json={"mobile": "9000000030", "password": "pw"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == 30
    with client.session_transaction() as sess:
        assert sess["role"] == "employee"


def test_login_wrong_password(client):
    resp = client.post("/api/auth/login", json={"mobile": "9000000030", "password": "nope"})

    assert resp.status_code == 401


def test_upload_accepts_report_date_field(client, reports):
    _login_as(client, "admin")

    resp = _upload(client, date="2026-02-04", field="reportDate")

    assert resp.status_code == 200
    assert {r.report_date.isoformat() for r in reports.saved} == {"2026-02-04"}


def test_hr_session_has_no_admin_access(client):
    _login_as(client, "hr", user_id=1)

    assert _upload(client).status_code == 403


def test_admin_approves_joiner(client, users):
    _login_as(client, "admin")

    listed = client.get("/api/joining-requests").get_json()["requests"]
    resp = client.put("/api/joining-requests/31/approve")

    assert [u["id"] for u in listed] == [31]
    assert resp.status_code == 200
    assert resp.get_json()["employee"]["status"] == "Active"
    assert users.get_by_id(31).role == Role.EMPLOYEE


def test_hr_cannot_deactivate_or_approve(client, users):
    _login_as(client, "hr", user_id=1)

    assert client.delete("/api/employees/2").status_code == 403
    assert client.put("/api/joining-requests/31/approve").status_code == 403
    assert users.get_by_id(2).status == AccountStatus.ACTIVE
