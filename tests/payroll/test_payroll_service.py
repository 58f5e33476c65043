from __future__ import annotations

import io
from dataclasses import replace
from datetime import date, datetime, timedelta

import pandas as pd
import pytest

from src.courier_hrms.courier_hrms.advances.model import AdvanceRequest
from src.courier_hrms.courier_hrms.core.constants import PAYSLIP_GENERATED_TITLE, SALARY_PUBLISHED_TITLE
from src.courier_hrms.courier_hrms.core.enums import PayoutStatus, RequestStatus
from src.courier_hrms.courier_hrms.core.exceptions import NotFoundError, ValidationError
from src.courier_hrms.courier_hrms.payroll.model import SalaryStructure
from src.courier_hrms.courier_hrms.payroll.service import PayrollService
from src.courier_hrms.courier_hrms.reports.model import DailyReport


class InMemoryReports:
    def __init__(self, reports=()):
        self.reports = list(reports)

    def list_for_user_between(self, *, user_id, start, end):
        return [r for r in self.reports if r.user_id == user_id and start <= r.report_date <= end]


class InMemoryAdvances:
    def __init__(self, advances=()):
        self.advances = list(advances)

    def list_approved_between(self, *, user_id, start, end):
        return [
            a
            for a in self.advances
            if a.user_id == user_id
            and a.status == RequestStatus.APPROVED
            and a.approved_at is not None
            and start <= a.approved_at <= end
        ]


class InMemorySalaries:
    def __init__(self, structures=()):
        self.by_user = {s.user_id: s for s in structures}

    def get(self, user_id):
        return self.by_user.get(int(user_id))

    def upsert(self, structure):
        self.by_user[structure.user_id] = structure


class InMemoryPayouts:
    def __init__(self):
        self.by_key = {}
        self._id = 0

    def upsert(self, payout):
        key = (payout.user_id, payout.month, payout.year)
        existing = self.by_key.get(key)
        if existing:
            payout = replace(payout, payout_id=existing.payout_id, status=existing.status, remark=existing.remark)
        else:
            self._id += 1
            payout = replace(payout, payout_id=self._id)
        self.by_key[key] = payout

    def get(self, payout_id):
        return next((p for p in self.by_key.values() if p.payout_id == int(payout_id)), None)

    def list_payouts(self, *, month=None, year=None, user_id=None):
        return [
            p
            for p in self.by_key.values()
            if (month is None or p.month == month) and (year is None or p.year == year) and (user_id is None or p.user_id == user_id)
        ]

    def set_status(self, payout_id, *, status):
        p = self.get(payout_id)
        self.by_key[(p.user_id, p.month, p.year)] = replace(p, status=status)
        return True

    def set_remark(self, payout_id, *, remark):
        p = self.get(payout_id)
        self.by_key[(p.user_id, p.month, p.year)] = replace(p, remark=remark)
        return True


def _daily(user_id, start: date, days: int, delivered: int):
    return [
        DailyReport(user_id=user_id, fhr_id=f"FHR{user_id:03d}", report_date=start + timedelta(days=i), delivered=delivered)
        for i in range(days)
    ]


def _advance(request_id, user_id, amount, approved_at, status=RequestStatus.APPROVED):
    return AdvanceRequest(
        request_id=request_id,
        user_id=user_id,
        amount=amount,
        reason="",
        status=status,
        created_at=datetime(2026, 2, 1),
        approved_at=approved_at,
    )


def _service(users, *, reports=(), advances=(), structures=(), notifier=None, payouts=None):
    return PayrollService(
        users,
        InMemoryReports(reports),
        InMemoryAdvances(advances),
        InMemorySalaries(structures),
        payouts or InMemoryPayouts(),
        notifier,
    )


def test_payout_determinism_february_2026(users):
    svc = _service(
        users,
        reports=_daily(1, date(2026, 2, 1), 20, delivered=25),
        advances=[_advance(1, 1, 200, datetime(2026, 2, 14, 12, 0))],
        structures=[SalaryStructure(user_id=1, base_rate=15, conveyance=500, incentive_rate=2, tds_rate=1)],
    )

    record = svc.compute_monthly_payout(1, 2, 2026).to_record()

    assert record["workingDays"] == 20
    assert record["lopDays"] == 8
    assert record["deliveredCount"] == 500
    assert record["basic"] == 300
    assert record["incentives"] == 1000
    assert record["finalBaseAmount"] == 1300
    assert record["tds"] == pytest.approx(13.00, abs=0.01)
    assert record["grossEarnings"] == 1800
    assert record["totalDeductions"] == pytest.approx(213.00, abs=0.01)
    assert record["netPayable"] == pytest.approx(1587.00, abs=0.01)


def test_leap_february_counts_29_days(users):
    svc = _service(users, reports=_daily(2, date(2024, 2, 1), 20, delivered=0))

    payout = svc.compute_monthly_payout(2, 2, 2024)

    assert payout.breakdown.lop_days == 9


def test_reports_outside_the_month_are_ignored(users):
    reports = _daily(1, date(2026, 1, 30), 5, delivered=1)  # Jan 30..Feb 3

    payout = _service(users, reports=reports).compute_monthly_payout(1, 2, 2026)

    assert payout.breakdown.working_days == 3


def test_advance_approved_january_31_not_in_february(users):
    advances = [
        _advance(1, 1, 999, datetime(2026, 1, 31, 23, 59, 59)),
        _advance(2, 1, 150, datetime(2026, 2, 28, 23, 59, 59)),
        _advance(3, 1, 70, None, status=RequestStatus.PENDING),
        _advance(4, 1, 80, datetime(2026, 2, 5), status=RequestStatus.REJECTED),
    ]

    payout = _service(users, advances=advances).compute_monthly_payout(1, 2, 2026)

    assert payout.breakdown.advance == 150


def test_falls_back_to_employee_rates(users, make_employee):
    users.add(make_employee(7, base_rate=400, conveyance=250))
    svc = _service(users, reports=_daily(7, date(2026, 3, 1), 10, delivered=30))

    b = svc.compute_monthly_payout(7, 3, 2026).breakdown

    assert b.base_rate == 400
    assert b.basic == 4000
    assert b.incentives == 0
    assert b.tds == 40.0
    assert b.gross_earnings == 4250


def test_snapshot_is_captured_at_computation_time(users):
    svc = _service(users)

    payout = svc.compute_monthly_payout(3, 2, 2026)
    users.add(replace(users.get_by_id(3), full_name="Renamed", hub_name="New Hub"))

    assert payout.employee.name == "Rider 3"
    assert payout.employee.hub == "Varanasi Hub"
    assert payout.to_record()["profileId"] == "EMP003"


def test_unknown_user_raises_not_found(users):
    with pytest.raises(NotFoundError):
        _service(users).compute_monthly_payout(999, 2, 2026)


def test_invalid_month_rejected(users):
    with pytest.raises(ValidationError):
        _service(users).compute_monthly_payout(1, 13, 2026)


def test_generate_payout_persists_and_notifies(users, notifier):
    payouts = InMemoryPayouts()
    svc = _service(users, reports=_daily(1, date(2026, 2, 1), 2, delivered=1), notifier=notifier, payouts=payouts)

    svc.generate_payout(1, 2, 2026)
    svc.generate_payout(1, 2, 2026)

    assert len(payouts.by_key) == 1
    assert payouts.by_key[(1, 2, 2026)].status == PayoutStatus.GENERATED
    assert [t for _, t, _ in notifier.sent] == [PAYSLIP_GENERATED_TITLE, PAYSLIP_GENERATED_TITLE]


def test_generate_payout_survives_broken_notifier(users, raising_notifier):
    payouts = InMemoryPayouts()

    _service(users, notifier=raising_notifier, payouts=payouts).generate_payout(1, 2, 2026)

    assert (1, 2, 2026) in payouts.by_key


def test_generate_bulk_isolates_failures(users, notifier):
    class FlakyReports(InMemoryReports):
        def list_for_user_between(self, *, user_id, start, end):
            if user_id == 2:
                raise RuntimeError("connection reset")
            return super().list_for_user_between(user_id=user_id, start=start, end=end)

    payouts = InMemoryPayouts()
    svc = PayrollService(users, FlakyReports(), InMemoryAdvances(), InMemorySalaries(), payouts, notifier)

    summary = svc.generate_bulk(2, 2026)

    assert summary["processed"] == 4
    assert summary["errors"] == 1
    assert summary["errorDetails"][0]["employeeId"] == "EMP002"
    assert sorted(k[0] for k in payouts.by_key) == [1, 3, 4, 5]
    assert all(t == SALARY_PUBLISHED_TITLE for _, t, _ in notifier.sent)


def test_salary_structure_defaults_and_save(users, make_employee):
    users.add(make_employee(8, base_rate=350, conveyance=100))
    svc = _service(users)

    assert svc.get_salary_structure(8).to_dict() == {
        "userId": 8,
        "baseRate": 350,
        "conveyance": 100,
        "otherAllowances": 0,
        "incentiveRate": 0,
        "tdsRate": 1,
    }

    saved = svc.save_salary_structure(8, {"incentiveRate": "2.5", "tdsRate": 2})

    assert saved.base_rate == 350
    assert saved.incentive_rate == 2.5
    assert svc.get_salary_structure(8).tds_rate == 2


def test_salary_structure_rejects_negative(users):
    with pytest.raises(ValidationError):
        _service(users).save_salary_structure(1, {"baseRate": -1})


def test_payout_status_moves_forward_only(users):
    payouts = InMemoryPayouts()
    svc = _service(users, payouts=payouts)
    svc.generate_payout(1, 2, 2026)
    payout_id = payouts.by_key[(1, 2, 2026)].payout_id

    with pytest.raises(ValidationError):
        svc.set_payout_status(payout_id, "Paid")

    assert svc.set_payout_status(payout_id, "Approved").status == PayoutStatus.APPROVED
    assert svc.set_payout_status(payout_id, "Paid").status == PayoutStatus.PAID
    with pytest.raises(ValidationError):
        svc.set_payout_status(payout_id, "Generated")


def test_remark_is_trimmed(users):
    payouts = InMemoryPayouts()
    svc = _service(users, payouts=payouts)
    svc.generate_payout(1, 2, 2026)
    payout_id = payouts.by_key[(1, 2, 2026)].payout_id

    assert svc.set_payout_remark(payout_id, "  bank hold ").remark == "bank hold"

def test_set_status_unknown_payout(users):
    with pytest.raises(NotFoundError):
        _service(users).set_payout_status(42, "Approved")


def test_export_payouts_excel(users):
    payouts = InMemoryPayouts()
    svc = _service(users, reports=_daily(1, date(2026, 2, 1), 3, delivered=2), payouts=payouts)
    svc.generate_bulk(2, 2026)

    content = svc.export_payouts_excel(2, 2026)

    df = pd.read_excel(io.BytesIO(content), engine="openpyxl")
    assert len(df) == 5
    assert "Net Payable" in df.columns
    assert df.loc[df["Profile ID"] == "EMP001", "Working Days"].iloc[0] == 3
