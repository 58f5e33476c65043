from __future__ import annotations

from datetime import date, datetime

import pytest

from src.courier_hrms.courier_hrms.common.datetime_utils import format_report_date, month_bounds, parse_iso_date
from src.courier_hrms.courier_hrms.common.money import round2
from src.courier_hrms.courier_hrms.common.validators import require_period
from src.courier_hrms.courier_hrms.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [(2.345, 2.35), (0.125, 0.13), (1586.999, 1587.0), (-0.005, -0.01), (10, 10.0)],
)
def test_round2_half_up(value, expected):
    assert round2(value) == expected


@pytest.mark.parametrize(
    "month, year, last_day",
    [(2, 2024, 29), (2, 2026, 28), (4, 2026, 30), (12, 2026, 31)],
)
def test_month_bounds(month, year, last_day):
    start, end = month_bounds(month, year)

    assert start == datetime(year, month, 1, 0, 0)
    assert end.date() == date(year, month, last_day)
    assert (end.hour, end.minute, end.second) == (23, 59, 59)


def test_parse_iso_date():
    assert parse_iso_date(" 2026-02-03 ") == date(2026, 2, 3)
    with pytest.raises(ValidationError):
        parse_iso_date("03/02/2026")


def test_format_report_date():
    assert format_report_date(date(2026, 2, 3)) == "03 Feb 2026"


@pytest.mark.parametrize("month, year", [(0, 2026), (13, 2026), ("x", 2026), (1, 26), (None, None)])
def test_require_period_rejects(month, year):
    with pytest.raises(ValidationError):
        require_period(month, year)


def test_require_period_accepts_strings():
    assert require_period("02", "2026") == (2, 2026)
