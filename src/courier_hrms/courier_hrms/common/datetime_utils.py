from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def days_in_month(month: int, year: int) -> int:
    return monthrange(int(year), int(month))[1]


def month_bounds(month: int, year: int) -> tuple[datetime, datetime]:
    """First and last instant of a calendar month (leap years included)."""
    first = date(int(year), int(month), 1)
    last = date(int(year), int(month), days_in_month(month, year))
    return datetime.combine(first, time.min), datetime.combine(last, time.max)


def format_report_date(value: date) -> str:
    return value.strftime("%d %b %Y")
