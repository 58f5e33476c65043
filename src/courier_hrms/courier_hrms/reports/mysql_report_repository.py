from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, upsert_sql
from .model import DailyReport, DailyReportTotals
from .repository import DailyReportRepository

_UPSERT_COLUMNS = ("user_id", "fhr_id", "report_date", "hub_name", "ofd", "ofp", "delivered", "picked", "uploaded_by")


def _to_report(r: dict) -> DailyReport:
    return DailyReport(
        report_id=int(r["report_id"]),
        user_id=int(r["user_id"]),
        fhr_id=r["fhr_id"],
        report_date=r["report_date"],
        hub_name=r.get("hub_name") or "",
        ofd=int(r.get("ofd") or 0),
        ofp=int(r.get("ofp") or 0),
        delivered=int(r.get("delivered") or 0),
        picked=int(r.get("picked") or 0),
        uploaded_by=r.get("uploaded_by"),
    )


def _filters(report_date: Optional[date], hub_name: Optional[str]) -> tuple[str, list]:
    clauses = ["1=1"]
    params: list[object] = []
    if report_date is not None:
        clauses.append("report_date=%s")
        params.append(report_date)
    if hub_name:
        clauses.append("hub_name=%s")
        params.append(hub_name)
    return " AND ".join(clauses), params


class MySQLDailyReportRepository(DailyReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, report: DailyReport) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                upsert_sql("daily_reports", _UPSERT_COLUMNS, key_columns=("fhr_id", "report_date")),
                (
                    int(report.user_id),
                    report.fhr_id,
                    report.report_date,
                    report.hub_name,
                    int(report.ofd),
                    int(report.ofp),
                    int(report.delivered),
                    int(report.picked),
                    report.uploaded_by,
                ),
            )

    def list_for_user_between(self, *, user_id: int, start: date, end: date) -> Sequence[DailyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT report_id, user_id, fhr_id, report_date, hub_name, ofd, ofp, delivered, picked, uploaded_by
                FROM daily_reports
                WHERE user_id=%s AND report_date BETWEEN %s AND %s
                ORDER BY report_date DESC
                """,
                (int(user_id), start, end),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def list_for_date(self, *, report_date: Optional[date] = None, hub_name: Optional[str] = None) -> Sequence[DailyReport]:
        where, params = _filters(report_date, hub_name)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT report_id, user_id, fhr_id, report_date, hub_name, ofd, ofp, delivered, picked, uploaded_by
                FROM daily_reports
                WHERE {where}
                ORDER BY report_date DESC, fhr_id ASC
                """,
                tuple(params),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def totals(self, *, report_date: Optional[date] = None, hub_name: Optional[str] = None) -> DailyReportTotals:
        where, params = _filters(report_date, hub_name)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COALESCE(SUM(ofd), 0) AS ofd, COALESCE(SUM(ofp), 0) AS ofp,
                       COALESCE(SUM(delivered), 0) AS delivered, COALESCE(SUM(picked), 0) AS picked
                FROM daily_reports
                WHERE {where}
                """,
                tuple(params),
            )
            r = fetchone(cur) or {}
            return DailyReportTotals(
                ofd=int(r.get("ofd") or 0),
                ofp=int(r.get("ofp") or 0),
                delivered=int(r.get("delivered") or 0),
                picked=int(r.get("picked") or 0),
            )
