from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .advances.mysql_advance_repository import MySQLAdvanceRepository
from .advances.service import AdvanceService
from .common.otp_store import OtpStore
from .core.constants import DEFAULT_OTP_TTL_SECONDS
from .database.connection import DatabaseConnection
from .ingestion.daily_report_pipeline import DailyReportIngestion
from .ingestion.payout_pipeline import PayoutSheetIngestion
from .ingestion.payslip_pipeline import PayslipSheetIngestion
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .payouts.mysql_payout_repository import MySQLPayoutReportRepository
from .payroll.mysql_payroll_repository import MySQLMonthlyPayoutRepository, MySQLSalaryStructureRepository
from .payroll.service import PayrollService
from .payslips.mysql_payslip_repository import MySQLPayslipRepository
from .payslips.renderer import FPDFPayslipRenderer
from .payslips.service import PayslipService
from .reports.mysql_report_repository import MySQLDailyReportRepository
from .reports.service import DailyReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    reports_repo: MySQLDailyReportRepository
    payout_reports_repo: MySQLPayoutReportRepository
    payslips_repo: MySQLPayslipRepository
    advances_repo: MySQLAdvanceRepository
    notifications_repo: MySQLNotificationRepository

    auth_service: AuthService
    user_service: UserService
    notification_service: NotificationService
    daily_report_service: DailyReportService
    advance_service: AdvanceService
    payroll_service: PayrollService
    payslip_service: PayslipService

    daily_report_ingestion: DailyReportIngestion
    payout_ingestion: PayoutSheetIngestion
    payslip_ingestion: PayslipSheetIngestion


def build_container(*, db_config: dict, settings: Optional[Any] = None) -> Container:
    conn = DatabaseConnection.from_dict(db_config)

    users_repo = MySQLUserRepository(conn)
    reports_repo = MySQLDailyReportRepository(conn)
    payout_reports_repo = MySQLPayoutReportRepository(conn)
    payslips_repo = MySQLPayslipRepository(conn)
    advances_repo = MySQLAdvanceRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)

    otp_store = OtpStore(ttl_seconds=int(getattr(settings, "OTP_TTL_SECONDS", DEFAULT_OTP_TTL_SECONDS)))
    renderer = FPDFPayslipRenderer(getattr(settings, "SALARY_SLIP_DIR", "uploads/salary_slips"))

    notification_service = NotificationService(notifications_repo, users_repo)
    auth_service = AuthService(users_repo, otp_store=otp_store)
    user_service = UserService(users_repo)
    daily_report_service = DailyReportService(reports_repo)
    advance_service = AdvanceService(advances_repo, users_repo, notification_service)
    payroll_service = PayrollService(
        users_repo,
        reports_repo,
        advances_repo,
        MySQLSalaryStructureRepository(conn),
        MySQLMonthlyPayoutRepository(conn),
        notification_service,
    )
    payslip_service = PayslipService(payslips_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        reports_repo=reports_repo,
        payout_reports_repo=payout_reports_repo,
        payslips_repo=payslips_repo,
        advances_repo=advances_repo,
        notifications_repo=notifications_repo,
        auth_service=auth_service,
        user_service=user_service,
        notification_service=notification_service,
        daily_report_service=daily_report_service,
        advance_service=advance_service,
        payroll_service=payroll_service,
        payslip_service=payslip_service,
        daily_report_ingestion=DailyReportIngestion(users_repo, reports_repo, notification_service),
        payout_ingestion=PayoutSheetIngestion(users_repo, payout_reports_repo),
        payslip_ingestion=PayslipSheetIngestion(users_repo, payslips_repo, renderer),
    )
