"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_INCENTIVE_RATE = 0.0
DEFAULT_TDS_RATE = 1.0
DEFAULT_OTP_TTL_SECONDS = 300
OTP_LENGTH = 6

DAILY_REPORT_TITLE = "New Daily Performance Report"
PAYSLIP_GENERATED_TITLE = "Payslip Generated"
SALARY_PUBLISHED_TITLE = "Salary Published"

ALLOWED_UPLOAD_EXTENSIONS = (".xlsx", ".xls", ".csv")

DEFAULT_COMPANY_NAME = "ANGLE COURIER AND LOGISTICS"
DEFAULT_COMPANY_ADDRESS = (
    "ARAZI NO-372, PATANAVA BASANT NAGAR VNS",
    "VARANASI-221110 UTTAR PRADESH",
)
ADVANCE_REQUEST_TITLE = "New Advance Request"
ADVANCE_DECIDED_TITLE = "Advance Request {status}"
