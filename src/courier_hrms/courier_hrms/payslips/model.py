from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Optional

from ..core.enums import PayoutStatus


@dataclass(frozen=True)
class Payslip:
    """Presentation-side salary slip for one (fhr_id, month, year).

    Name, designation and bank details are copied from the sheet at upload
    time and rendered into the PDF as-is.
    """

    user_id: int
    fhr_id: str
    month: int
    year: int
    employee_name: str = ""
    designation: str = ""
    doj: str = ""
    pay_period: str = ""
    pay_date: str = ""
    account_number: str = ""
    ifsc_code: str = ""
    paid_days: float = 0
    lop_days: float = 0
    basic: float = 0
    conveyance: float = 0
    incentives: float = 0
    other_allowances: float = 0
    gross_earnings: float = 0
    tds: float = 0
    advance: float = 0
    other_deductions: float = 0
    total_deductions: float = 0
    net_payable: float = 0
    pdf_path: str = ""
    status: PayoutStatus = PayoutStatus.GENERATED
    remark: str = ""
    payslip_id: Optional[int] = None

    def with_pdf(self, path: str) -> "Payslip":
        return replace(self, pdf_path=str(path))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data
