from __future__ import annotations

import calendar
import logging
from pathlib import Path
from typing import Sequence

from fpdf import FPDF

from ..core.constants import DEFAULT_COMPANY_ADDRESS, DEFAULT_COMPANY_NAME
from ..core.exceptions import RenderError
from .model import Payslip
from .repository import PayslipRenderer

logger = logging.getLogger(__name__)


def _latin1(s: object) -> str:
    # Core fonts (Helvetica) only cover latin-1.
    return str(s if s is not None else "").encode("latin-1", "replace").decode("latin-1")


def _money(value: float) -> str:
    return f"Rs. {float(value or 0):,.2f}"


class FPDFPayslipRenderer(PayslipRenderer):
    """Writes one A4 salary slip per payslip into ``output_dir``.

    One file per (fhr_id, month, year); a re-upload overwrites it.
    """

    def __init__(
        self,
        output_dir: str | Path,
        *,
        company_name: str = DEFAULT_COMPANY_NAME,
        company_address: Sequence[str] = DEFAULT_COMPANY_ADDRESS,
    ):
        self._output_dir = Path(output_dir)
        self._company_name = company_name
        self._company_address = tuple(company_address)

    def render(self, payslip: Payslip) -> Path:
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            file_name = f"salary_slip_{payslip.fhr_id}_{payslip.month}_{payslip.year}.pdf"
            path = self._output_dir / file_name
            pdf = self._build(payslip)
            pdf.output(str(path))
        except Exception as e:
            logger.exception("Salary slip render failed for %s %s/%s", payslip.fhr_id, payslip.month, payslip.year)
            raise RenderError(f"Could not render salary slip for {payslip.fhr_id}: {e}") from e
        return path

    def _build(self, p: Payslip) -> FPDF:
        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.set_auto_page_break(auto=True, margin=12)
        pdf.add_page()

        pdf.set_text_color(48, 63, 159)
        pdf.set_font("Helvetica", style="B", size=16)
        pdf.cell(0, 9, _latin1(self._company_name), ln=1, align="C")
        pdf.set_text_color(15, 23, 42)
        pdf.set_font("Helvetica", size=9)
        for line in self._company_address:
            pdf.cell(0, 5, _latin1(line), ln=1, align="C")
        pdf.ln(3)

        month_name = calendar.month_name[p.month] if 1 <= p.month <= 12 else str(p.month)
        pdf.set_font("Helvetica", style="B", size=11)
        pdf.cell(0, 8, _latin1(f"Payslip for the Month of {month_name}, {p.year}"), border=1, ln=1, align="C")
        pdf.ln(2)

        info = [
            ("Employee Name", p.employee_name),
            ("FHR_ID", p.fhr_id),
            ("Designation", p.designation),
            ("Date of Joining", p.doj or "N/A"),
            ("Pay Period", p.pay_period or "N/A"),
            ("Pay Date", p.pay_date or "N/A"),
            ("A/C Number", p.account_number or "N/A"),
            ("IFSC Code", p.ifsc_code or "N/A"),
            ("Paid Days / LOP Days", f"{p.paid_days:g} / {p.lop_days:g}"),
        ]
        for label, value in info:
            pdf.set_font("Helvetica", size=9)
            pdf.cell(50, 6, _latin1(label), border=1)
            pdf.set_font("Helvetica", style="B", size=9)
            pdf.cell(0, 6, _latin1(value), border=1, ln=1)
        pdf.ln(3)

        widths = (50, 45, 50, 45)
        pdf.set_fill_color(245, 245, 245)
        pdf.set_font("Helvetica", style="B", size=9)
        for w, h in zip(widths, ("EARNINGS", "AMOUNT", "DEDUCTIONS", "AMOUNT")):
            pdf.cell(w, 7, h, border=1, fill=True)
        pdf.ln(7)

        lines = [
            ("Basic", p.basic, "TDS", p.tds),
            ("Conveyance", p.conveyance, "Advance", p.advance),
            ("Incentives", p.incentives, "Other Deductions", p.other_deductions),
            ("Other Allowance", p.other_allowances, "", None),
        ]
        pdf.set_font("Helvetica", size=9)
        for e_label, e_val, d_label, d_val in lines:
            pdf.cell(widths[0], 6, e_label, border=1)
            pdf.cell(widths[1], 6, _money(e_val), border=1, align="R")
            pdf.cell(widths[2], 6, d_label, border=1)
            pdf.cell(widths[3], 6, _money(d_val) if d_val is not None else "", border=1, align="R")
            pdf.ln(6)

        pdf.set_font("Helvetica", style="B", size=9)
        pdf.cell(widths[0], 7, "Gross Earnings", border=1)
        pdf.cell(widths[1], 7, _money(p.gross_earnings), border=1, align="R")
        pdf.cell(widths[2], 7, "Total Deductions", border=1)
        pdf.cell(widths[3], 7, _money(p.total_deductions), border=1, align="R")
        pdf.ln(10)

        pdf.set_fill_color(197, 202, 233)
        pdf.set_font("Helvetica", style="B", size=12)
        pdf.cell(widths[0] + widths[1] + widths[2], 9, "Total Net Payable", border=1, fill=True)
        pdf.cell(widths[3], 9, _money(p.net_payable), border=1, fill=True, align="R", ln=1)
        pdf.ln(4)

        pdf.set_font("Helvetica", size=9)
        pdf.cell(0, 6, "**Total Net Payable = Gross Earnings - Total Deductions", ln=1, align="C")
        pdf.set_text_color(158, 158, 158)
        pdf.set_font("Helvetica", style="I", size=7)
        pdf.cell(0, 6, "This is a computer generated document and does not require a signature.", ln=1, align="C")
        return pdf
