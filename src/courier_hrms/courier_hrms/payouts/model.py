from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class PayoutReport:
    """A row of the monthly payout sheet, keyed on (fhr_id, month, year)."""

    user_id: int
    fhr_id: str
    month: int
    year: int
    profile_id: str = ""
    full_name: str = ""
    hub_name: str = ""
    account_number: str = ""
    ifsc_code: str = ""
    working_days: float = 0
    total_assigned: float = 0
    total_normal_delivery: float = 0
    sopsy_delivered: float = 0
    gtnl_delivered: float = 0
    u2s_shipment: float = 0
    total_delivery_count: float = 0
    conversion: str = ""
    lma_base_rate: float = 0
    lma_base_pay_amt: float = 0
    lma_pay_amt_10p: float = 0
    sopsy_base_pay_amt_18p: float = 0
    gtnl_base_pay_amt_6p: float = 0
    u25_base_amt: float = 0
    final_base_pay_amt: float = 0
    tds: float = 0
    final_base_amount: float = 0
    advance: float = 0
    total_pay_amount: float = 0
    remark: str = ""
    payout_report_id: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)
