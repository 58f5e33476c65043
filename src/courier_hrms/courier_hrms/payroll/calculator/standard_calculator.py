from __future__ import annotations

from ...common.money import round2
from ..model import PayoutBreakdown, PayrollInputs
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Per-day base pay plus per-delivery incentive; flat-percent TDS.

    TDS is taken on basic + incentives only (conveyance is outside the TDS
    base) while gross earnings include conveyance. Only TDS and net payable
    are rounded.
    """

    def compute(self, inputs: PayrollInputs) -> PayoutBreakdown:
        s = inputs.salary
        working_days = int(inputs.working_days)

        basic = working_days * s.base_rate
        incentives = inputs.delivered * s.incentive_rate
        final_base_amount = basic + incentives
        tds = round2(final_base_amount * s.tds_rate / 100)
        gross = basic + s.conveyance + incentives
        deductions = tds + inputs.advance
        net = round2(gross - deductions)

        return PayoutBreakdown(
            working_days=working_days,
            lop_days=max(inputs.days_in_month - working_days, 0),
            paid_days=working_days,
            delivered_count=inputs.delivered,
            picked_count=inputs.picked,
            ofd_count=inputs.ofd,
            base_rate=s.base_rate,
            basic=basic,
            conveyance=s.conveyance,
            incentives=incentives,
            final_base_amount=final_base_amount,
            tds=tds,
            advance=inputs.advance,
            gross_earnings=gross,
            total_deductions=deductions,
            net_payable=net,
        )
