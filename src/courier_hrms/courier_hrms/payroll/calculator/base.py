from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayoutBreakdown, PayrollInputs


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, inputs: PayrollInputs) -> PayoutBreakdown:
        raise NotImplementedError
