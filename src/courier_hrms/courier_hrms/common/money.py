from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


def round2(value: float) -> float:
    """Round to 2 decimals, half-up (2.345 -> 2.35, not banker's rounding)."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))
