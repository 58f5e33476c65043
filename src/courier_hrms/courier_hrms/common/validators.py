from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_period(month, year) -> tuple[int, int]:
    try:
        m = int(month)
        y = int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year are required")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1000 <= y <= 9999:
        raise ValidationError("Year must have 4 digits")
    return m, y


def require_positive_amount(value, field_name: str = "Amount") -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Valid {field_name.lower()} is required")
    if amount <= 0:
        raise ValidationError(f"Valid {field_name.lower()} is required")
    return amount
