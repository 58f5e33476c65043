"""Fuzzy header lookup for uploaded sheets.

Uploads come from different teams with different header conventions
("FHRID", "FHR_ID", "Fhr Id"). A field is described by an ordered list of
candidate headers; both sides are compared after lower-casing and removing
all whitespace (line breaks from wrapped cells too) and underscores.
Numeric lookups never raise: anything unparsable is 0.
"""

from __future__ import annotations

import io
import logging
import math
import re
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

from ..core.exceptions import SpreadsheetError

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


_IGNORED = re.compile(r"[\s_]+")


def normalize_header(value: Any) -> str:
    return _IGNORED.sub("", str(value).lower())


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def resolve_field(row: Row, candidates: Sequence[str]) -> Optional[Any]:
    """Return the cell of the first candidate header present in ``row``, else None."""
    by_header: dict[str, Any] = {}
    for k in row.keys():
        # Two columns with the same normalized header: the leftmost wins.
        by_header.setdefault(normalize_header(k), k)
    for candidate in candidates:
        key = by_header.get(normalize_header(candidate))
        if key is not None:
            return row[key]
    return None


def has_value(row: Row, candidates: Sequence[str]) -> bool:
    return not _is_blank(resolve_field(row, candidates))


def to_number(value: Any) -> float:
    if _is_blank(value) or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def resolve_number(row: Row, candidates: Sequence[str]) -> float:
    return to_number(resolve_field(row, candidates))


def resolve_int(row: Row, candidates: Sequence[str]) -> int:
    return int(resolve_number(row, candidates))


def to_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    # Excel hands numeric IDs back as floats (1024.0)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "strftime"):
        return value.strftime("%Y-%m-%d")
    return str(value).strip()


def resolve_text(row: Row, candidates: Sequence[str]) -> str:
    return to_text(resolve_field(row, candidates))


def read_rows(data: bytes, filename: str = "") -> list[dict]:
    """Read the first sheet (or a CSV) into a list of header->value dicts.

    Raises SpreadsheetError when the file cannot be parsed at all.
    """
    suffix = Path(filename or "").suffix.lower()
    try:
        if suffix == ".csv":
            df = pd.read_csv(io.BytesIO(data), dtype=object)
        else:
            df = pd.read_excel(io.BytesIO(data), sheet_name=0, dtype=object)
    except Exception as e:
        raise SpreadsheetError(f"Unable to read spreadsheet {filename or ''}: {e}") from e

    df = df.astype(object).where(pd.notna(df), None)
    df.columns = [str(c).strip() for c in df.columns]
    rows = df.to_dict(orient="records")
    if rows:
        logger.info("Upload headers found: %s", list(df.columns))
    return rows
