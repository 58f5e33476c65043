from __future__ import annotations

import io
import math

import pandas as pd
import pytest

from src.courier_hrms.courier_hrms.core.exceptions import SpreadsheetError
from src.courier_hrms.courier_hrms.spreadsheets import headers as h
from src.courier_hrms.courier_hrms.spreadsheets.normalizer import (
    has_value,
    normalize_header,
    read_rows,
    resolve_field,
    resolve_int,
    resolve_number,
    resolve_text,
)


def test_normalize_header_drops_case_spaces_and_underscores():
    assert normalize_header("FHR_ID") == "fhrid"
    assert normalize_header("Hub Name") == "hubname"
    assert normalize_header(" Casper FHR_ID ") == "casperfhrid"


@pytest.mark.parametrize("header", ["Hub\nName", "Hub\tName", "Hub\u00a0Name", "Hub\r\nName"])
def test_wrapped_and_odd_whitespace_headers_match(header):
    assert resolve_text({header: "Lanka"}, h.DAILY_HUB) == "Lanka"


def test_colliding_headers_keep_leftmost_column():
    row = {"FHRID": "FHR001", "FHR_ID": "FHR999"}

    assert resolve_text(row, h.SLIP_IDENTITY) == "FHR001"


def test_fhr_id_and_fhrid_headers_extract_same_identity():
    row_a = {"FHR_ID": "FHR001", "Name": "A"}
    row_b = {"FHRID": "FHR001", "Name": "A"}

    assert resolve_text(row_a, h.PAYOUT_IDENTITY) == resolve_text(row_b, h.PAYOUT_IDENTITY) == "FHR001"


def test_resolve_field_respects_candidate_order():
    row = {"Hub": "fallback", "HubName": "primary"}

    assert resolve_field(row, h.DAILY_HUB) == "primary"


def test_resolve_field_missing_returns_none():
    assert resolve_field({"Other": 1}, ("FHRID",)) is None


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0.0), ("", 0.0), ("abc", 0.0), (float("nan"), 0.0), ("1,250.50", 1250.5), (42, 42.0), (True, 0.0)],
)
def test_resolve_number_never_raises(value, expected):
    assert resolve_number({"DEL": value}, h.DAILY_DELIVERED) == expected


def test_resolve_int_truncates():
    assert resolve_int({"OFD": "12.0"}, h.DAILY_OFD) == 12


def test_resolve_text_turns_whole_floats_into_ids():
    assert resolve_text({"FHRID": 1024.0}, h.DAILY_IDENTITY) == "1024"
    assert resolve_text({"FHRID": "  FHR9 "}, h.DAILY_IDENTITY) == "FHR9"
    assert resolve_text({}, h.DAILY_IDENTITY) == ""


def test_has_value_requires_header_and_non_blank_cell():
    assert has_value({"Gross_Earnings": 0}, h.SLIP_GROSS)
    assert not has_value({"Gross_Earnings": "  "}, h.SLIP_GROSS)
    assert not has_value({"Basic": 10}, h.SLIP_GROSS)


def test_read_rows_excel_first_sheet_blank_cells_become_none():
    df = pd.DataFrame({"FHRID ": ["FHR001", "FHR002"], "DEL": [10, None]})
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Day")
        pd.DataFrame({"Ignored": [1]}).to_excel(writer, index=False, sheet_name="Other")

    rows = read_rows(buf.getvalue(), "daily.xlsx")

    assert len(rows) == 2
    assert set(rows[0].keys()) == {"FHRID", "DEL"}
    assert rows[1]["DEL"] is None or (isinstance(rows[1]["DEL"], float) and math.isnan(rows[1]["DEL"]))
    assert resolve_number(rows[1], h.DAILY_DELIVERED) == 0.0


def test_read_rows_csv():
    rows = read_rows(b"FHR_ID,TDS\nFHR001,13.5\n", "payout.csv")

    assert rows == [{"FHR_ID": "FHR001", "TDS": "13.5"}]


def test_read_rows_garbage_raises_spreadsheet_error():
    with pytest.raises(SpreadsheetError):
        read_rows(b"not a workbook", "broken.xlsx")
