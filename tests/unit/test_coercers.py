from __future__ import annotations

import math
from datetime import date, datetime

import pandas as pd
import pytest

from inspection_import.mapping.coercers import is_blank, parse_date, parse_quantity, serial_to_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0),
        ("", 0),
        ("-", 0),
        (float("nan"), 0),
        (12, 12),
        ("12", 12),
        ("1,234", 1234),
        (" 56 ", 56),
        (3.9, 3),
        ("3.9", 3),
        (-5, 0),
        ("-5", 0),
        ("abc", 0),
        ("12개", 0),
        ("inf", 0),
        (float("inf"), 0),
    ],
)
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_parse_quantity_numeric_and_string_agree():
    for n in (0, 1, 42, 1000):
        assert parse_quantity(n) == parse_quantity(str(n))


def test_parse_quantity_bool_is_not_a_number():
    # True is a python int subclass but not a quantity
    assert parse_quantity(True) == 0


def test_parse_quantity_numpy_scalar():
    s = pd.Series([7])
    assert parse_quantity(s.iloc[0]) == 7


def test_serial_epoch():
    assert serial_to_date(25569) == "1970-01-01"
    assert serial_to_date(1) == "1899-12-31"


def test_parse_date_serial():
    assert parse_date(45992) == "2025-12-01"
    assert parse_date(45992.0) == "2025-12-01"
    assert parse_date(45992.4) == "2025-12-01"


@pytest.mark.parametrize("serial", range(1, 80000, 997))
def test_parse_date_serial_string_matches_number(serial):
    assert parse_date(str(serial)) == parse_date(serial) == serial_to_date(serial)


def test_parse_date_serial_string_with_padding():
    assert parse_date(" 45992 ") == "2025-12-01"


def test_parse_date_blank_uses_fallback():
    assert parse_date(None) == "2025-01-01"
    assert parse_date("") == "2025-01-01"
    assert parse_date(0) == "2025-01-01"
    assert parse_date(float("nan")) == "2025-01-01"
    assert parse_date(None, fallback="2024-06-30") == "2024-06-30"


def test_parse_date_text_passthrough():
    assert parse_date("2025-03-04") == "2025-03-04"
    assert parse_date("3월 4일") == "3월 4일"


def test_parse_date_datetime_cells():
    assert parse_date(datetime(2025, 3, 4, 13, 30)) == "2025-03-04"
    assert parse_date(pd.Timestamp("2025-03-04 08:00")) == "2025-03-04"
    assert parse_date(date(2025, 3, 4)) == "2025-03-04"


def test_parse_date_out_of_range_serial_falls_back():
    assert parse_date(1e12) == "2025-01-01"
    assert parse_date(float("inf")) == "2025-01-01"


def test_parse_date_other_types_fall_back():
    assert parse_date(["45992"]) == "2025-01-01"


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank(math.nan)
    assert not is_blank("-")
    assert not is_blank(1)
