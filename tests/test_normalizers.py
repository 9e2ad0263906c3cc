import math
from datetime import date, datetime

import pytest

from transaction_ledger.normalizers import parse_transaction_amount, parse_transaction_date


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2019-01-01", date(2019, 1, 1)),
        ("  2019-12-31 ", date(2019, 12, 31)),
        ("2019-01-02T10:30:00", date(2019, 1, 2)),
        ("2019-01-02 10:30:00", date(2019, 1, 2)),
        (date(2020, 2, 29), date(2020, 2, 29)),
        (datetime(2020, 2, 29, 23, 59), date(2020, 2, 29)),
    ],
)
def test_parse_date_accepts_iso_forms(raw, expected):
    assert parse_transaction_date(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "   ", "not a date", "2019-13-01", "2019-02-30", None, 20190101]
)
def test_parse_date_is_lenient(raw):
    assert parse_transaction_date(raw) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("100", 100.0),
        ("150.00", 150.0),
        (" -12.5 ", -12.5),
        (42, 42.0),
        (3.25, 3.25),
        (".5", 0.5),
        ("+7.", 7.0),
        ("1e3", 1000.0),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_transaction_amount(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "abc", "$10", "1_000", "inf", "-Infinity", "nan", "100 USD", None, True, [1]]
)
def test_parse_amount_falls_back_to_nan(raw):
    assert math.isnan(parse_transaction_amount(raw))
