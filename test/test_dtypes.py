import datetime
import decimal

import pytest

from rowframe import dtypes


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        (float("nan"), "null"),
        (True, "boolean"),
        (1, "numeric"),
        (2.5, "numeric"),
        (decimal.Decimal("1.5"), "numeric"),
        ("3.5", "numeric"),
        ("abc", "string"),
        ("", "string"),
        (datetime.date(2024, 1, 1), "date"),
        (datetime.datetime(2024, 1, 1, 10), "date"),
        ([1], "object"),
    ],
)
def test_detect_type(value, expected):
    assert dtypes.detect_type(value) == expected


@pytest.mark.parametrize(
    "values,expected",
    [
        ([1, None, "2"], "numeric"),
        (["a", None], "string"),
        ([], "null"),
        ([{"a": 1}], "mixed"),
        ([1, True], "mixed"),
    ],
)
def test_infer_dtype(values, expected):
    assert dtypes.infer_dtype(values) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (3, 3),
        (2.5, 2.5),
        (decimal.Decimal("1.5"), 1.5),
        (" 42 ", 42),
        ("1e3", 1000.0),
        ("inf", None),
        ("abc", None),
        ("", None),
        (None, None),
        (float("nan"), None),
        (False, None),
        ([1], None),
    ],
)
def test_to_numeric(value, expected):
    assert dtypes.to_numeric(value) == expected


def test_numeric_values():
    assert dtypes.numeric_values([1, "2", None, "x", True, 3.5]) == [1, 2, 3.5]
