"""Detect the type of values stored in tables and series.

Tables are row oriented and can store any scalar in any cell,
so types are not declared upfront but inferred from the values.

Each value is classified in one of the following kinds:

* ``null`` for ``None`` and ``NaN``
* ``boolean`` for ``True`` and ``False``
* ``date`` for :class:`datetime.date` and :class:`datetime.datetime`
* ``numeric`` for real numbers and strings that parse as numbers
* ``string`` for any other string

A sequence of values then gets the dtype shared by
all its non null values, or ``mixed`` when they disagree:

>>> infer_dtype([1, "2", None, 3.5])
'numeric'
>>> infer_dtype([1, "a", True])
'mixed'
>>> infer_dtype([None, None])
'null'

Aggregations only care about numbers, :func:`to_numeric`
coerces a value to a number when possible and returns ``None``
for anything that can't be used in arithmetic:

>>> to_numeric("42"), to_numeric("4.5"), to_numeric("abc"), to_numeric(True)
(42, 4.5, None, None)
"""

import datetime
import decimal
import math
import numbers
from typing import Any, Iterable

NULL = "null"
NUMERIC = "numeric"
STRING = "string"
BOOLEAN = "boolean"
DATE = "date"
MIXED = "mixed"
OBJECT = "object"

DTYPES = (NUMERIC, STRING, BOOLEAN, DATE, NULL, MIXED)

Number = int | float


def is_null(value: Any) -> bool:
    """Tell if a value represents a missing value."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def is_numeric_string(value: Any) -> bool:
    """Tell if a value is a string holding a finite number, like ``"3.5"``."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        return math.isfinite(float(value))
    except ValueError:
        return False


def is_numeric(value: Any) -> bool:
    """Tell if a value can take part in arithmetic.

    Booleans are not considered numbers even though in
    Python they are a subclass of ``int``.
    """
    if is_null(value) or isinstance(value, bool):
        return False
    if isinstance(value, (numbers.Real, decimal.Decimal)):
        return True
    return is_numeric_string(value)


def detect_type(value: Any) -> str:
    """Classify a single value in one of the known kinds."""
    if is_null(value):
        return NULL
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (datetime.date, datetime.datetime)):
        return DATE
    if is_numeric(value):
        return NUMERIC
    if isinstance(value, str):
        return STRING
    return OBJECT


def infer_dtype(values: Iterable[Any]) -> str:
    """Infer the dtype of a sequence of values.

    Null values are ignored, if all the remaining values
    share the same kind that is the dtype of the sequence,
    otherwise the sequence is ``mixed``.
    """
    kinds = {detect_type(v) for v in values}
    kinds.discard(NULL)
    if not kinds:
        return NULL
    if len(kinds) == 1:
        kind = kinds.pop()
        return MIXED if kind == OBJECT else kind
    return MIXED


def to_numeric(value: Any) -> Number | None:
    """Coerce a value to a number or return ``None`` when it's not possible.

    Integers are preserved as they are, so that sums of integers
    remain integers, any other real number is converted to ``float``.
    """
    if is_null(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (numbers.Real, decimal.Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def numeric_values(values: Iterable[Any]) -> list[Number]:
    """Coerce all values to numbers, dropping those that can't be coerced."""
    numbers_ = (to_numeric(v) for v in values)
    return [n for n in numbers_ if n is not None]
