"""Numeric kernels shared by aggregations and series statistics.

The same functions are used by :class:`rowframe.GroupBy` and by
:class:`rowframe.Series`, so that computing the mean of a column
through a group or through the column itself always leads to
the same result.

Values are expected to be already coerced to numbers
(see :func:`rowframe.dtypes.numeric_values`) and the heavy
lifting is delegated to ``pyarrow.compute``:

>>> total([1, 2, 3])
6
>>> mean([1, 3])
2.0
>>> round(std([1, 2, 3, 4, 5]), 4)
1.5811

Kernels return ``None`` when the result can't be computed,
like the standard deviation of a single value:

>>> std([1]) is None
True
"""

import pyarrow as pa
import pyarrow.compute as pc

from ..dtypes import Number

_INT64_BOUNDS = (-(2**63), 2**63 - 1)


def _fits_int64(values: list[Number]) -> bool:
    return all(
        isinstance(v, int) and _INT64_BOUNDS[0] <= v <= _INT64_BOUNDS[1]
        for v in values
    )


def to_array(values: list[Number]) -> pa.Array:
    """Convert numbers to an arrow array.

    Integers that fit 64 bits stay integers, so that
    sums of integers are integers too, anything else
    is converted to double precision floats.
    """
    if _fits_int64(values):
        return pa.array(values, type=pa.int64())
    return pa.array([float(v) for v in values], type=pa.float64())


def total(values: list[Number]) -> Number | None:
    """Sum of the values.

    Integers are summed exactly, even when the total
    doesn't fit 64 bits:

    >>> total([2**62, 2**62])
    9223372036854775808
    """
    if not values:
        return None
    if all(isinstance(v, int) for v in values):
        if not _fits_int64(values) or sum(abs(v) for v in values) > _INT64_BOUNDS[1]:
            # arrow int64 sums wrap around on overflow.
            return sum(values)
    return pc.sum(to_array(values)).as_py()


def mean(values: list[Number]) -> float | None:
    """Arithmetic mean of the values."""
    if not values:
        return None
    return pc.mean(to_array(values)).as_py()


def _source_value(values: list[Number], array: pa.Array, result: pa.Scalar) -> Number:
    # Mixed integers and floats are compared as floats,
    # the value is looked up again to return it with its original type.
    position = pc.index(array, result).as_py()
    if position < 0:
        return result.as_py()
    return values[position]


def minimum(values: list[Number]) -> Number | None:
    """Smallest of the values, as found in ``values``.

    >>> minimum([2.5, 1])
    1
    """
    if not values:
        return None
    array = to_array(values)
    return _source_value(values, array, pc.min(array))


def maximum(values: list[Number]) -> Number | None:
    """Biggest of the values, as found in ``values``."""
    if not values:
        return None
    array = to_array(values)
    return _source_value(values, array, pc.max(array))


def variance(values: list[Number]) -> float | None:
    """Sample variance of the values (divides by ``n - 1``)."""
    if len(values) < 2:
        return None
    return pc.variance(to_array(values), ddof=1).as_py()


def std(values: list[Number]) -> float | None:
    """Sample standard deviation of the values (divides by ``n - 1``)."""
    if len(values) < 2:
        return None
    return pc.stddev(to_array(values), ddof=1).as_py()


def median(values: list[Number]) -> float | None:
    """Median of the values, averaging the two central ones for even counts."""
    if not values:
        return None
    return pc.quantile(to_array(values), q=0.5, interpolation="linear")[0].as_py()
