"""One dimensional labeled sequence of values."""

from collections import Counter
from typing import Any, Callable, Iterator

import pyarrow as pa

from .. import dtypes, validation
from ..compute import stats
from ..compute.transform import value_matcher
from ..errors import (
    CallbackError,
    DataFrameTypeError,
    LabelNotFoundError,
    OperationError,
    ValidationError,
)


class Series:
    """An ordered sequence of values with a parallel index.

    Series are usually obtained from the columns of a table,
    in that case they are a copy of the data of the column,
    changing a Series never affects the table it came from.

    >>> ages = Series([25, None, 35], index=["alice", "bob", "carl"], name="age")
    >>> ages.dtype
    'numeric'
    >>> ages.get("carl")
    35
    >>> ages.mean()
    30.0

    Statistics exclude missing values and coerce numeric
    strings to numbers, like the aggregations of :class:`rowframe.GroupBy`.
    """

    def __init__(
        self, data: Any = (), index: Any = None, name: str | None = None
    ) -> None:
        """
        :param data: The values, a list or any other non string sequence.
        :param index: The labels of the values, defaults to their positions.
        :param name: An optional name, column projections carry the column name.
        """
        if isinstance(data, (pa.Array, pa.ChunkedArray)):
            data = data.to_pylist()
        if not validation.is_row_sequence(data):
            raise ValidationError(
                "Series data must be a list of values",
                operation="Series creation",
                expected="list",
                actual=type(data).__name__,
            )
        self._values = list(data)

        if index is None:
            index = range(len(self._values))
        index = list(index)
        if len(index) != len(self._values):
            raise ValidationError(
                f"Index has {len(index)} labels, expected {len(self._values)}",
                operation="Series creation",
            )
        self._index = index
        self.name = name
        self._dtype: str | None = None

    @property
    def values(self) -> list[Any]:
        return list(self._values)

    @property
    def index(self) -> list[Any]:
        return list(self._index)

    @property
    def dtype(self) -> str:
        """Kind of the values in the Series, see :mod:`rowframe.dtypes`."""
        if self._dtype is None:
            self._dtype = dtypes.infer_dtype(self._values)
        return self._dtype

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._values))

    def __getitem__(self, position: int | slice) -> Any:
        if isinstance(position, slice):
            return self.__class__(
                self._values[position], index=self._index[position], name=self.name
            )
        validation.validate_row_index(position, len(self), operation="series access")
        return self._values[position]

    def __repr__(self) -> str:
        return f"Series(name={self.name!r}, dtype={self.dtype!r}, length={len(self)})"

    def _position(self, label: Any, operation: str) -> int:
        try:
            return self._index.index(label)
        except ValueError:
            raise LabelNotFoundError(
                f"Label {label!r} is not in the index",
                operation=operation,
                value=label,
            ) from None

    def get(self, label: Any) -> Any:
        """Get the value associated to an index label."""
        return self._values[self._position(label, "get")]

    def set(self, label: Any, value: Any) -> None:
        """Change the value associated to an index label."""
        self._values[self._position(label, "set")] = value
        self._dtype = None

    def to_list(self) -> list[Any]:
        return list(self._values)

    def to_arrow(self) -> pa.Array:
        """Convert the values to a :class:`pyarrow.Array`."""
        try:
            return pa.array(self._values)
        except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
            raise DataFrameTypeError(
                f"Values of Series {self.name!r} can't be converted to arrow: {e}",
                operation="to_arrow",
                column=self.name,
            ) from e

    def map(self, fn: Callable[[Any], Any]) -> "Series":
        """Create a new Series applying ``fn`` to every value."""
        validation.validate_callable(fn, "fn", "map")
        mapped = []
        for position, value in enumerate(self._values):
            try:
                mapped.append(fn(value))
            except Exception as e:
                raise CallbackError(
                    f"Transformation function failed at position {position}: {e!r}",
                    operation="map",
                    column=self.name,
                    value=position,
                ) from e
        return self.__class__(mapped, index=self._index, name=self.name)

    apply = map

    def replace(self, old: Any, new: Any) -> "Series":
        """Create a new Series where values matching ``old`` are ``new``.

        ``old`` can be a value or a function returning ``True``
        for the values that have to be replaced.
        """
        matches = value_matcher(old, operation="replace")
        return self.__class__(
            [new if matches(v) else v for v in self._values],
            index=self._index,
            name=self.name,
        )

    def count(self) -> int:
        """Number of non null values."""
        return sum(1 for v in self._values if not dtypes.is_null(v))

    def _numbers(self, operation: str, minimum: int = 1) -> list[dtypes.Number]:
        numbers = dtypes.numeric_values(self._values)
        if len(numbers) < minimum:
            raise DataFrameTypeError(
                f"{operation} requires at least {minimum} numeric value{'s' if minimum > 1 else ''}"
                f", got {len(numbers)}",
                operation=operation,
                column=self.name,
            )
        return numbers

    def sum(self) -> dtypes.Number:
        return stats.total(self._numbers("sum"))

    def mean(self) -> float:
        return stats.mean(self._numbers("mean"))

    def median(self) -> float:
        return stats.median(self._numbers("median"))

    def var(self) -> float:
        """Sample variance, requires at least two numeric values."""
        return stats.variance(self._numbers("var", minimum=2))

    def std(self) -> float:
        """Sample standard deviation, requires at least two numeric values."""
        return stats.std(self._numbers("std", minimum=2))

    def min(self) -> Any:
        return self._extreme("min", stats.minimum, min)

    def max(self) -> Any:
        return self._extreme("max", stats.maximum, max)

    def _extreme(
        self,
        operation: str,
        numeric_kernel: Callable[[list], Any],
        builtin: Callable[[list], Any],
    ) -> Any:
        present = [v for v in self._values if not dtypes.is_null(v)]
        if not present:
            raise OperationError(
                f"Cannot compute {operation} of a Series without values",
                operation=operation,
                column=self.name,
            )
        if self.dtype in (dtypes.STRING, dtypes.DATE):
            try:
                return builtin(present)
            except TypeError as e:
                raise DataFrameTypeError(
                    f"Values can't be compared: {e}", operation=operation
                ) from e
        return numeric_kernel(self._numbers(operation))

    def mode(self) -> Any:
        """Most frequent non null value, the first seen wins ties."""
        # Booleans are kept apart from the numbers they compare equal to.
        counts = Counter(
            (isinstance(v, bool), v) for v in self._values if not dtypes.is_null(v)
        )
        if not counts:
            raise OperationError(
                "Cannot compute mode of a Series without values",
                operation="mode",
                column=self.name,
            )
        (_, value), _ = counts.most_common(1)[0]
        return value
