"""The Dataframe object itself."""

from collections.abc import Mapping
from typing import Any, Callable, Iterator, Self, Sequence

import pyarrow as pa

from .. import dtypes, validation
from ..compute import (
    AggregateNode,
    ApplyNode,
    ConcatNode,
    FilterNode,
    GroupBy,
    JoinNode,
    MapNode,
    PaginateNode,
    ProjectNode,
    ReplaceNode,
    SortNode,
    TableSource,
    stats,
)
from ..errors import DataFrameTypeError, StructureError, ValidationError
from .series import Series

__all__ = ("DataFrame", "merge", "concat")

DESCRIBE_STATISTICS = ("count", "mean", "std", "min", "median", "max")


class DataFrame:
    """Data structure that handles data in rows and columns.

    The DataFrame object allows to represent in-memory data
    and perform transformations over it.

    The data is fully materialized and row oriented, every
    row has exactly one value for each column. DataFrames are
    immutable: every transformation returns a new DataFrame
    and leaves the original one untouched.

    >>> df = DataFrame(
    ...     [[1, "Alice", 25], [2, "Bob", 30], [3, "Charlie", 35]],
    ...     columns=["id", "name", "age"],
    ... )
    >>> df.shape
    (3, 3)
    >>> df.filter(lambda row: row["age"] > 28).select(["name"]).to_records()
    [{'name': 'Bob'}, {'name': 'Charlie'}]
    >>> df.column("age").mean()
    30.0
    """

    def __init__(
        self,
        data: Any = None,
        columns: Sequence[str] | None = None,
        index: Sequence[Any] | None = None,
    ) -> None:
        """
        :param data: The rows of the table. Either a list of positional rows
                     (sequences of values), a list of mappings from column
                     names to values, or a :class:`pyarrow.Table`.
        :param columns: The names of the columns. When omitted they are
                        generated as ``"0", "1", ...`` for positional rows
                        and taken from the keys of mapping rows.
        :param index: The labels of the rows, defaults to their positions.
        """
        if data is None:
            data = []
        if isinstance(data, (pa.Table, pa.RecordBatch)):
            data, columns = _rows_from_arrow(data, columns)

        validation.validate_structure(data)
        if data and isinstance(data[0], Mapping):
            columns, rows = _rows_from_mappings(data, columns)
        else:
            width = len(data[0]) if data else None
            if columns is None:
                columns = [str(i) for i in range(width or 0)]
            validation.validate_column_names(columns, expected_length=width)
            rows = [tuple(row) for row in data]

        if index is None:
            index = range(len(rows))
        index = tuple(index)
        if len(index) != len(rows):
            raise ValidationError(
                f"Index has {len(index)} labels, expected {len(rows)}",
                operation="DataFrame creation",
            )

        self._columns = tuple(columns)
        self._positions = {name: pos for pos, name in enumerate(self._columns)}
        self._rows = rows
        self._index = index
        self._column_cache: dict[str, tuple] = {}

    @classmethod
    def from_arrow(cls, table: pa.Table | pa.RecordBatch) -> Self:
        """Create a DataFrame out of the data of a :class:`pyarrow.Table`."""
        return cls(table)

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def index(self) -> list[Any]:
        return list(self._index)

    @property
    def rows(self) -> int:
        return len(self._rows)

    @property
    def cols(self) -> int:
        return len(self._columns)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def empty(self) -> bool:
        return not self._rows

    @property
    def dtypes(self) -> dict[str, str]:
        """The dtype of each column, see :mod:`rowframe.dtypes`."""
        return {name: dtypes.infer_dtype(self._values(name)) for name in self._columns}

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        """Iterate over the rows, each provided as a new mapping."""
        for row in self._rows:
            yield dict(zip(self._columns, row))

    def itertuples(self) -> Iterator[tuple]:
        """Iterate over the rows as tuples of values in column order."""
        return iter(self._rows)

    def __contains__(self, name: object) -> bool:
        return name in self._positions

    def __getitem__(self, key: str | Sequence[str]) -> "Series | DataFrame":
        """``df["a"]`` returns a column, ``df[["a", "b"]]`` selects columns."""
        if isinstance(key, str):
            return self.column(key)
        if validation.is_row_sequence(key):
            return self.select(key)
        raise DataFrameTypeError(
            f"DataFrame indices must be a column name or a list of names, got {type(key).__name__}",
            operation="item access",
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataFrame):
            return NotImplemented
        return (
            self._columns == other._columns
            and self._index == other._index
            and self._rows == other._rows
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"DataFrame(columns={self.columns}, rows={self.rows})"

    def get_row(self, rowidx: int) -> dict[str, Any]:
        """Get a row as a new mapping from column names to values."""
        validation.validate_row_index(rowidx, self.rows, operation="row access")
        return dict(zip(self._columns, self._rows[rowidx]))

    def get_cell(self, rowidx: int, column: str) -> Any:
        """Get the value of ``column`` in the row at position ``rowidx``."""
        validation.validate_row_index(rowidx, self.rows, operation="cell access")
        validation.validate_column_exists(column, self._columns, operation="cell access")
        return self._rows[rowidx][self._positions[column]]

    def _values(self, name: str) -> tuple:
        # DataFrames are immutable, so the cache is valid for the whole instance life.
        values = self._column_cache.get(name)
        if values is None:
            position = self._positions[name]
            values = self._column_cache[name] = tuple(row[position] for row in self._rows)
        return values

    def column(self, name: str) -> Series:
        """Get the values of a column as a new :class:`Series`."""
        validation.validate_column_exists(name, self._columns, operation="column access")
        return Series(list(self._values(name)), index=self._index, name=name)

    def to_records(self) -> list[dict[str, Any]]:
        """All the rows as a list of mappings."""
        return list(self)

    def to_list(self) -> list[list[Any]]:
        """All the rows as a list of lists of values in column order."""
        return [list(row) for row in self._rows]

    def to_dict(self) -> dict[str, list[Any]]:
        """All the data as a mapping from column names to the column values."""
        return {name: list(self._values(name)) for name in self._columns}

    def to_arrow(self) -> pa.Table:
        """Convert the data to a :class:`pyarrow.Table`."""
        arrays = []
        for name in self._columns:
            try:
                arrays.append(pa.array(self._values(name)))
            except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
                raise DataFrameTypeError(
                    f"Column '{name}' can't be converted to arrow: {e}",
                    operation="to_arrow",
                    column=name,
                ) from e
        return pa.table(arrays, names=list(self._columns))

    def select(self, columns: Sequence[str]) -> Self:
        """Return a new DataFrame with only the given columns, in the given order."""
        return ProjectNode(columns, None, TableSource(self)).execute()

    def assign(self, **projections: Callable[[dict[str, Any]], Any]) -> Self:
        """Return a new DataFrame with columns computed from each row.

        Each keyword is the name of a column and its value a function
        receiving the row as a mapping and returning the value for
        the column. Existing columns are replaced, new ones appended.
        """
        return ProjectNode(None, projections, TableSource(self)).execute()

    def filter(self, predicate: Callable[[dict[str, Any]], Any]) -> Self:
        """Return a new DataFrame with only the rows for which ``predicate`` is true.

        The predicate receives each row as a mapping. The resulting
        DataFrame keeps all the columns even when no row matches.
        """
        return FilterNode(predicate, TableSource(self)).execute()

    def groupby(self, keys: str | Sequence[str]) -> GroupBy:
        """Group rows by the values of one or more columns.

        >>> df = DataFrame([["A", 1], ["A", 3], ["B", 10]], columns=["k", "v"])
        >>> df.groupby("k").mean().to_records()
        [{'k': 'A', 'v': 2.0}, {'k': 'B', 'v': 10.0}]
        """
        return GroupBy(self, keys)

    def aggregate(self, keys: str | Sequence[str], aggregation: str) -> Self:
        """Shortcut for ``df.groupby(keys).agg(aggregation)``."""
        return AggregateNode(keys, aggregation, TableSource(self)).execute()

    def merge(
        self,
        right: "DataFrame",
        on: str | Sequence[str],
        how: str | None = None,
        suffixes: Sequence[str] | None = None,
    ) -> Self:
        """Join this DataFrame with ``right``, see :func:`merge`."""
        return merge(self, right, on, how=how, suffixes=suffixes)

    def apply(self, column: str, fn: Callable[[Any], Any]) -> Self:
        """Return a new DataFrame where ``column`` values are replaced by ``fn(value)``."""
        return ApplyNode(column, fn, TableSource(self)).execute()

    def map(self, fn: Callable[[Any], Any]) -> Self:
        """Return a new DataFrame where every value is replaced by ``fn(value)``."""
        return MapNode(fn, TableSource(self)).execute()

    def replace(self, old: Any, new: Any, column: str | None = None) -> Self:
        """Return a new DataFrame where values matching ``old`` are ``new``.

        ``old`` can be a value or a function returning ``True`` for the
        values to replace. When ``column`` is provided only that
        column is affected.
        """
        return ReplaceNode(old, new, column, TableSource(self)).execute()

    def sort_values(
        self, by: str | Sequence[str], descending: bool | Sequence[bool] = False
    ) -> Self:
        """Return a new DataFrame with rows sorted by one or more columns."""
        keys = validation.normalize_column_list(by, operation="sort")
        if isinstance(descending, bool):
            descending = [descending] * len(keys)
        return SortNode(keys, list(descending), TableSource(self)).execute()

    def head(self, n: int = 5) -> Self:
        """Return a new DataFrame with the first ``n`` rows."""
        validation.validate_size(n, "n", "head")
        return PaginateNode(0, n, TableSource(self)).execute()

    def tail(self, n: int = 5) -> Self:
        """Return a new DataFrame with the last ``n`` rows."""
        validation.validate_size(n, "n", "tail")
        return PaginateNode(max(self.rows - n, 0), n, TableSource(self)).execute()

    def slice(self, offset: int, length: int) -> Self:
        """Return a new DataFrame with ``length`` rows starting at ``offset``."""
        return PaginateNode(offset, length, TableSource(self)).execute()

    def describe(self) -> Self:
        """Descriptive statistics of the columns holding numbers.

        Returns a DataFrame with a ``statistic`` column naming the
        statistic of each row, followed by one column for each column
        that contains at least one numeric value.

        >>> df = DataFrame([[1, "a"], [2, "b"], [3, None]], columns=["n", "s"])
        >>> df.describe().to_records()[:2]
        [{'statistic': 'count', 'n': 3}, {'statistic': 'mean', 'n': 2.0}]
        """
        kernels = {
            "count": len,
            "mean": stats.mean,
            "std": stats.std,
            "min": stats.minimum,
            "median": stats.median,
            "max": stats.maximum,
        }
        numbers = {}
        for name in self._columns:
            values = dtypes.numeric_values(self._values(name))
            if values:
                numbers[name] = values

        rows = [
            [statistic] + [kernels[statistic](values) for values in numbers.values()]
            for statistic in DESCRIBE_STATISTICS
        ]
        return self.__class__(rows, columns=["statistic", *numbers])


def merge(
    left: DataFrame,
    right: DataFrame,
    on: str | Sequence[str],
    how: str | None = None,
    suffixes: Sequence[str] | None = None,
) -> DataFrame:
    """Join two DataFrames on one or more shared key columns.

    :param left: The left side of the join.
    :param right: The right side of the join.
    :param on: The key column, or list of key columns, present in both sides.
    :param how: One of ``inner``, ``left``, ``right`` or ``outer``.
                Defaults to the ``merge_how`` option.
    :param suffixes: Appended to the left and right copies of non key
                     columns present in both sides. Defaults to the
                     ``merge_suffixes`` option.

    >>> people = DataFrame([[1, "Alice"], [2, "Bob"], [3, "Carl"]], columns=["id", "name"])
    >>> ages = DataFrame([[1, 25], [2, 30]], columns=["id", "age"])
    >>> merge(people, ages, on="id", how="left").to_list()
    [[1, 'Alice', 25], [2, 'Bob', 30], [3, 'Carl', None]]
    """
    return JoinNode(on, how, suffixes, TableSource(left), TableSource(right)).execute()


def concat(tables: Sequence[DataFrame], axis: int = 0) -> DataFrame:
    """Stack DataFrames vertically (``axis=0``) or horizontally (``axis=1``).

    >>> a = DataFrame([[1, 2]], columns=["x", "y"])
    >>> b = DataFrame([[3, 4]], columns=["y", "z"])
    >>> concat([a, b]).to_list()
    [[1, 2, None], [None, 3, 4]]
    """
    if not validation.is_row_sequence(tables):
        raise ValidationError(
            "concat expects a list of DataFrames",
            operation="concat",
            actual=type(tables).__name__,
        )
    return ConcatNode([TableSource(t) for t in tables], axis=axis).execute()


def _rows_from_mappings(
    data: Sequence[Mapping], columns: Sequence[str] | None
) -> tuple[list[str], list[tuple]]:
    if columns is None:
        columns = list(dict.fromkeys(key for row in data for key in row))
        validation.validate_column_names(columns)
    else:
        validation.validate_column_names(columns)
        known = set(columns)
        for rowidx, row in enumerate(data):
            for key in row:
                if key not in known:
                    raise StructureError(
                        f"Row {rowidx} has unknown column {key!r}",
                        operation="DataFrame creation",
                        value=rowidx,
                    )
    return list(columns), [tuple(row.get(name) for name in columns) for row in data]


def _rows_from_arrow(
    table: pa.Table | pa.RecordBatch, columns: Sequence[str] | None
) -> tuple[list[tuple], list[str]]:
    if columns is None:
        columns = table.column_names
    values = [table.column(i).to_pylist() for i in range(table.num_columns)]
    if not values:
        return [()] * table.num_rows, list(columns)
    return list(zip(*values)), list(columns)
