"""Plan nodes that compute aggregations.

Frequently when analysing data it's necessary
to compute statistics like the min, max, average, etc...
of the values of groups of rows.

For example, given the following data::

    city, shop, n_employees
    New York, Shop A, 10
    New York, Shop B, 15
    Los Angeles, Shop C, 8
    Los Angeles, Shop D, 12
    New York, Shop E, 20

We could group by city and compute the sum of the employees
to get::

    city, n_employees
    New York, 45
    Los Angeles, 20

Aggregating happens in two phases, first the rows
are partitioned in groups by a :class:`Grouping` and
then an :class:`Aggregation` reduces each group to a single row:

>>> from rowframe import DataFrame
>>> from rowframe.compute import TableSource
>>> data = DataFrame([
...     ["New York", "Shop A", 10],
...     ["New York", "Shop B", 15],
...     ["Los Angeles", "Shop C", 8],
...     ["Los Angeles", "Shop D", 12],
...     ["New York", "Shop E", 20],
... ], columns=["city", "shop", "n_employees"])
>>> AggregateNode(["city"], "sum", TableSource(data)).execute().to_list()
[['New York', None, 45], ['Los Angeles', None, 20]]

Groups are emitted in the order they are first met
and columns that don't hold numbers, like ``shop``,
lead to ``None`` values instead of failing.
"""

import abc
from typing import Any, Iterator, Sequence

from loguru import logger

from .. import dtypes, validation
from ..errors import LabelNotFoundError, ValidationError
from . import stats
from .base import TableNode
from .keys import KeyIndex, make_key

__all__ = (
    "Grouping",
    "Aggregation",
    "CountAggregation",
    "NumericAggregation",
    "SumAggregation",
    "MeanAggregation",
    "MinAggregation",
    "MaxAggregation",
    "StdAggregation",
    "AGGREGATIONS",
    "get_aggregation",
    "aggregate_groups",
    "AggregateNode",
    "GroupBy",
)


class Grouping(KeyIndex):
    """Partition the rows of a table by the values of key columns.

    Rows share a group when all their key values are the same,
    the groups are recorded in the order they are first met.

    When grouping by multiple keys, groups are also available
    as a hierarchy where each level is keyed by the canonical
    value of one key column and the last level holds the
    positions of the rows:

    >>> from rowframe import DataFrame
    >>> table = DataFrame([["A", 1], ["A", 2], ["B", 1], ["A", 1]], columns=["k1", "k2"])
    >>> grouping = Grouping(table, ["k1", "k2"])
    >>> grouping.hierarchy
    {'A': {'1': [0, 3], '2': [1]}, 'B': {'1': [2]}}
    >>> grouping.key_values
    [('A', 1), ('A', 2), ('B', 1)]
    """

    def __init__(
        self, table: Any, keys: str | Sequence[str], typed: bool | None = None
    ) -> None:
        """
        :param table: The table whose rows have to be grouped.
        :param keys: The column, or list of columns, to group by.
        :param typed: Compare keys by type and value,
                      defaults to the ``typed_keys`` option.
        """
        keys = validation.normalize_column_list(keys, operation="groupby")
        validation.validate_columns_exist(keys, table.columns, operation="groupby")
        super().__init__(table, keys, typed=typed)

        rows = list(table.itertuples())
        positions = [table.columns.index(k) for k in self.keys]

        # The values of each group come from its first row,
        # so that they keep their original type.
        self.key_values: list[tuple] = []
        self.hierarchy: dict[Any, Any] = {}
        for key, rowids in self.rows_by_key.items():
            first = rows[rowids[0]]
            self.key_values.append(tuple(first[p] for p in positions))

            level = self.hierarchy
            for part in key[:-1]:
                level = level.setdefault(part, {})
            level[key[-1]] = rowids

    @property
    def groups(self) -> list[tuple[tuple, list[int]]]:
        """The values of each group key paired to the positions of its rows."""
        return list(zip(self.key_values, self.rows_by_key.values()))


class Aggregation(abc.ABC):
    """Reduce the rows of a group to the values of a single row.

    Each aggregation declares the columns it computes
    through :meth:`output_columns` and provides the values
    of those columns for a group through :meth:`compute`.
    """

    name: str = ""

    @abc.abstractmethod
    def output_columns(self, columns: list[str], keys: list[str]) -> list[str]:
        """The columns computed by the aggregation.

        :param columns: The columns of the table being aggregated.
        :param keys: The columns the table is grouped by.
        """
        ...

    @abc.abstractmethod
    def compute(
        self, rows: list[tuple], columns: list[str], keys: list[str]
    ) -> list[Any]:
        """Compute the values of the output columns for one group.

        :param rows: The rows of the group, as tuples in column order.
        :param columns: The columns of the table being aggregated.
        :param keys: The columns the table is grouped by.
        """
        ...

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __repr__(self) -> str:
        return str(self)


class CountAggregation(Aggregation):
    """Count the rows of each group in a ``count`` column."""

    name = "count"

    def output_columns(self, columns: list[str], keys: list[str]) -> list[str]:
        return ["count"]

    def compute(
        self, rows: list[tuple], columns: list[str], keys: list[str]
    ) -> list[Any]:
        return [len(rows)]


class NumericAggregation(Aggregation):
    """Reduce the numeric values of each non key column.

    Values are coerced to numbers, numeric strings included,
    and anything that isn't a number (like ``None``) is discarded.
    When no number is left, the result is ``None`` instead of an error.

    Subclasses only have to provide the :meth:`reduce` method.
    """

    def __init__(self, columns: Sequence[str] | None = None) -> None:
        """
        :param columns: The columns to aggregate,
                        ``None`` means all the non key columns.
        """
        if columns is not None:
            columns = validation.normalize_column_list(columns, operation=self.name)
        self.columns = columns

    def __str__(self) -> str:
        if self.columns is None:
            return f"{self.__class__.__name__}()"
        return f"{self.__class__.__name__}({self.columns})"

    @abc.abstractmethod
    def reduce(self, values: list[dtypes.Number]) -> Any:
        """Reduce a non empty list of numbers to a single value."""
        ...

    def output_columns(self, columns: list[str], keys: list[str]) -> list[str]:
        if self.columns is None:
            return [c for c in columns if c not in keys]
        validation.validate_columns_exist(self.columns, columns, operation=self.name)
        return [c for c in self.columns if c not in keys]

    def compute(
        self, rows: list[tuple], columns: list[str], keys: list[str]
    ) -> list[Any]:
        results = []
        for name in self.output_columns(columns, keys):
            position = columns.index(name)
            values = dtypes.numeric_values(row[position] for row in rows)
            results.append(self.reduce(values) if values else None)
        return results


class SumAggregation(NumericAggregation):
    name = "sum"

    def reduce(self, values: list[dtypes.Number]) -> Any:
        return stats.total(values)


class MeanAggregation(NumericAggregation):
    name = "mean"

    def reduce(self, values: list[dtypes.Number]) -> Any:
        return stats.mean(values)


class MinAggregation(NumericAggregation):
    name = "min"

    def reduce(self, values: list[dtypes.Number]) -> Any:
        return stats.minimum(values)


class MaxAggregation(NumericAggregation):
    name = "max"

    def reduce(self, values: list[dtypes.Number]) -> Any:
        return stats.maximum(values)


class StdAggregation(NumericAggregation):
    """Sample standard deviation, ``None`` for groups with less than two numbers."""

    name = "std"

    def reduce(self, values: list[dtypes.Number]) -> Any:
        return stats.std(values)


AGGREGATIONS: dict[str, type[Aggregation]] = {
    cls.name: cls
    for cls in (
        CountAggregation,
        SumAggregation,
        MeanAggregation,
        MinAggregation,
        MaxAggregation,
        StdAggregation,
    )
}


def get_aggregation(aggregation: str | Aggregation) -> Aggregation:
    """Get the aggregation for a name like ``"mean"``, aggregations are returned as is."""
    if isinstance(aggregation, Aggregation):
        return aggregation
    validation.validate_one_of(
        aggregation, list(AGGREGATIONS), "aggregation", "aggregate"
    )
    return AGGREGATIONS[aggregation]()


def aggregate_groups(grouping: Grouping, table: Any, aggregation: Aggregation) -> Any:
    """Reduce each group of ``grouping`` to a row of a new table.

    The resulting table has the key columns followed by the
    columns computed by the aggregation and one row for each group.
    A computed column named like a key column replaces its values:

    >>> from rowframe import DataFrame
    >>> data = DataFrame([["A"], ["B"], ["A"]], columns=["count"])
    >>> aggregate_groups(Grouping(data, "count"), data, CountAggregation()).to_list()
    [[2], [1]]
    """
    keys = grouping.keys
    columns = table.columns
    rows = list(table.itertuples())
    output_columns = aggregation.output_columns(columns, keys)
    result_columns = list(dict.fromkeys(keys + output_columns))
    positions = [result_columns.index(name) for name in output_columns]

    result = []
    for key_values, rowids in grouping.groups:
        group_rows = [rows[i] for i in rowids]
        row = list(key_values) + [None] * (len(result_columns) - len(keys))
        for position, value in zip(
            positions, aggregation.compute(group_rows, columns, keys)
        ):
            row[position] = value
        result.append(row)

    logger.debug(
        f"Aggregated {table.rows} rows in {len(result)} groups by {keys} with {aggregation}"
    )
    return type(table)(result, columns=result_columns)


class AggregateNode(TableNode):
    """Group data and compute an aggregation for each group.

    >>> from rowframe import DataFrame
    >>> from rowframe.compute import TableSource
    >>> data = DataFrame([["A", 1], ["A", 3], ["B", 10]], columns=["k", "v"])
    >>> AggregateNode(["k"], "count", TableSource(data)).execute().to_records()
    [{'k': 'A', 'count': 2}, {'k': 'B', 'count': 1}]
    """

    def __init__(
        self,
        keys: str | Sequence[str],
        aggregation: str | Aggregation,
        child: TableNode,
    ) -> None:
        """
        :param keys: The columns to group by.
        :param aggregation: The aggregation to compute, either an
                            :class:`Aggregation` or its name (``count``, ``sum``,
                            ``mean``, ``min``, ``max``, ``std``).
        :param child: The node emitting the table to aggregate.
        """
        self.keys = validation.normalize_column_list(keys, operation="groupby")
        self.aggregation = get_aggregation(aggregation)
        self.child = child

    def __str__(self) -> str:
        return f"AggregateNode(keys={self.keys}, aggregation={self.aggregation}, {self.child})"

    def execute(self) -> Any:
        table = self._execute_child(self.child)
        grouping = Grouping(table, self.keys)
        return aggregate_groups(grouping, table, self.aggregation)


class GroupBy:
    """Rows of a table grouped by the values of one or more columns.

    The groups are computed once, when the GroupBy is created,
    and each aggregation method returns a new table with
    one row for each group:

    >>> from rowframe import DataFrame
    >>> data = DataFrame([["A", 1], ["A", 3], ["B", 10]], columns=["k", "v"])
    >>> grouped = GroupBy(data, "k")
    >>> grouped.ngroups
    2
    >>> grouped.sum().to_list()
    [['A', 4], ['B', 10]]
    >>> grouped.std().to_list()
    [['A', 1.4142135623730951], ['B', None]]

    Groups can also be inspected individually:

    >>> grouped.get_group("A").to_list()
    [['A', 1], ['A', 3]]
    """

    def __init__(
        self, table: Any, keys: str | Sequence[str], typed: bool | None = None
    ) -> None:
        """
        :param table: The table to group.
        :param keys: The column, or list of columns, to group by.
        :param typed: Compare keys by type and value,
                      defaults to the ``typed_keys`` option.
        """
        self.table = table
        self.grouping = Grouping(table, keys, typed=typed)
        self.keys = self.grouping.keys
        logger.debug(f"Grouped {table.rows} rows in {self.ngroups} groups by {self.keys}")

    def __repr__(self) -> str:
        return f"GroupBy(keys={self.keys}, groups={self.ngroups})"

    @property
    def ngroups(self) -> int:
        return len(self.grouping)

    def __len__(self) -> int:
        return len(self.grouping)

    def _label(self, key_values: tuple) -> Any:
        return key_values[0] if len(self.keys) == 1 else key_values

    def _subtable(self, rows: list[tuple], rowids: list[int]) -> Any:
        return type(self.table)([rows[i] for i in rowids], columns=self.table.columns)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        """Iterate over ``(key, table)`` pairs, one for each group.

        The key is the value of the key column when grouping
        by a single column and a tuple of values otherwise.
        """
        rows = list(self.table.itertuples())
        for key_values, rowids in self.grouping.groups:
            yield self._label(key_values), self._subtable(rows, rowids)

    @property
    def indices(self) -> dict[Any, list[int]]:
        """The positions of the rows of each group."""
        return {
            self._label(key_values): list(rowids)
            for key_values, rowids in self.grouping.groups
        }

    def get_group(self, key: Any) -> Any:
        """Get the rows of a group as a new table.

        :param key: The value of the key column, or a tuple with
                    one value for each key column when grouping by multiple columns.
        """
        values = (key,) if len(self.keys) == 1 else key
        if not validation.is_row_sequence(values) or len(values) != len(self.keys):
            raise LabelNotFoundError(
                f"Group key {key!r} must have one value for each of {self.keys}",
                operation="get_group",
                value=key,
            )
        rowids = self.grouping.lookup(make_key(values, typed=self.grouping.typed))
        if not rowids:
            raise LabelNotFoundError(
                f"Group {key!r} does not exist", operation="get_group", value=key
            )
        return self._subtable(list(self.table.itertuples()), rowids)

    def agg(
        self, aggregation: str | Aggregation, columns: Sequence[str] | None = None
    ) -> Any:
        """Compute an aggregation for each group.

        :param aggregation: An :class:`Aggregation` or its name.
        :param columns: Restrict a numeric aggregation to these columns.
        """
        aggregation = get_aggregation(aggregation)
        if columns is not None:
            if not isinstance(aggregation, NumericAggregation):
                raise ValidationError(
                    f"Aggregation {aggregation} does not accept columns",
                    operation="aggregate",
                    value=list(columns),
                )
            aggregation = type(aggregation)(columns)
        return aggregate_groups(self.grouping, self.table, aggregation)

    aggregate = agg

    def count(self) -> Any:
        """Number of rows in each group, in a ``count`` column."""
        return self.agg(CountAggregation())

    def sum(self) -> Any:
        return self.agg(SumAggregation())

    def mean(self) -> Any:
        return self.agg(MeanAggregation())

    def min(self) -> Any:
        return self.agg(MinAggregation())

    def max(self) -> Any:
        return self.agg(MaxAggregation())

    def std(self) -> Any:
        """Sample standard deviation, ``None`` for groups with less than two numbers."""
        return self.agg(StdAggregation())
