"""Plan nodes that perform sorting of data.

When computing ranks or looking for most significant
values, it's often necessary to sort the data based
on one or more columns.

This module implements the sorting capabilities.
"""

from typing import Any

from .. import dtypes, validation
from ..errors import DataFrameTypeError, ValidationError
from .base import TableNode


class SortNode(TableNode):
    """Sort data in-memory based on one or more columns.

    The node expects a list of columns and a list of
    sort directions. The data will be sorted based on
    the columns in the order they are provided.

    The sort directions are used to specify if the
    sorting should be ascending or descending.

    >>> from rowframe import DataFrame
    >>> from rowframe.compute import TableSource
    >>> data = DataFrame([[1], [None], [3], [2]], columns=["values"])
    >>> # Sort the data in descending order
    >>> SortNode(["values"], [True], TableSource(data)).execute().to_list()
    [[3], [2], [1], [None]]

    Missing values always come last, whatever the direction,
    and rows with equal values keep their original order.
    """

    def __init__(
        self, keys: list[str], descending: list[bool], child: TableNode
    ) -> None:
        """
        :param keys: The columns to sort by in the order they should be sorted.
        :param descending: If each column should be sorted in a descending order.
        :param child: The node emitting the data to be sorted.
        """
        keys = validation.normalize_column_list(keys, operation="sort")
        if len(keys) != len(descending):
            raise ValidationError(
                "Keys and descending must have the same length",
                operation="sort",
                expected=len(keys),
                actual=len(descending),
            )

        self.sorting = list(
            zip(keys, ("descending" if desc else "ascending" for desc in descending))
        )
        self.child = child

    def __str__(self) -> str:
        return f"SortNode(sorting={self.sorting}, {self.child})"

    def execute(self) -> Any:
        """Sort the rows of the table emitted by the child node.

        The rows are sorted once for each key, starting from the
        least significant one. As each pass is a stable sort, rows
        that are equal for a key keep the order given by the next keys.
        """
        table = self._execute_child(self.child)
        validation.validate_columns_exist(
            [name for name, _ in self.sorting], table.columns, operation="sort"
        )
        rows = list(table.itertuples())

        order = list(range(len(rows)))
        for name, direction in reversed(self.sorting):
            position = table.columns.index(name)
            present = [i for i in order if not dtypes.is_null(rows[i][position])]
            missing = [i for i in order if dtypes.is_null(rows[i][position])]
            try:
                present.sort(
                    key=lambda i: rows[i][position], reverse=direction == "descending"
                )
            except TypeError as e:
                raise DataFrameTypeError(
                    f"Values of column '{name}' can't be compared: {e}",
                    operation="sort",
                    column=name,
                ) from e
            order = present + missing

        return type(table)([rows[i] for i in order], columns=table.columns)
