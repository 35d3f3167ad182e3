"""Plan nodes that implement filtering of rows.

A common request when analysing data is to pick only
the rows that respect a specific condition.
An example is the ``WHERE`` condition in SQL queries.

This module implements the basic filtering capabilities.
"""

from typing import Any, Callable

from loguru import logger

from .. import validation
from ..errors import CallbackError, ColumnNotFoundError
from ..utils.inspect import get_qualname
from .base import TableNode

Predicate = Callable[[dict[str, Any]], Any]


class FilterNode(TableNode):
    """Filter data based on a predicate function.

    The filter expects a function that when applied
    to a row of the table being filtered returns ``True``
    or ``False`` to mark if the row has to be preserved
    or discarded. The rows are provided to the predicate
    as a mapping from column names to values.

    >>> from rowframe import DataFrame
    >>> from rowframe.compute import TableSource
    >>> data = DataFrame([[1], [2], [3], [4], [5]], columns=["values"])
    >>> FilterNode(lambda row: row["values"] > 3, TableSource(data)).execute().to_list()
    [[4], [5]]

    Rows are emitted in their original order and
    even when no row is preserved the columns are:

    >>> FilterNode(lambda row: False, TableSource(data)).execute().columns
    ['values']
    """

    def __init__(self, predicate: Predicate, child: TableNode) -> None:
        """
        :param predicate: The function that tells which rows to keep.
        :param child: The node emitting the table to be filtered.
        """
        self.predicate = validation.validate_callable(predicate, "predicate", "filter")
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={get_qualname(self.predicate)}, child={self.child})"

    def execute(self) -> Any:
        """Apply the predicate to each row of the child table.

        Each row is provided to the predicate as a new mapping,
        so the predicate can't alter the data of the source table.
        Any failure of the predicate stops the filtering.
        """
        table = self._execute_child(self.child)
        columns = table.columns
        rows = []
        for rowidx, row in enumerate(table.itertuples()):
            try:
                keep = self.predicate(dict(zip(columns, row)))
            except KeyError as e:
                missing = e.args[0] if e.args else None
                raise CallbackError(
                    f"Filter predicate failed at row {rowidx}: "
                    f"{ColumnNotFoundError(missing, available=columns)}",
                    operation="filter",
                    column=missing,
                    value=rowidx,
                ) from e
            except Exception as e:
                raise CallbackError(
                    f"Filter predicate failed at row {rowidx}: {e!r}",
                    operation="filter",
                    value=rowidx,
                ) from e
            if keep:
                rows.append(row)

        logger.debug(f"Filter kept {len(rows)} of {table.rows} rows")
        return type(table)(rows, columns=columns)
