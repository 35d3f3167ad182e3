"""Support limiting or skipping rows in an execution plan.

Implements nodes whose purpose is to slice the rows
emitted by a plan, discarding the rows that
are not part of the selected slice of data.
"""

from typing import Any

from .. import validation
from .base import TableNode


class PaginateNode(TableNode):
    """Emit only one page of the received data.

    Given a starting index and a length, only emit
    length rows after the starting index is reached.

    For example if ``offset=1`` and ``length=1``
    only the second row will be emitted::

        0: skip because < offset
        1: emit
        2: skip because > length=1 and one row was already emitted.

    >>> from rowframe import DataFrame
    >>> from rowframe.compute import TableSource
    >>> data = DataFrame([[0], [1], [2]], columns=["n"])
    >>> PaginateNode(1, 1, TableSource(data)).execute().to_list()
    [[1]]

    Pages past the end of the data are empty,
    but still have the columns of the data.
    """

    def __init__(self, offset: int, length: int, child: TableNode) -> None:
        """
        :param offset: From which row to take data, first row is 0.
        :param length: How many rows to take after offset was reached.
        :param child: the node from which to consume the rows.
        """
        self.offset = validation.validate_size(offset, "offset", "slice")
        self.length = validation.validate_size(length, "length", "slice")
        self.end = offset + length
        self.child = child

    def __str__(self) -> str:
        return f"PaginateNode({self.offset}:{self.end}, {self.child})"

    def execute(self) -> Any:
        table = self._execute_child(self.child)
        rows = list(table.itertuples())[self.offset : self.end]
        return type(table)(rows, columns=table.columns)
