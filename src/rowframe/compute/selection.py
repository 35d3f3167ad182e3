"""Plan nodes that implement projection of columns.

A common request when analysing data is to pick only
some columns and to compute new columns out of the existing ones.
An example is the ``SELECT`` clause in SQL queries.

This module implements the basic projection capabilities.
"""

from typing import Any, Callable

from loguru import logger

from .. import validation
from ..errors import CallbackError
from ..utils.inspect import get_qualname
from .base import TableNode

RowFunction = Callable[[dict[str, Any]], Any]


class ProjectNode(TableNode):
    """Project data by selecting specific columns and computing new ones.

    The projection expects a list of column names to select and a dictionary
    of column names and functions computing the values of new columns
    out of each row.

    >>> from rowframe import DataFrame
    >>> from rowframe.compute import TableSource
    >>> data = DataFrame([[1, 4], [2, 5], [3, 6]], columns=["a", "b"])
    >>> ProjectNode(["a"], {"ab_sum": lambda row: row["a"] + row["b"]},
    ...             TableSource(data)).execute().to_list()
    [[1, 5], [2, 7], [3, 9]]

    Projected columns are computed in order, so each projection
    can refer to the columns computed by the previous ones.
    A projection with the name of an existing column replaces
    its values without changing the column position.
    """

    def __init__(
        self,
        select: list[str] | None,
        project: dict[str, RowFunction] | None,
        child: TableNode,
    ) -> None:
        """
        :param select: The list of column names to select.
                       ``None`` means select all columns.
                       ``[]`` means select only the projected columns.
        :param project: The dict {name: function(row)} to project new columns.
        :param child: The node emitting the table to be projected.
        """
        if select is not None:
            validation.validate_column_names(select, operation="select")
            select = list(select)
        self.select = select
        self.project = project or {}
        for name, fn in self.project.items():
            validation.validate_callable(fn, f"projection '{name}'", "assign")
        self.child = child

        if self.select is None:
            # No selection was provided, we will keep all columns
            self.restrict_columns = None
        else:
            # This is the list of columns we want to keep,
            # in case select=[] it will only provide the project columns.
            self.restrict_columns = list(
                dict.fromkeys(self.select + list(self.project.keys()))
            )

    def __str__(self) -> str:
        project = {name: get_qualname(fn) for name, fn in self.project.items()}
        return f"ProjectNode(select={self.select}, project={project}, child={self.child})"

    def execute(self) -> Any:
        """Apply the projection to the table emitted by the child node.

        The projections are sequentially computed for each row
        and then the requested columns are selected.
        """
        table = self._execute_child(self.child)
        if self.select is not None:
            validation.validate_columns_exist(
                self.select, table.columns, operation="select"
            )

        columns = table.columns
        rows = [list(row) for row in table.itertuples()]
        for name, fn in self.project.items():
            values = []
            for rowidx, row in enumerate(rows):
                try:
                    values.append(fn(dict(zip(columns, row))))
                except Exception as e:
                    raise CallbackError(
                        f"Projection function failed at row {rowidx}, column '{name}': {e!r}",
                        operation="assign",
                        column=name,
                        value=rowidx,
                    ) from e
            if name in columns:
                position = columns.index(name)
                for row, value in zip(rows, values):
                    row[position] = value
            else:
                columns = columns + [name]
                for row, value in zip(rows, values):
                    row.append(value)

        if self.restrict_columns is not None:
            positions = [columns.index(name) for name in self.restrict_columns]
            rows = [[row[p] for p in positions] for row in rows]
            columns = list(self.restrict_columns)

        logger.debug(f"Projected columns {columns}")
        return type(table)(rows, columns=columns, index=table.index)
