"""Plan nodes that stack tables together.

Tables can be stacked vertically, appending the rows
of each table after the rows of the previous one,
or horizontally, placing the columns of each table
after the columns of the previous one.

Vertical concatenation (``axis=0``) is the most common case,
like when the same kind of data is split in multiple files.
The result has all the columns found in any of the tables,
in the order they are first seen, and the values of the columns
that a table doesn't have are ``None``:

>>> from rowframe import DataFrame
>>> from rowframe.compute import TableSource
>>> t1 = DataFrame([[1, "a"]], columns=["id", "v"])
>>> t2 = DataFrame([[2, True]], columns=["id", "flag"])
>>> ConcatNode([TableSource(t1), TableSource(t2)]).execute().to_list()
[[1, 'a', None], [2, None, True]]

Horizontal concatenation (``axis=1``) pairs the rows of
the tables by position, so all the tables must have the
same number of rows. Tables without rows are ignored:

>>> t3 = DataFrame([["x"]], columns=["other"])
>>> ConcatNode([TableSource(t1), TableSource(t3)], axis=1).execute().to_list()
[[1, 'a', 'x']]
"""

from typing import Any, Sequence

from loguru import logger

from .. import validation
from ..errors import ValidationError
from .base import TableNode


class ConcatNode(TableNode):
    """Concatenate the tables emitted by multiple nodes."""

    def __init__(self, children: Sequence[TableNode], axis: int = 0) -> None:
        """
        :param children: The nodes emitting the tables to concatenate, in order.
        :param axis: ``0`` to stack rows, ``1`` to stack columns.
        """
        validation.validate_one_of(axis, (0, 1), "axis", "concat")
        if not children:
            raise ValidationError(
                "At least one table is required", operation="concat"
            )
        self.children = list(children)
        self.axis = axis

    def __str__(self) -> str:
        children = ", ".join(str(c) for c in self.children)
        return f"ConcatNode(axis={self.axis}, [{children}])"

    def execute(self) -> Any:
        tables = [self._execute_child(child) for child in self.children]
        if self.axis == 0:
            return self._concat_rows(tables)
        return self._concat_columns(tables)

    def _concat_rows(self, tables: list[Any]) -> Any:
        columns = list(dict.fromkeys(name for t in tables for name in t.columns))
        if not columns:
            return type(tables[0])([])

        rows = []
        for table in tables:
            positions = {name: pos for pos, name in enumerate(table.columns)}
            for row in table.itertuples():
                rows.append(
                    tuple(
                        row[positions[name]] if name in positions else None
                        for name in columns
                    )
                )
        logger.debug(f"Concatenated {len(tables)} tables in {len(rows)} rows")
        return type(tables[0])(rows, columns=columns)

    def _concat_columns(self, tables: list[Any]) -> Any:
        included = [(idx, t) for idx, t in enumerate(tables) if not t.empty]
        if not included:
            return type(tables[0])([])

        first_idx, first = included[0]
        columns: list[str] = []
        for idx, table in included:
            if table.rows != first.rows:
                raise ValidationError(
                    f"Table {idx} has {table.rows} rows, expected {first.rows} "
                    f"like table {first_idx}",
                    operation="concat",
                    expected=first.rows,
                    actual=table.rows,
                )
            for name in table.columns:
                if name in columns:
                    raise ValidationError(
                        f"Column '{name}' of table {idx} already exists, "
                        "columns must be unique",
                        operation="concat",
                        column=name,
                    )
                columns.append(name)

        rows = [
            sum(parts, ())
            for parts in zip(*(list(table.itertuples()) for _, table in included))
        ]
        logger.debug(f"Concatenated {len(included)} tables in {len(columns)} columns")
        return type(first)(rows, columns=columns)
