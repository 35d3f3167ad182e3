"""Plan nodes that transform the values of a table one by one.

Element-wise transformations don't change the shape of
a table, they emit a new table with the same columns, the
same index and the same number of rows, where some values
were replaced by the result of a function.

The rows of the source table are never modified,
each transformation builds brand new rows:

>>> from rowframe import DataFrame
>>> from rowframe.compute import ApplyNode, TableSource
>>> table = DataFrame([["alice", 25], ["bob", 30]], columns=["name", "age"])
>>> ApplyNode("name", str.title, TableSource(table)).execute().to_list()
[['Alice', 25], ['Bob', 30]]
>>> table.to_list()
[['alice', 25], ['bob', 30]]
"""

from typing import Any, Callable

from .. import validation
from ..errors import CallbackError
from ..utils.inspect import get_qualname
from .base import TableNode


def value_matcher(old: Any, operation: str = "replace") -> Callable[[Any], bool]:
    """Build a function telling which values have to be replaced.

    When ``old`` is callable it's used as a predicate,
    otherwise values are compared with ``old`` by equality,
    except that booleans only match booleans and
    numbers only match numbers (``True == 1`` in Python).

    >>> matches = value_matcher(1)
    >>> matches(1), matches(1.0), matches(True)
    (True, True, False)
    """
    if callable(old):

        def matches(value: Any) -> bool:
            try:
                return bool(old(value))
            except Exception as e:
                raise CallbackError(
                    f"Replacement predicate failed for value {value!r}: {e!r}",
                    operation=operation,
                    value=value,
                ) from e

        return matches

    old_is_bool = isinstance(old, bool)

    def matches(value: Any) -> bool:
        if isinstance(value, bool) != old_is_bool:
            return False
        try:
            return bool(value == old)
        except Exception:
            # Values that can't be compared are never a match.
            return False

    return matches


def _transform_rows(
    table: Any, transform: Callable[[Any], Any], positions: list[int], operation: str
) -> list[tuple]:
    columns = table.columns
    rows = []
    for rowidx, row in enumerate(table.itertuples()):
        values = list(row)
        for position in positions:
            try:
                values[position] = transform(values[position])
            except CallbackError:
                raise
            except Exception as e:
                raise CallbackError(
                    f"Transformation function failed at row {rowidx}, "
                    f"column '{columns[position]}': {e!r}",
                    operation=operation,
                    column=columns[position],
                    value=rowidx,
                ) from e
        rows.append(tuple(values))
    return rows


class ApplyNode(TableNode):
    """Replace the values of a column with the result of a function.

    The function receives each value of the column
    and returns the value that should replace it.
    """

    def __init__(self, column: str, fn: Callable[[Any], Any], child: TableNode) -> None:
        """
        :param column: The column whose values have to be transformed.
        :param fn: The function computing the new values.
        :param child: The node emitting the table to transform.
        """
        self.column = column
        self.fn = validation.validate_callable(fn, "fn", "apply")
        self.child = child

    def __str__(self) -> str:
        return f"ApplyNode(column={self.column}, fn={get_qualname(self.fn)}, {self.child})"

    def execute(self) -> Any:
        table = self._execute_child(self.child)
        validation.validate_column_exists(self.column, table.columns, operation="apply")
        rows = _transform_rows(
            table, self.fn, [table.columns.index(self.column)], "apply"
        )
        return type(table)(rows, columns=table.columns, index=table.index)


class MapNode(TableNode):
    """Replace every value of a table with the result of a function."""

    def __init__(self, fn: Callable[[Any], Any], child: TableNode) -> None:
        """
        :param fn: The function computing the new values.
        :param child: The node emitting the table to transform.
        """
        self.fn = validation.validate_callable(fn, "fn", "map")
        self.child = child

    def __str__(self) -> str:
        return f"MapNode(fn={get_qualname(self.fn)}, {self.child})"

    def execute(self) -> Any:
        table = self._execute_child(self.child)
        rows = _transform_rows(table, self.fn, list(range(table.cols)), "map")
        return type(table)(rows, columns=table.columns, index=table.index)


class ReplaceNode(TableNode):
    """Replace the values matching a value or a predicate.

    >>> from rowframe import DataFrame
    >>> from rowframe.compute import TableSource
    >>> table = DataFrame([[1, True], [0, 1]], columns=["a", "b"])
    >>> ReplaceNode(1, None, None, TableSource(table)).execute().to_list()
    [[None, True], [0, None]]
    """

    def __init__(
        self, old: Any, new: Any, column: str | None, child: TableNode
    ) -> None:
        """
        :param old: The value to replace or a function returning ``True``
                    for the values that have to be replaced.
        :param new: The replacement value.
        :param column: Restrict the replacement to this column,
                       ``None`` means all columns.
        :param child: The node emitting the table to transform.
        """
        self.old = old
        self.new = new
        self.column = column
        self.child = child

    def __str__(self) -> str:
        old = get_qualname(self.old) if callable(self.old) else repr(self.old)
        return f"ReplaceNode(old={old}, new={self.new!r}, column={self.column}, {self.child})"

    def execute(self) -> Any:
        table = self._execute_child(self.child)
        if self.column is None:
            positions = list(range(table.cols))
        else:
            validation.validate_column_exists(
                self.column, table.columns, operation="replace"
            )
            positions = [table.columns.index(self.column)]

        matches = value_matcher(self.old, operation="replace")
        new = self.new
        rows = _transform_rows(
            table, lambda v: new if matches(v) else v, positions, "replace"
        )
        return type(table)(rows, columns=table.columns, index=table.index)

