"""Plan nodes that implement join operations.

Joins combine the rows of two tables that share the same
values for one or more key columns, the join keys.

The join is implemented as a hash join: the rows of both
tables are indexed by the canonical form of their keys
(see :mod:`rowframe.compute.keys`) and then the index of
one table is probed with the keys of the other table
to find the matching rows.

Supposing we have two tables::

    left:
    +----+--------+
    | id | name   |
    +----+--------+
    | 1  | Alice  |
    | 2  | Bob    |
    | 3  | Charlie|
    +----+--------+

    right:
    +----+-----+
    | id | age |
    +----+-----+
    | 3  | 25  |
    | 2  | 30  |
    +----+-----+

The index of the right table would be ``{("3",): [0], ("2",): [1]}``
and probing it with the key of each row of the left table
tells which rows of the right table have to be attached to it:

>>> from rowframe import DataFrame
>>> from rowframe.compute import JoinNode, TableSource
>>> left = DataFrame([[1, "Alice"], [2, "Bob"], [3, "Charlie"]], columns=["id", "name"])
>>> right = DataFrame([[3, 25], [2, 30]], columns=["id", "age"])
>>> JoinNode("id", "inner", None, TableSource(left), TableSource(right)).execute().to_list()
[[2, 'Bob', 30], [3, 'Charlie', 25]]

Four kinds of join are supported:

* ``inner``: only the rows with a match in both tables.
* ``left``: all the rows of the left table, with ``None`` for
  the right columns when there is no match.
* ``right``: all the rows of the right table, with ``None`` for
  the left columns when there is no match.
* ``outer``: all the rows of both tables, matched when possible.

>>> JoinNode("id", "left", None, TableSource(left), TableSource(right)).execute().to_list()
[[1, 'Alice', None], [2, 'Bob', 30], [3, 'Charlie', 25]]

The join keys appear only once in the result. Other columns
that exist in both tables get a suffix to tell them apart:

>>> right = DataFrame([[2, "Robert"]], columns=["id", "name"])
>>> JoinNode("id", "inner", ("_left", "_right"),
...          TableSource(left), TableSource(right)).execute().columns
['id', 'name_left', 'name_right']
"""

from typing import Any, Sequence

from loguru import logger

from .. import validation
from ..config import get_options
from .base import TableNode
from .keys import KeyIndex

JOIN_TYPES = ("inner", "left", "right", "outer")


class JoinNode(TableNode):
    """Join two tables on one or more shared key columns.

    When one of the two tables has no rows the join
    takes a shortcut: the result is the other table
    as is for the joins that preserve all its rows,
    or a table with no rows otherwise.
    """

    def __init__(
        self,
        on: str | Sequence[str],
        how: str | None,
        suffixes: Sequence[str] | None,
        left_child: TableNode,
        right_child: TableNode,
    ) -> None:
        """
        :param on: The key column, or list of key columns, that must exist in both tables.
        :param how: The kind of join, one of ``inner``, ``left``, ``right``, ``outer``.
                    ``None`` means the ``merge_how`` option.
        :param suffixes: The suffixes for the left and right copies of the
                         columns that exist in both tables.
                         ``None`` means the ``merge_suffixes`` option.
        :param left_child: The left source of data to join.
        :param right_child: The right source of data to join.
        """
        options = get_options()
        self.keys = validation.normalize_column_list(on, operation="merge")
        self.how = options.merge_how if how is None else how
        validation.validate_one_of(self.how, JOIN_TYPES, "how", "merge")
        self.suffixes = validation.validate_suffixes(
            options.merge_suffixes if suffixes is None else suffixes
        )
        self.left_child = left_child
        self.right_child = right_child

    def __str__(self) -> str:
        return (
            f"JoinNode(on={self.keys}, how={self.how}, suffixes={self.suffixes}, "
            f"left={self.left_child}, right={self.right_child})"
        )

    def result_columns(self, left: Any, right: Any) -> tuple[list[str], list[str]]:
        """Compute the names of the left columns and of the right non key columns.

        Non key columns that exist in both tables are renamed
        by appending the left suffix to the left copy and the
        right suffix to the right copy.
        """
        right_extra = [c for c in right.columns if c not in self.keys]
        collisions = set(right_extra) & set(left.columns)
        left_suffix, right_suffix = self.suffixes
        left_names = [c + left_suffix if c in collisions else c for c in left.columns]
        right_names = [c + right_suffix if c in collisions else c for c in right_extra]
        validation.validate_column_names(left_names + right_names, operation="merge")
        return left_names, right_names

    def execute(self) -> Any:
        """Perform the join operation.

        Both tables are fully materialized, the rows of the result
        are emitted following the order of the left table rows,
        except for ``right`` joins, which follow the right table rows.
        The unmatched rows of the right table come last in ``outer`` joins.
        """
        left = self._execute_child(self.left_child)
        right = self._execute_child(self.right_child)
        validation.validate_join_keys(self.keys, left.columns, right.columns)
        left_names, right_names = self.result_columns(left, right)
        columns = left_names + right_names
        table_type = type(left)

        if left.empty or right.empty:
            if left.empty and not right.empty and self.how in ("right", "outer"):
                return type(right)(list(right.itertuples()), columns=right.columns)
            if right.empty and not left.empty and self.how in ("left", "outer"):
                return table_type(list(left.itertuples()), columns=left.columns)
            logger.debug(f"Join {self.how} of empty tables, no rows emitted")
            return table_type([], columns=columns)

        left_rows = list(left.itertuples())
        right_rows = list(right.itertuples())
        right_extra = [right.columns.index(c) for c in right.columns if c not in self.keys]
        left_key_positions = [left.columns.index(k) for k in self.keys]
        right_key_positions = [right.columns.index(k) for k in self.keys]
        typed = get_options().typed_keys
        left_index = KeyIndex(left, self.keys, typed=typed)
        right_index = KeyIndex(right, self.keys, typed=typed)

        def merged_row(left_row: tuple, right_row: tuple | None) -> tuple:
            if right_row is None:
                return left_row + (None,) * len(right_extra)
            return left_row + tuple(right_row[p] for p in right_extra)

        def unmatched_right_row(right_row: tuple) -> tuple:
            # The join keys are taken from the right row so they are never null.
            left_row = [None] * left.cols
            for lpos, rpos in zip(left_key_positions, right_key_positions):
                left_row[lpos] = right_row[rpos]
            return merged_row(tuple(left_row), right_row)

        rows = []
        if self.how == "right":
            for rowidx, right_row in enumerate(right_rows):
                matches = left_index.lookup(right_index.row_keys[rowidx])
                if matches:
                    rows.extend(merged_row(left_rows[i], right_row) for i in matches)
                else:
                    rows.append(unmatched_right_row(right_row))
        else:
            for rowidx, left_row in enumerate(left_rows):
                matches = right_index.lookup(left_index.row_keys[rowidx])
                if matches:
                    rows.extend(merged_row(left_row, right_rows[i]) for i in matches)
                elif self.how != "inner":
                    rows.append(merged_row(left_row, None))

            if self.how == "outer":
                for rowidx, right_row in enumerate(right_rows):
                    if right_index.row_keys[rowidx] not in left_index:
                        rows.append(unmatched_right_row(right_row))

        logger.debug(
            f"Join {self.how} on {self.keys} of {left.rows}x{right.rows} rows emitted {len(rows)} rows"
        )
        return table_type(rows, columns=columns)
