"""Canonical keys used to match rows by the values of some columns.

Both grouping and joins need to know when two rows
share the same values for a set of key columns.
Rows are matched by building a canonical key out of
those values and using it as a dictionary key.

By default the canonical form of a value is its string
representation, which means that ``1`` and ``"1"``
end up in the same group or match in a join:

>>> make_key([1, "x"]) == make_key(["1", "x"])
True

Integral floats are rendered as integers, so
that ``1.0`` and ``1`` are the same key too:

>>> canonical_value(1.0), canonical_value(None), canonical_value(True)
('1', 'null', 'true')

When the ``typed_keys`` option is enabled, values are
compared by both their type and value instead:

>>> make_key([1, "x"], typed=True) == make_key(["1", "x"], typed=True)
False
"""

import math
from collections.abc import Hashable, Sequence
from typing import Any

from ..config import get_options

Key = tuple


def canonical_value(value: Any) -> str:
    """String representation used to compare values as keys."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)


def typed_value(value: Any) -> tuple[str, Any]:
    """Pair of type name and value used to compare values as typed keys."""
    if not isinstance(value, Hashable):
        value = repr(value)
    return (type(value).__qualname__, value)


def make_key(values: Sequence[Any], typed: bool | None = None) -> Key:
    """Build the canonical key for an ordered set of values.

    :param values: The values of the key columns, in key order.
    :param typed: Compare by type and value, defaults to the ``typed_keys`` option.
    """
    if typed is None:
        typed = get_options().typed_keys
    convert = typed_value if typed else canonical_value
    return tuple(convert(v) for v in values)


class KeyIndex:
    """Map the keys of a table to the positions of the rows sharing them.

    Keys are recorded in the order they are first seen,
    and each key lists its rows in their original order.

    >>> from rowframe import DataFrame
    >>> table = DataFrame([[1, "a"], [2, "b"], [1, "c"]], columns=["id", "v"])
    >>> index = KeyIndex(table, ["id"])
    >>> index.get(table.get_row(2))
    [0, 2]
    >>> len(index)
    2
    """

    def __init__(self, table: Any, keys: Sequence[str], typed: bool | None = None) -> None:
        """
        :param table: The table whose rows have to be indexed.
        :param keys: The columns that constitute the key.
        :param typed: Compare by type and value, defaults to the ``typed_keys`` option.
        """
        self.keys = list(keys)
        self.typed = get_options().typed_keys if typed is None else typed
        positions = [table.columns.index(k) for k in self.keys]

        self.rows_by_key: dict[Key, list[int]] = {}
        self.row_keys: list[Key] = []
        for rowidx, row in enumerate(table.itertuples()):
            key = make_key([row[p] for p in positions], typed=self.typed)
            self.row_keys.append(key)
            self.rows_by_key.setdefault(key, []).append(rowidx)

    def __len__(self) -> int:
        return len(self.rows_by_key)

    def __contains__(self, key: Key) -> bool:
        return key in self.rows_by_key

    def key_for(self, row: dict[str, Any]) -> Key:
        """Compute the key of a row provided as a mapping."""
        return make_key([row[k] for k in self.keys], typed=self.typed)

    def get(self, row: dict[str, Any]) -> list[int]:
        """Positions of the indexed rows sharing the key of ``row``."""
        return self.rows_by_key.get(self.key_for(row), [])

    def lookup(self, key: Key) -> list[int]:
        """Positions of the indexed rows with the given canonical key."""
        return self.rows_by_key.get(key, [])
