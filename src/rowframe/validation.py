"""Structural checks performed before any operation proceeds.

All the operations validate their inputs before doing any
work, so that a failure never leaves a partially computed
table behind. None of these checks mutate their inputs,
they either return silently or raise an error from
:mod:`rowframe.errors` describing what's wrong:

>>> validate_row_index(3, 2)
Traceback (most recent call last):
    ...
rowframe.errors.IndexOutOfRangeError: Row index 3 out of range [0, 1]
"""

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable

from .errors import (
    ColumnNotFoundError,
    IndexOutOfRangeError,
    StructureError,
    ValidationError,
)


def is_row_sequence(value: Any) -> bool:
    """Tell if a value can be used as a positional row."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def validate_structure(data: Any, operation: str = "DataFrame creation") -> None:
    """Check that ``data`` is a list of rows of consistent shape.

    Rows can be positional (sequences of values) or
    named (mappings from column names to values),
    but all the rows must be of the same kind.
    Positional rows must all have the same length.
    """
    if not is_row_sequence(data):
        raise StructureError(
            "Table data must be a list of rows",
            operation=operation,
            expected="list of rows",
            actual=type(data).__name__,
        )
    if not data:
        return

    if isinstance(data[0], Mapping):
        for idx, row in enumerate(data):
            if not isinstance(row, Mapping):
                raise StructureError(
                    f"Row {idx} is not a mapping like the first row",
                    operation=operation,
                    value=idx,
                )
        return

    if not is_row_sequence(data[0]):
        raise StructureError(
            "Table data must be a 2D structure (list of sequences or mappings)",
            operation=operation,
            value=0,
        )
    expected_length = len(data[0])
    for idx, row in enumerate(data):
        if not is_row_sequence(row):
            raise StructureError(
                f"Row {idx} is not a sequence like the first row",
                operation=operation,
                value=idx,
            )
        if len(row) != expected_length:
            raise StructureError(
                f"Row {idx} has length {len(row)}, expected {expected_length}",
                operation=operation,
                value=idx,
            )


def validate_column_names(
    names: Any,
    expected_length: int | None = None,
    operation: str = "DataFrame creation",
) -> None:
    """Check that column names are unique non empty strings.

    When ``expected_length`` is provided, also check that
    there is exactly one name for each value of a row.
    """
    if not is_row_sequence(names):
        raise ValidationError(
            "Column names must be a list of strings",
            operation=operation,
            actual=type(names).__name__,
            expected="list",
        )

    seen = set()
    for idx, name in enumerate(names):
        if not isinstance(name, str) or not name:
            raise ValidationError(
                f"Column name at index {idx} must be a non-empty string, got {name!r}",
                operation=operation,
                value=name,
            )
        if name in seen:
            raise ValidationError(
                f"Duplicate column name '{name}'",
                operation=operation,
                column=name,
            )
        seen.add(name)

    if expected_length is not None and len(names) != expected_length:
        raise ValidationError(
            f"Expected {expected_length} column names, got {len(names)}",
            operation=operation,
            value=list(names),
        )


def validate_row_index(index: Any, count: int, operation: str | None = None) -> None:
    """Check that ``index`` is a valid row position for a table of ``count`` rows."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRangeError(
            f"Row index must be an integer, got {index!r}",
            operation=operation,
            value=index,
        )
    if not 0 <= index < count:
        if count == 0:
            message = f"Row index {index} out of range, the table has no rows"
        else:
            message = f"Row index {index} out of range [0, {count - 1}]"
        raise IndexOutOfRangeError(message, operation=operation, value=index)


def validate_column_exists(
    name: str, columns: Sequence[str], operation: str | None = None
) -> None:
    """Check that column ``name`` is one of ``columns``."""
    if name not in columns:
        raise ColumnNotFoundError(name, available=list(columns), operation=operation)


def validate_columns_exist(
    names: Iterable[str], columns: Sequence[str], operation: str | None = None
) -> None:
    """Check that all ``names`` are in ``columns``, reporting the first missing one."""
    available = set(columns)
    for name in names:
        if name not in available:
            raise ColumnNotFoundError(
                name, available=list(columns), operation=operation
            )


def normalize_column_list(
    names: Any, operation: str, allow_empty: bool = False
) -> list[str]:
    """Accept a single column name or a list of names and return a list."""
    if isinstance(names, str):
        names = [names]
    if not is_row_sequence(names) or not all(isinstance(n, str) for n in names):
        raise ValidationError(
            "Columns must be a column name or a list of column names",
            operation=operation,
            value=names,
        )
    if not names and not allow_empty:
        raise ValidationError(
            "At least one column is required", operation=operation, value=names
        )
    return list(names)


def validate_callable(fn: Any, param: str, operation: str) -> Callable:
    """Check that ``fn`` can be called."""
    if not callable(fn):
        raise ValidationError(
            f"{param} must be a function, got {type(fn).__name__}",
            operation=operation,
            value=fn,
        )
    return fn


def validate_one_of(value: Any, allowed: Sequence[Any], param: str, operation: str) -> None:
    """Check that ``value`` is one of the ``allowed`` options."""
    if value not in allowed:
        raise ValidationError(
            f"{param} must be one of [{', '.join(map(str, allowed))}], got {value!r}",
            operation=operation,
            value=value,
        )


def validate_suffixes(suffixes: Any, operation: str = "merge") -> tuple[str, str]:
    """Check that ``suffixes`` is a pair of strings."""
    if (
        not is_row_sequence(suffixes)
        or len(suffixes) != 2
        or not all(isinstance(s, str) for s in suffixes)
    ):
        raise ValidationError(
            "suffixes must be a pair of strings",
            operation=operation,
            expected="2 strings",
            actual=repr(suffixes),
        )
    return suffixes[0], suffixes[1]


def validate_join_keys(
    keys: Sequence[str],
    left_columns: Sequence[str],
    right_columns: Sequence[str],
    operation: str = "merge",
) -> None:
    """Check that every join key is available on both sides of a join."""
    for key in keys:
        for side, columns in (("left", left_columns), ("right", right_columns)):
            if key not in columns:
                raise ColumnNotFoundError(
                    key,
                    available=list(columns),
                    operation=f"{operation} (join key missing from {side} table)",
                )


def validate_size(value: Any, param: str, operation: str) -> int:
    """Check that ``value`` is a non negative integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(
            f"{param} must be a non-negative integer, got {value!r}",
            operation=operation,
            value=value,
        )
    return value
