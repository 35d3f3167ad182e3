"""Errors raised by rowframe.

Every public operation either returns a brand new table
or raises one of the errors defined here. Errors are raised
synchronously to the caller, they are never retried or
recovered internally.

All errors derive from :class:`DataFrameError` and carry a
``context`` dictionary with the details that were available
when the error was raised (the operation being performed,
the column involved, the offending value, ...).

The errors also inherit from the closest builtin exception,
so that code catching ``KeyError`` or ``ValueError`` keeps working:

>>> from rowframe.errors import ColumnNotFoundError
>>> try:
...     raise ColumnNotFoundError("age", available=["id", "name"], operation="select")
... except KeyError as e:
...     print(e)
Column 'age' does not exist during select (available columns: ['id', 'name'])
"""

from typing import Any

__all__ = (
    "DataFrameError",
    "ValidationError",
    "StructureError",
    "ColumnNotFoundError",
    "LabelNotFoundError",
    "IndexOutOfRangeError",
    "DataFrameTypeError",
    "OperationError",
    "CallbackError",
)


class DataFrameError(Exception):
    """Base class for all the errors raised by rowframe."""

    def __init__(self, message: str, **context: Any) -> None:
        """
        :param message: The description of what went wrong.
        :param context: Details about the failure, like ``operation``,
                        ``column``, ``value``, ``expected`` and ``actual``.
                        ``None`` values are discarded.
        """
        self.message = message
        self.context = {k: v for k, v in context.items() if v is not None}
        super().__init__(message)

    @property
    def operation(self) -> str | None:
        return self.context.get("operation")

    def __str__(self) -> str:
        formatted = self.message
        operation = self.context.get("operation")
        if operation:
            formatted += f" during {operation}"
        if "expected" in self.context and "actual" in self.context:
            formatted += (
                f" (expected {self.context['expected']}, got {self.context['actual']})"
            )
        return formatted


class ValidationError(DataFrameError, ValueError):
    """Invalid parameters were provided to an operation."""


class StructureError(ValidationError):
    """The data provided to build a table is not tabular."""


class ColumnNotFoundError(DataFrameError, KeyError):
    """A referenced column does not exist in the table.

    The error always reports the missing column and
    the columns that were available.
    """

    def __init__(self, column: str, available: list[str], **context: Any) -> None:
        super().__init__(
            f"Column '{column}' does not exist",
            column=column,
            available=list(available),
            **context,
        )

    @property
    def column(self) -> str:
        return self.context["column"]

    @property
    def available(self) -> list[str]:
        return self.context["available"]

    def __str__(self) -> str:
        return f"{super().__str__()} (available columns: {self.available})"


class LabelNotFoundError(DataFrameError, KeyError):
    """A label is not part of the index of a Series."""


class IndexOutOfRangeError(DataFrameError, IndexError):
    """A row position outside of the valid range was requested."""


class DataFrameTypeError(DataFrameError, TypeError):
    """The values involved in an operation have an unsupported type."""


class OperationError(DataFrameError):
    """An operation was unable to produce a result."""


class CallbackError(OperationError):
    """A user provided function failed while it was being applied.

    The original exception is always available as ``__cause__``.
    """
