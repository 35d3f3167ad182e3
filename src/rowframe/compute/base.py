"""Base classes and interfaces for the Compute Engine

This module defines the base components that are
necessary to represent a plan of operations on tables
and execute it.
"""

import abc
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from ..dataframe import DataFrame


class TableNode(abc.ABC):
    """A node of an execution plan.

    The plan is represented as a tree of nodes.
    Each node is a step in the execution and all
    previous steps are children of the last one.

    For example a simple plan might involve
    taking a table and filtering it::

        TableSource(table) -> FilterNode(predicate)

    That would be a plan where the last step
    is filtering, and the TableSource is a child
    of the filter node.

    The number of children can be variable, some
    nodes like for example joins or concatenations,
    will accept two or more child nodes whose tables
    have to be combined together.

    Each node consumes the tables emitted by its children
    and emits a brand new table as its output, the tables
    of the children are never modified.

    The base ``TableNode`` class does nothing
    and purely acts as the interface that all nodes
    must implement. Actual work will be done
    in the subclasses.

    For example a simple node that takes a table
    and just forwards it as is after printing
    its columns can be implemented as::

        class DebugNode(TableNode):
            def __init__(self, child):
                self.child = child

            def execute(self):
                table = self.child.execute()
                print(table.columns)
                return table

            def __str__(self):
                return f"DebugNode({self.child})"
    """

    @abc.abstractmethod
    def execute(self) -> "DataFrame":
        """Emit the table for the next node.

        Usually this happens by executing the child nodes,
        transforming the tables they emitted somehow,
        and returning the result as a new table.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...

    def __repr__(self) -> str:
        return str(self)

    def _execute_child(self, child: "TableNode") -> "DataFrame":
        table = child.execute()
        logger.debug(f"{self.__class__.__name__} consuming {table!r}")
        return table


class TableSource(TableNode):
    """Provide an in-memory table to an execution plan.

    This is the leaf of every plan, it makes available
    the data of an existing table to the nodes consuming it.

    >>> from rowframe import DataFrame
    >>> source = TableSource(DataFrame([[1, "a"], [2, "b"]], columns=["id", "v"]))
    >>> str(source)
    "TableSource(columns=['id', 'v'], rows=2)"
    """

    def __init__(self, table: "DataFrame") -> None:
        """
        :param table: The table with the data to provide.
        """
        self.table = table

    def __str__(self) -> str:
        return f"TableSource(columns={self.table.columns}, rows={self.table.rows})"

    def execute(self) -> "DataFrame":
        """Emit the table as is, tables are immutable so it's safe to share it."""
        return self.table
