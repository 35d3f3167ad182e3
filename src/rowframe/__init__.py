"""rowframe

A small in-memory tabular data library.

rowframe provides a two dimensional labeled table, the :class:`DataFrame`,
and a one dimensional labeled sequence of values, the :class:`Series`,
plus relational operations on them: selection, filtering, grouping and
aggregation, joins, concatenation and element-wise transformations.

The library is constituted by multiple components, each isolated within its own
module and each self documented in literate programming style.

The primary components are:

* The Compute Engine (:mod:`rowframe.compute`), in charge of executing
  the operations on the tables.
* The Dataframe API (:mod:`rowframe.dataframe`), which provides an high
  level API for the compute engine.

Data is fully materialized and every operation returns a new table:

>>> import rowframe
>>> df = rowframe.DataFrame([[1, "Alice"], [2, "Bob"]], columns=["id", "name"])
>>> ages = rowframe.DataFrame([[1, 25], [2, 30]], columns=["id", "age"])
>>> rowframe.merge(df, ages, on="id").to_records()
[{'id': 1, 'name': 'Alice', 'age': 25}, {'id': 2, 'name': 'Bob', 'age': 30}]
"""

from loguru import logger

from . import compute, config, errors
from .compute import GroupBy
from .dataframe import DataFrame, Series, concat, merge
from .errors import (
    CallbackError,
    ColumnNotFoundError,
    DataFrameError,
    DataFrameTypeError,
    IndexOutOfRangeError,
    LabelNotFoundError,
    OperationError,
    StructureError,
    ValidationError,
)

logger.disable(__name__)

__all__ = (
    "compute",
    "config",
    "errors",
    "DataFrame",
    "Series",
    "GroupBy",
    "merge",
    "concat",
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
