"""Dataframe library built on top of the rowframe compute engine.

A dataframe library is a tool designed to handle and manipulate structured data,
typically in the form of tables (i.e., rows and columns).
It allows users to explore data, apply transformations, and analyze it.

Dataframes provide a convenient way to perform operations such as filtering,
aggregation, and merging of datasets.

The :class:`DataFrame` exposes those operations as methods,
each method builds a plan out of the nodes of :mod:`rowframe.compute`
and executes it right away, returning a new DataFrame:

>>> from rowframe.dataframe import DataFrame
>>> people = DataFrame([
...     {"name": "Alice", "city": "Rome", "age": 25},
...     {"name": "Bob", "city": "Milan", "age": 35},
...     {"name": "Carl", "city": "Rome", "age": 45},
... ])
>>> people.groupby("city").mean().to_records()
[{'city': 'Rome', 'name': None, 'age': 35.0}, {'city': 'Milan', 'name': None, 'age': 35.0}]

Single columns are available as a :class:`Series`:

>>> people.column("age").max()
45
"""

from .dataframe import DataFrame, concat, merge
from .series import Series

__all__ = ("DataFrame", "Series", "merge", "concat")
