"""The rowframe Compute Engine

The compute engine defines the execution plans
for operations on tables and the plan nodes supported.

Each node consumes the tables emitted by its children
and emits a brand new table as the result of its execution,
the tables it consumed are never modified::

    (Table)-->Node1--(Table)-->Node2--(Table)-->...

The plan nodes themselves are in charge of their execution,
this keeps the behavior near to the node and thus makes easy to
know how a node is actually executed without having to look around too much.

Building a plan requires to combine the nodes that we want
to be executed starting with one or more ``TableSource`` nodes as the
leaf nodes of the plan:

>>> from rowframe import DataFrame
>>> from rowframe.compute import FilterNode, ProjectNode, TableSource
>>> data = DataFrame([
...     ["Flamingo", 2],
...     ["Horse", 4],
...     ["Brittle stars", 5],
...     ["Centipede", 100],
... ], columns=["animals", "n_legs"])
>>> plan = ProjectNode(
...     ["animals"], None,
...     FilterNode(lambda row: row["n_legs"] >= 5, TableSource(data))
... )
>>> plan.execute().to_list()
[['Brittle stars'], ['Centipede']]

Printing a plan shows all the steps it's made of:

>>> print(plan)
ProjectNode(select=['animals'], project={}, child=FilterNode(filter=...<lambda>, child=TableSource(columns=['animals', 'n_legs'], rows=4)))
"""

from . import keys, stats
from .aggregate import (
    AggregateNode,
    Aggregation,
    CountAggregation,
    GroupBy,
    Grouping,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    StdAggregation,
    SumAggregation,
)
from .base import TableNode, TableSource
from .concat import ConcatNode
from .filtering import FilterNode
from .join import JoinNode
from .pagination import PaginateNode
from .selection import ProjectNode
from .sorting import SortNode
from .transform import ApplyNode, MapNode, ReplaceNode

__all__ = (
    "keys",
    "stats",
    "TableNode",
    "TableSource",
    "ProjectNode",
    "FilterNode",
    "Grouping",
    "GroupBy",
    "AggregateNode",
    "Aggregation",
    "CountAggregation",
    "SumAggregation",
    "MeanAggregation",
    "MinAggregation",
    "MaxAggregation",
    "StdAggregation",
    "JoinNode",
    "ConcatNode",
    "ApplyNode",
    "MapNode",
    "ReplaceNode",
    "SortNode",
    "PaginateNode",
)
