"""Properties that must hold for any table and any chain of operations."""

import pytest

from rowframe import DataFrame, concat, merge

SALES = DataFrame(
    [
        ["north", "apples", 10, "2"],
        ["south", "pears", 5, None],
        ["north", "pears", 7, "4"],
        ["east", "apples", None, "1"],
        ["south", "apples", 3, "x"],
        ["north", "apples", 8, "3"],
    ],
    columns=["region", "product", "units", "returns"],
)

REGIONS = DataFrame(
    [["north", "Alice"], ["south", "Bob"], ["west", "Carl"]],
    columns=["region", "manager"],
)


def _check_structure(table):
    assert table.rows == len(table.index)
    assert table.cols == len(table.columns)
    assert all(len(row) == table.cols for row in table.to_list())


@pytest.mark.parametrize(
    "operation",
    [
        lambda t: t.select(["units", "region"]),
        lambda t: t.select([]),
        lambda t: t.filter(lambda r: r["units"] is not None and r["units"] > 5),
        lambda t: t.filter(lambda r: False),
        lambda t: t.groupby("region").count(),
        lambda t: t.groupby(["region", "product"]).mean(),
        lambda t: t.groupby("product").std(),
        lambda t: merge(t, REGIONS, on="region", how="inner"),
        lambda t: merge(t, REGIONS, on="region", how="left"),
        lambda t: merge(t, REGIONS, on="region", how="right"),
        lambda t: merge(t, REGIONS, on="region", how="outer"),
        lambda t: concat([t, REGIONS]),
        lambda t: concat([t, DataFrame([[i] for i in range(t.rows)], columns=["position"])], axis=1),
        lambda t: t.apply("units", lambda v: v),
        lambda t: t.map(str),
        lambda t: t.replace(None, 0),
        lambda t: t.sort_values(["region", "units"]),
        lambda t: t.head(2),
        lambda t: t.describe(),
    ],
)
def test_structural_invariant(operation):
    _check_structure(operation(SALES))


def test_select_preserves_rows():
    subset = ["product", "units"]
    selected = SALES.select(subset)

    assert selected.rows == SALES.rows
    for rowidx in range(SALES.rows):
        for name in subset:
            assert selected.get_cell(rowidx, name) == SALES.get_cell(rowidx, name)


def test_select_is_idempotent():
    subset = ["units", "region"]
    assert SALES.select(subset).select(subset) == SALES.select(subset)


def test_filter_is_order_preserving_and_composable():
    def p(r):
        return r["region"] != "east"

    def q(r):
        return r["product"] == "apples"

    assert SALES.filter(p).filter(q) == SALES.filter(lambda r: p(r) and q(r))
    assert SALES.filter(p).filter(q).column("units").to_list() == [10, 3, 8]


def test_filter_never_drops_columns():
    result = SALES.filter(lambda r: False)
    assert result.columns == SALES.columns
    assert result.rows == 0


@pytest.mark.parametrize("key", ["region", "product", "units", "returns"])
def test_groupby_count_sums_to_total(key):
    counts = SALES.groupby(key).count()
    assert sum(counts.column("count")) == SALES.rows


def test_groupby_aggregates_numeric_strings():
    result = SALES.groupby("region").sum()

    assert result.columns == ["region", "product", "units", "returns"]
    assert result.to_records()[0] == {
        "region": "north",
        "product": None,
        "units": 25,
        "returns": 9,
    }
    # east only has a null unit, south only one numeric return.
    assert result.get_row(2)["units"] is None
    assert result.get_row(1)["returns"] is None


def test_left_join_preserves_left_cardinality():
    result = merge(SALES, REGIONS, on="region", how="left")
    assert result.rows == SALES.rows
    assert result.column("manager").to_list() == [
        "Alice",
        "Bob",
        "Alice",
        None,
        "Bob",
        "Alice",
    ]


def test_outer_join_includes_unmatched_right_rows():
    result = merge(SALES, REGIONS, on="region", how="outer")

    assert result.rows == SALES.rows + 1
    assert result.get_row(result.rows - 1) == {
        "region": "west",
        "product": None,
        "units": None,
        "returns": None,
        "manager": "Carl",
    }


def test_concat_vertical_row_count_and_columns():
    result = concat([SALES, REGIONS])

    assert result.rows == SALES.rows + REGIONS.rows
    assert set(result.columns) == set(SALES.columns) | set(REGIONS.columns)
