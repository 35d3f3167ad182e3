import datetime

import pyarrow as pa
import pytest

from rowframe import DataFrame, Series
from rowframe.errors import (
    ColumnNotFoundError,
    DataFrameTypeError,
    IndexOutOfRangeError,
    StructureError,
    ValidationError,
)


@pytest.fixture
def people():
    return DataFrame(
        [[1, "Alice", 25], [2, "Bob", 30], [3, "Charlie", 35]],
        columns=["id", "name", "age"],
    )


def test_construction_from_positional_rows(people):
    assert people.columns == ["id", "name", "age"]
    assert people.index == [0, 1, 2]
    assert people.shape == (3, 3)
    assert people.rows == len(people.index)
    assert people.cols == len(people.columns)
    assert len(people) == 3
    assert not people.empty


def test_construction_generates_column_names():
    df = DataFrame([[1, 2], [3, 4]])
    assert df.columns == ["0", "1"]


def test_construction_from_mappings():
    df = DataFrame([{"a": 1, "b": 2}, {"b": 3, "c": 4}])

    assert df.columns == ["a", "b", "c"]
    assert df.to_list() == [[1, 2, None], [None, 3, 4]]


def test_construction_from_mappings_with_columns():
    df = DataFrame([{"a": 1}], columns=["b", "a"])
    assert df.to_list() == [[None, 1]]

    with pytest.raises(StructureError, match="unknown column 'c'"):
        DataFrame([{"a": 1, "c": 2}], columns=["a"])


def test_construction_from_arrow():
    table = pa.table({"id": [1, 2], "name": ["a", "b"]})
    df = DataFrame.from_arrow(table)

    assert df.columns == ["id", "name"]
    assert df.to_list() == [[1, "a"], [2, "b"]]
    assert df.to_arrow().equals(table)


def test_to_arrow_with_mixed_values():
    df = DataFrame([[1], ["a"]], columns=["v"])
    with pytest.raises(DataFrameTypeError, match="Column 'v'"):
        df.to_arrow()


def test_empty_dataframe():
    df = DataFrame()
    assert df.shape == (0, 0)
    assert df.empty
    assert df.to_records() == []


@pytest.mark.parametrize(
    "data,message",
    [
        ([[1, 2], [3]], "Row 1 has length 1, expected 2"),
        ("abc", "Table data must be a list of rows"),
        ([1, 2], "2D structure"),
        ([{"a": 1}, [1]], "Row 1 is not a mapping"),
    ],
)
def test_invalid_structure(data, message):
    with pytest.raises(StructureError, match=message):
        DataFrame(data)


@pytest.mark.parametrize(
    "columns",
    [["a", "a"], ["a", ""], ["a", 1], ["a"], "ab"],
)
def test_invalid_column_names(columns):
    with pytest.raises(ValidationError):
        DataFrame([[1, 2]], columns=columns)


def test_custom_index():
    df = DataFrame([[1], [2]], columns=["v"], index=["x", "y"])
    assert df.index == ["x", "y"]
    assert df.column("v").get("y") == 2

    with pytest.raises(ValidationError, match="Index has 1 labels, expected 2"):
        DataFrame([[1], [2]], columns=["v"], index=["x"])


def test_row_and_cell_access(people):
    assert people.get_row(1) == {"id": 2, "name": "Bob", "age": 30}
    assert people.get_cell(2, "name") == "Charlie"

    row = people.get_row(0)
    row["name"] = "Changed"
    assert people.get_cell(0, "name") == "Alice"


@pytest.mark.parametrize("index", [-1, 3, "1", True])
def test_row_access_out_of_range(people, index):
    with pytest.raises(IndexOutOfRangeError):
        people.get_row(index)


def test_row_access_message(people):
    with pytest.raises(IndexError, match=r"Row index 5 out of range \[0, 2\]"):
        people.get_row(5)


def test_cell_access_missing_column(people):
    with pytest.raises(ColumnNotFoundError) as err:
        people.get_cell(0, "email")
    assert err.value.available == ["id", "name", "age"]


def test_column_returns_new_series(people):
    ages = people.column("age")
    assert isinstance(ages, Series)
    assert ages.name == "age"
    assert ages.to_list() == [25, 30, 35]

    ages.set(0, 99)
    assert people.column("age").to_list() == [25, 30, 35]
    assert people["age"] is not people["age"]


def test_getitem(people):
    assert people["name"].to_list() == ["Alice", "Bob", "Charlie"]
    assert people[["name", "id"]].columns == ["name", "id"]
    with pytest.raises(DataFrameTypeError):
        people[0]


def test_reserved_names_are_plain_columns():
    df = DataFrame([[1, 2]], columns=["rows", "columns"])
    assert df.rows == 1
    assert df.column("rows").to_list() == [1]
    assert df.column("columns").to_list() == [2]


def test_iteration_and_containment(people):
    assert list(people)[0] == {"id": 1, "name": "Alice", "age": 25}
    assert "name" in people
    assert "email" not in people
    assert people.to_dict() == {
        "id": [1, 2, 3],
        "name": ["Alice", "Bob", "Charlie"],
        "age": [25, 30, 35],
    }


def test_equality(people):
    same = DataFrame(people.to_list(), columns=people.columns)
    assert people == same
    assert people != same.select(["id", "name"])
    assert people != people.to_list()


def test_repr(people):
    assert repr(people) == "DataFrame(columns=['id', 'name', 'age'], rows=3)"


def test_dtypes():
    df = DataFrame(
        [[1, "a", True, datetime.date(2024, 1, 1), None, 1]],
        columns=["n", "s", "b", "d", "z", "m"],
    )
    df = DataFrame(df.to_list() + [[2, "b", False, None, None, "x"]], columns=df.columns)
    assert df.dtypes == {
        "n": "numeric",
        "s": "string",
        "b": "boolean",
        "d": "date",
        "z": "null",
        "m": "mixed",
    }


def test_operations_return_new_tables(people):
    before = people.to_list()
    people.filter(lambda r: r["age"] > 26)
    people.select(["id"])
    people.apply("age", lambda v: v * 2)
    people.map(str)
    people.replace(25, 0)
    people.assign(older=lambda r: r["age"] + 1)
    people.sort_values("age", descending=True)
    assert people.to_list() == before


def test_aggregate_shortcut(people):
    result = people.aggregate("name", "count")
    assert result.to_list() == [["Alice", 1], ["Bob", 1], ["Charlie", 1]]


def test_describe():
    df = DataFrame(
        [[1, "a", "10"], [2, "b", None], [3, "c", "20"], [4, "d", None]],
        columns=["n", "s", "t"],
    )
    result = df.describe()

    assert result.columns == ["statistic", "n", "t"]
    assert result.column("statistic").to_list() == [
        "count",
        "mean",
        "std",
        "min",
        "median",
        "max",
    ]
    n = result.column("n").to_list()
    assert n[0] == 4
    assert n[1] == 2.5
    assert n[2] == pytest.approx(1.2909944)
    assert n[3:] == [1, 2.5, 4]
    assert result.column("t").to_list()[:2] == [2, 15.0]
