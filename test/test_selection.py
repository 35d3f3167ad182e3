import pytest

from rowframe import DataFrame
from rowframe.compute import TableSource
from rowframe.compute.selection import ProjectNode
from rowframe.errors import CallbackError, ColumnNotFoundError, ValidationError


@pytest.fixture
def mock_data():
    """Create a small table for testing."""
    return DataFrame([[1, 4, 7], [2, 5, 8], [3, 6, 9]], columns=["a", "b", "c"])


def sum_ab(row):
    return row["a"] + row["b"]


def test_init_and_str(mock_data):
    """Test the initialization and string representation of ProjectNode."""
    project_node = ProjectNode(["a", "b"], {"sum_ab": sum_ab}, TableSource(mock_data))
    assert (
        str(project_node)
        == "ProjectNode(select=['a', 'b'], project={'sum_ab': 'test_selection.sum_ab'}, child=TableSource(columns=['a', 'b', 'c'], rows=3))"
    )


def test_select_only(mock_data):
    result = ProjectNode(["c", "a"], None, TableSource(mock_data)).execute()

    assert result.columns == ["c", "a"]
    assert result.to_list() == [[7, 1], [8, 2], [9, 3]]
    assert result.rows == mock_data.rows


def test_project_only(mock_data):
    result = ProjectNode(None, {"sum_ab": sum_ab}, TableSource(mock_data)).execute()

    assert result.columns == ["a", "b", "c", "sum_ab"]
    assert result.column("sum_ab").to_list() == [5, 7, 9]


def test_select_and_project(mock_data):
    result = ProjectNode(["a"], {"sum_ab": sum_ab}, TableSource(mock_data)).execute()

    assert result.columns == ["a", "sum_ab"]
    assert result.to_list() == [[1, 5], [2, 7], [3, 9]]


def test_empty_selection(mock_data):
    result = ProjectNode([], None, TableSource(mock_data)).execute()

    assert result.columns == []
    assert result.cols == 0
    assert result.rows == 3


def test_projections_refer_to_previous_ones(mock_data):
    result = ProjectNode(
        [],
        {"sum_ab": sum_ab, "double": lambda row: row["sum_ab"] * 2},
        TableSource(mock_data),
    ).execute()

    assert result.to_list() == [[5, 10], [7, 14], [9, 18]]


def test_project_replaces_existing_column(mock_data):
    result = mock_data.assign(b=lambda row: -row["b"])

    assert result.columns == ["a", "b", "c"]
    assert result.column("b").to_list() == [-4, -5, -6]
    assert mock_data.column("b").to_list() == [4, 5, 6]


def test_select_missing_column(mock_data):
    with pytest.raises(ColumnNotFoundError) as err:
        mock_data.select(["a", "x", "y"])

    assert err.value.column == "x"
    assert err.value.available == ["a", "b", "c"]


def test_select_invalid_columns(mock_data):
    with pytest.raises(ValidationError):
        mock_data.select("a")
    with pytest.raises(ValidationError):
        mock_data.select(["a", "a"])


def test_failing_projection(mock_data):
    with pytest.raises(CallbackError) as err:
        mock_data.assign(bad=lambda row: row["a"] / 0)

    assert err.value.context["column"] == "bad"
    assert isinstance(err.value.__cause__, ZeroDivisionError)


def test_select_is_idempotent(mock_data):
    once = mock_data.select(["b", "a"])
    assert once.select(["b", "a"]) == once


def test_getitem_with_list(mock_data):
    assert mock_data[["b"]].to_list() == [[4], [5], [6]]
