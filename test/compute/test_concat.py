import pytest

from rowframe import DataFrame, concat
from rowframe.compute import TableSource
from rowframe.compute.concat import ConcatNode
from rowframe.errors import ValidationError

FIRST = DataFrame([[1, "a"], [2, "b"]], columns=["id", "letter"])
SECOND = DataFrame([[3, True]], columns=["id", "flag"])


def test_concat_rows():
    result = ConcatNode([TableSource(FIRST), TableSource(SECOND)]).execute()

    assert result.columns == ["id", "letter", "flag"]
    assert result.to_list() == [[1, "a", None], [2, "b", None], [3, None, True]]
    assert result.rows == FIRST.rows + SECOND.rows
    assert result.index == [0, 1, 2]


def test_concat_node_str():
    node = ConcatNode([TableSource(FIRST), TableSource(SECOND)], axis=1)
    assert str(node) == (
        "ConcatNode(axis=1, [TableSource(columns=['id', 'letter'], rows=2), "
        "TableSource(columns=['id', 'flag'], rows=1)])"
    )


def test_concat_rows_with_empty_tables():
    empty = DataFrame([], columns=["other"])
    result = concat([FIRST, empty, FIRST])

    assert result.columns == ["id", "letter", "other"]
    assert result.rows == 4


def test_concat_rows_without_columns():
    result = concat([DataFrame(), DataFrame()])
    assert result.shape == (0, 0)


def test_concat_columns():
    other = DataFrame([["x", 10], ["y", 20]], columns=["code", "value"])
    result = concat([FIRST, other], axis=1)

    assert result.columns == ["id", "letter", "code", "value"]
    assert result.to_list() == [[1, "a", "x", 10], [2, "b", "y", 20]]


def test_concat_columns_ignores_empty_tables():
    empty = DataFrame([], columns=["ignored"])
    other = DataFrame([["x"], ["y"]], columns=["code"])

    result = concat([empty, FIRST, other], axis=1)
    assert result.columns == ["id", "letter", "code"]
    assert result.rows == 2


def test_concat_columns_row_count_mismatch():
    other = DataFrame([["x"], ["y"], ["z"]], columns=["code"])

    with pytest.raises(ValidationError) as err:
        concat([FIRST, other], axis=1)

    assert "Table 1 has 3 rows, expected 2" in str(err.value)
    assert err.value.context["expected"] == 2
    assert err.value.context["actual"] == 3


def test_concat_columns_collision():
    with pytest.raises(ValidationError, match="Column 'id' of table 1 already exists"):
        concat([FIRST, FIRST], axis=1)


@pytest.mark.parametrize("tables", [[], FIRST, "tables"])
def test_concat_invalid_tables(tables):
    with pytest.raises(ValidationError):
        concat(tables)


def test_concat_invalid_axis():
    with pytest.raises(ValidationError, match="axis must be one of"):
        concat([FIRST], axis=2)
