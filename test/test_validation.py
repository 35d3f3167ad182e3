import pytest

from rowframe import validation
from rowframe.errors import (
    ColumnNotFoundError,
    IndexOutOfRangeError,
    StructureError,
    ValidationError,
)


@pytest.mark.parametrize(
    "data",
    [[], [[1, 2], [3, 4]], [(1,), [2]], [{"a": 1}, {"b": 2}], [[], []]],
)
def test_validate_structure_accepts(data):
    validation.validate_structure(data)


def test_validate_structure_reports_first_ragged_row():
    with pytest.raises(StructureError) as err:
        validation.validate_structure([[1, 2], [1, 2], [1], [1, 2, 3]])

    assert err.value.message == "Row 2 has length 1, expected 2"
    assert err.value.context["value"] == 2


@pytest.mark.parametrize(
    "names,expected_length,message",
    [
        (["a", "a"], None, "Duplicate column name 'a'"),
        (["a", ""], None, "Column name at index 1 must be a non-empty string"),
        (["a", None], None, "Column name at index 1"),
        (["a", "b"], 3, "Expected 3 column names, got 2"),
        ("ab", None, "Column names must be a list of strings"),
    ],
)
def test_validate_column_names(names, expected_length, message):
    with pytest.raises(ValidationError, match=message):
        validation.validate_column_names(names, expected_length=expected_length)


def test_validate_row_index():
    validation.validate_row_index(0, 1)
    with pytest.raises(IndexOutOfRangeError, match=r"out of range \[0, 1\]"):
        validation.validate_row_index(2, 2)
    with pytest.raises(IndexOutOfRangeError, match="the table has no rows"):
        validation.validate_row_index(0, 0)


def test_validate_column_exists():
    validation.validate_column_exists("a", ["a", "b"])
    with pytest.raises(ColumnNotFoundError) as err:
        validation.validate_column_exists("c", ["a", "b"], operation="select")

    assert str(err.value) == (
        "Column 'c' does not exist during select (available columns: ['a', 'b'])"
    )


def test_validate_columns_exist_reports_first_missing():
    with pytest.raises(ColumnNotFoundError) as err:
        validation.validate_columns_exist(["a", "x", "y"], ["a", "b"])
    assert err.value.column == "x"


@pytest.mark.parametrize(
    "names,expected",
    [("a", ["a"]), (["a", "b"], ["a", "b"]), (("a",), ["a"])],
)
def test_normalize_column_list(names, expected):
    assert validation.normalize_column_list(names, operation="test") == expected


@pytest.mark.parametrize("names", [[], None, 1, ["a", 1]])
def test_normalize_column_list_invalid(names):
    with pytest.raises(ValidationError):
        validation.normalize_column_list(names, operation="test")


def test_validate_suffixes():
    assert validation.validate_suffixes(["_l", "_r"]) == ("_l", "_r")
    with pytest.raises(ValidationError, match="suffixes must be a pair of strings"):
        validation.validate_suffixes(("_l",))


def test_validate_join_keys():
    validation.validate_join_keys(["id"], ["id", "a"], ["b", "id"])
    with pytest.raises(ColumnNotFoundError, match="join key missing from right table"):
        validation.validate_join_keys(["id"], ["id"], ["b"])


@pytest.mark.parametrize("value", [-1, 1.0, True, "2"])
def test_validate_size_invalid(value):
    with pytest.raises(ValidationError):
        validation.validate_size(value, "n", "head")
