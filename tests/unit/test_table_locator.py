"""Unit tests for the table locator."""

from __future__ import annotations

import pytest

from text_db.domain.exceptions import TableNotFoundError
from text_db.domain.services import table_locator
from text_db.domain.value_objects import LineRange

STORE = [
    "#users",
    "id:Int|name:String",
    "",
    "1|Alice",
    "#Orders",
    "id:Int",
    "",
    "  #audit  ",
    "msg:String",
]


@pytest.mark.unit
class TestLocate:
    def test_first_table(self) -> None:
        assert table_locator.locate(STORE, "users") == LineRange(0, 4)

    def test_middle_table_case_insensitive(self) -> None:
        assert table_locator.locate(STORE, "ORDERS") == LineRange(4, 7)

    def test_last_table_runs_to_eof(self) -> None:
        """Headers are matched after trimming whitespace."""
        assert table_locator.locate(STORE, "audit") == LineRange(7, 9)

    def test_not_found(self) -> None:
        with pytest.raises(TableNotFoundError) as exc_info:
            table_locator.locate(STORE, "missing")

        assert exc_info.value.table_name == "missing"

    def test_find_returns_none(self) -> None:
        assert table_locator.find(STORE, "missing") is None

    def test_empty_store(self) -> None:
        assert table_locator.find([], "users") is None

    def test_prefix_is_not_a_match(self) -> None:
        assert table_locator.find(STORE, "user") is None

    def test_any_header_ends_a_region(self) -> None:
        lines = ["#a", "x:Int", "#b", "y:Int", "#a2", "z:Int"]

        assert table_locator.locate(lines, "a") == LineRange(0, 2)
        assert table_locator.locate(lines, "b") == LineRange(2, 4)

    def test_first_duplicate_header_wins(self) -> None:
        lines = ["#t", "x:Int", "#T", "y:Int"]

        assert table_locator.locate(lines, "t") == LineRange(0, 2)

    def test_case_fold_is_per_character(self) -> None:
        lines = ["#straße", "x:Int", "#STRASSE", "y:Int"]

        assert table_locator.locate(lines, "STRASSE") == LineRange(2, 4)
        assert table_locator.locate(lines, "Straße") == LineRange(0, 2)


@pytest.mark.unit
class TestHeaders:
    @pytest.mark.parametrize(
        "line, expected",
        [("#users", "users"), ("   #users\t", "users"), ("users", None), ("", None), ("1|#x", None)],
    )
    def test_header_name(self, line: str, expected: str | None) -> None:
        assert table_locator.header_name(line) == expected

    def test_table_names_in_file_order(self) -> None:
        assert table_locator.table_names(STORE) == ["users", "Orders", "audit"]


@pytest.mark.unit
class TestLineRange:
    def test_offsets(self) -> None:
        line_range = LineRange(4, 9)

        assert line_range.schema_line == 5
        assert line_range.data_start == 6
        assert len(line_range) == 5

    def test_invalid_bounds(self) -> None:
        with pytest.raises(ValueError):
            LineRange(3, 3)
        with pytest.raises(ValueError):
            LineRange(-1, 2)
