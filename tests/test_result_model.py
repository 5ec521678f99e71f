"""Tests for the result model: selection, reselection and scrolling."""

from __future__ import annotations

from ggrep.models.session import Direction, Selection
from ggrep.services.result_model import ResultModel


def _lines(count: int, path: str = "f.rs") -> list[str]:
    return [f"{path}:{n}:line {n}" for n in range(1, count + 1)]


class TestRebuild:
    def test_initial_selection_is_first_entry(self, todo_output: list[str]) -> None:
        model = ResultModel()
        model.rebuild(todo_output)
        assert model.selection == Selection(0, 0)
        assert model.selected_entry is not None
        assert model.selected_entry.key == ("a.rs", 3)

    def test_empty_output_has_no_selection(self) -> None:
        model = ResultModel()
        tree = model.rebuild([])
        assert tree.is_empty()
        assert model.selection.selected_index is None
        assert model.selected_entry is None

    def test_selection_identity_survives_index_shift(self) -> None:
        model = ResultModel()
        model.rebuild(["fileA:10:target", "fileB:1:other"])
        model.move_selection(Direction.PREV)
        assert model.selected_entry is not None
        assert model.selected_entry.key == ("fileA", 10)

        model.rebuild(["file0:1:new", "file0:2:new", "fileA:4:new", "fileA:10:target"])
        assert model.selection.selected_index == 3
        assert model.selected_entry is not None
        assert model.selected_entry.key == ("fileA", 10)

    def test_selection_resets_when_entry_disappears(self, todo_output: list[str]) -> None:
        model = ResultModel()
        model.rebuild(todo_output)
        model.move_selection(Direction.NEXT, 2)
        model.rebuild(["c.rs:1:x", "c.rs:2:y"])
        assert model.selection == Selection(0, 0)

    def test_selection_clears_when_tree_becomes_empty(self, todo_output: list[str]) -> None:
        model = ResultModel()
        model.rebuild(todo_output)
        model.rebuild([])
        assert model.selection == Selection()


class TestMoveSelection:
    def test_clamps_at_both_ends(self, todo_output: list[str]) -> None:
        model = ResultModel()
        model.rebuild(todo_output)
        assert model.move_selection(Direction.PREV).selected_index == 0
        model.move_selection(Direction.NEXT)
        model.move_selection(Direction.NEXT)
        assert model.move_selection(Direction.NEXT).selected_index == 2

    def test_crosses_file_groups(self, todo_output: list[str]) -> None:
        model = ResultModel()
        model.rebuild(todo_output)
        model.move_selection(Direction.NEXT, 2)
        assert model.selected_entry is not None
        assert model.selected_entry.key == ("b.rs", 1)

    def test_page_move_clamps(self) -> None:
        model = ResultModel()
        model.rebuild(_lines(30))
        assert model.move_selection(Direction.NEXT, 100).selected_index == 29
        assert model.move_selection(Direction.PREV, 100).selected_index == 0

    def test_no_selection_is_unchanged(self) -> None:
        model = ResultModel()
        assert model.move_selection(Direction.NEXT) == Selection()


class TestScrollWindow:
    def test_rows_include_file_headers(self, todo_output: list[str]) -> None:
        model = ResultModel()
        model.rebuild(todo_output)
        window = model.current_scroll_window(10)
        assert [row.is_header for row in window.rows] == [True, False, False, True, False]
        assert window.rows[0].line_count == 2
        assert window.selected_row == 1
        assert window.total_rows == 5

    def test_scrolls_minimally_to_keep_selection_visible(self) -> None:
        model = ResultModel()
        model.rebuild(_lines(20))
        # Rows: header at 0, entry n at row n.
        window = model.current_scroll_window(5)
        assert window.offset == 0

        model.move_selection(Direction.NEXT, 4)  # entry row 5
        window = model.current_scroll_window(5)
        assert window.offset == 1
        assert window.selected_row == 4

        model.move_selection(Direction.PREV)  # row 4, still visible
        assert model.current_scroll_window(5).offset == 1

        model.move_selection(Direction.PREV, 4)  # first entry, row 1
        window = model.current_scroll_window(5)
        assert window.offset == 0
        assert window.rows[0].is_header
        assert window.selected_row == 1

    def test_scrolling_up_to_first_entry_shows_file_header(self) -> None:
        model = ResultModel()
        model.rebuild(_lines(5, "a.rs") + _lines(5, "b.rs"))
        # Rows: a.rs header 0, entries 1-5; b.rs header 6, entries 7-11.
        model.move_selection(Direction.NEXT, 9)
        assert model.current_scroll_window(3).offset == 9

        model.move_selection(Direction.PREV, 4)  # b.rs:1, row 7
        window = model.current_scroll_window(3)
        assert window.offset == 6
        assert window.rows[0].is_header
        assert window.rows[0].file_path == "b.rs"
        assert window.selected_row == 1

    def test_scrolls_up_when_selection_above_window(self) -> None:
        model = ResultModel()
        model.rebuild(_lines(20))
        model.move_selection(Direction.NEXT, 19)
        assert model.current_scroll_window(5).offset == 16
        model.move_selection(Direction.PREV, 10)  # row 10
        window = model.current_scroll_window(5)
        assert window.offset == 10
        assert window.selected_row == 0

    def test_offset_clamped_after_viewport_grows(self) -> None:
        model = ResultModel()
        model.rebuild(_lines(20))
        model.move_selection(Direction.NEXT, 19)
        model.current_scroll_window(5)
        window = model.current_scroll_window(50)
        assert window.offset == 0
        assert len(window.rows) == 21

    def test_empty_tree_window(self) -> None:
        model = ResultModel()
        window = model.current_scroll_window(10)
        assert window.rows == ()
        assert window.selected_row is None
