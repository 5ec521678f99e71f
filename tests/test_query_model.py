"""Tests for single-line query editing."""

from __future__ import annotations

import random

import pytest
from pydantic import ValidationError

from ggrep.models.query import Query, SearchFlag
from ggrep.services import query_model


class TestEditing:
    def test_insert_at_cursor(self) -> None:
        query = Query.from_pattern("TOD")
        query = query_model.insert_char(query, "O")
        assert query.pattern == "TODO"
        assert query.cursor == 4

    def test_insert_in_middle(self) -> None:
        query = query_model.move_cursor(Query.from_pattern("TDO"), -2)
        query = query_model.insert_char(query, "O")
        assert query.pattern == "TODO"
        assert query.cursor == 2

    def test_delete_before_cursor_at_start_is_noop(self) -> None:
        query = Query(pattern="abc", cursor=0)
        assert query_model.delete_before_cursor(query) == query

    def test_delete_after_cursor_at_end_is_noop(self) -> None:
        query = Query.from_pattern("abc")
        assert query_model.delete_after_cursor(query) == query

    def test_delete_both_directions(self) -> None:
        query = Query(pattern="abcd", cursor=2)
        assert query_model.delete_before_cursor(query) == Query(pattern="acd", cursor=1)
        assert query_model.delete_after_cursor(query) == Query(pattern="abd", cursor=2)

    def test_move_cursor_clamps(self) -> None:
        query = Query.from_pattern("abc")
        assert query_model.move_cursor(query, 10).cursor == 3
        assert query_model.move_cursor(query, -10).cursor == 0

    def test_start_end_and_delete_to_end(self) -> None:
        query = Query.from_pattern("hello world")
        query = query_model.move_cursor_to_start(query)
        assert query.cursor == 0
        query = query_model.move_cursor(query, 5)
        assert query_model.delete_to_end(query).pattern == "hello"
        assert query_model.move_cursor_to_end(query).cursor == len("hello world")

    def test_clear_keeps_flags_and_scope(self) -> None:
        query = Query.from_pattern(
            "abc", flags=SearchFlag.IGNORE_CASE, revision="HEAD", pathspec="src"
        )
        cleared = query_model.clear(query)
        assert cleared.pattern == ""
        assert cleared.cursor == 0
        assert cleared.flags == SearchFlag.IGNORE_CASE
        assert cleared.revision == "HEAD"
        assert cleared.pathspec == "src"

    def test_edits_do_not_mutate_input(self) -> None:
        query = Query.from_pattern("abc")
        query_model.insert_char(query, "d")
        assert query.pattern == "abc"

    def test_query_rejects_cursor_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Query(pattern="ab", cursor=3)


class TestToggleFlag:
    def test_toggle_on_and_off(self) -> None:
        query = query_model.toggle_flag(Query(), SearchFlag.IGNORE_CASE)
        assert query.has_flag(SearchFlag.IGNORE_CASE)
        query = query_model.toggle_flag(query, SearchFlag.IGNORE_CASE)
        assert not query.has_flag(SearchFlag.IGNORE_CASE)

    def test_independent_flags_combine(self) -> None:
        query = Query()
        for flag in (SearchFlag.IGNORE_CASE, SearchFlag.WORD_REGEXP, SearchFlag.INVERT_MATCH):
            query = query_model.toggle_flag(query, flag)
        assert query.flags == (
            SearchFlag.IGNORE_CASE | SearchFlag.WORD_REGEXP | SearchFlag.INVERT_MATCH
        )

    def test_pattern_syntaxes_are_exclusive(self) -> None:
        query = query_model.toggle_flag(Query(), SearchFlag.FIXED_STRINGS)
        query = query_model.toggle_flag(query, SearchFlag.IGNORE_CASE)
        query = query_model.toggle_flag(query, SearchFlag.PERL_REGEXP)
        assert query.flags == SearchFlag.IGNORE_CASE | SearchFlag.PERL_REGEXP


def test_cursor_invariant_holds_for_random_edit_sequences() -> None:
    rng = random.Random(1234)
    operations = [
        lambda q: query_model.insert_char(q, rng.choice("ab:-")),
        query_model.delete_before_cursor,
        query_model.delete_after_cursor,
        lambda q: query_model.move_cursor(q, rng.randint(-5, 5)),
        query_model.move_cursor_to_start,
        query_model.move_cursor_to_end,
        query_model.delete_to_end,
        query_model.clear,
        lambda q: query_model.toggle_flag(q, rng.choice(list(SearchFlag))),
    ]
    for _ in range(50):
        query = Query()
        for _ in range(40):
            query = rng.choice(operations)(query)
            assert 0 <= query.cursor <= len(query.pattern)
