"""Pure single-line editing operations over a Query.

Every function returns a new Query and never raises for in-range input: the
cursor clamps to ``[0, len(pattern)]`` and deleting at a boundary is a no-op.
"""

from __future__ import annotations

from ggrep.models.query import PATTERN_SYNTAX_FLAGS, Query, SearchFlag


def _clamp(cursor: int, pattern: str) -> int:
    return max(0, min(cursor, len(pattern)))


def insert_char(query: Query, c: str) -> Query:
    cursor = _clamp(query.cursor, query.pattern)
    pattern = query.pattern[:cursor] + c + query.pattern[cursor:]
    return query.model_copy(update={"pattern": pattern, "cursor": cursor + len(c)})


def delete_before_cursor(query: Query) -> Query:
    cursor = _clamp(query.cursor, query.pattern)
    if cursor == 0:
        return query
    pattern = query.pattern[: cursor - 1] + query.pattern[cursor:]
    return query.model_copy(update={"pattern": pattern, "cursor": cursor - 1})


def delete_after_cursor(query: Query) -> Query:
    cursor = _clamp(query.cursor, query.pattern)
    if cursor >= len(query.pattern):
        return query
    pattern = query.pattern[:cursor] + query.pattern[cursor + 1 :]
    return query.model_copy(update={"pattern": pattern, "cursor": cursor})


def delete_to_end(query: Query) -> Query:
    cursor = _clamp(query.cursor, query.pattern)
    return query.model_copy(update={"pattern": query.pattern[:cursor], "cursor": cursor})


def move_cursor(query: Query, delta: int) -> Query:
    return query.model_copy(update={"cursor": _clamp(query.cursor + delta, query.pattern)})


def move_cursor_to_start(query: Query) -> Query:
    return query.model_copy(update={"cursor": 0})


def move_cursor_to_end(query: Query) -> Query:
    return query.model_copy(update={"cursor": len(query.pattern)})


def toggle_flag(query: Query, flag: SearchFlag) -> Query:
    """Flip ``flag``. Turning on a pattern syntax turns the other syntaxes off."""
    if flag in query.flags:
        flags = query.flags & ~flag
    elif flag & PATTERN_SYNTAX_FLAGS:
        flags = (query.flags & ~PATTERN_SYNTAX_FLAGS) | flag
    else:
        flags = query.flags | flag
    return query.model_copy(update={"flags": SearchFlag(flags)})


def clear(query: Query) -> Query:
    """Empty the pattern. Flags, revision and pathspec are kept."""
    return query.model_copy(update={"pattern": "", "cursor": 0})
