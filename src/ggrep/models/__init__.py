"""Models for ggrep."""

from ggrep.models.actions import Action, InputEvent
from ggrep.models.query import (
    FLAG_OPTION_BY_FLAG,
    FLAG_OPTIONS,
    PATTERN_SYNTAX_FLAGS,
    FlagOption,
    Query,
    SearchFlag,
    iter_flags,
)
from ggrep.models.search import FileGroup, MatchEntry, ResultTree, SearchOutcome, SearchRequest
from ggrep.models.session import (
    Direction,
    ExitSummary,
    RenderSnapshot,
    ResultRow,
    ScrollWindow,
    Selection,
    SessionState,
    SessionStatus,
)

__all__ = [
    "Action",
    "Direction",
    "ExitSummary",
    "FileGroup",
    "FlagOption",
    "InputEvent",
    "MatchEntry",
    "Query",
    "RenderSnapshot",
    "ResultRow",
    "ResultTree",
    "ScrollWindow",
    "SearchFlag",
    "SearchOutcome",
    "SearchRequest",
    "Selection",
    "SessionState",
    "SessionStatus",
    "FLAG_OPTIONS",
    "FLAG_OPTION_BY_FLAG",
    "PATTERN_SYNTAX_FLAGS",
    "iter_flags",
]
