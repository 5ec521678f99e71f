"""Session-level models: controller state, selection and render snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ggrep.models.query import Query
from ggrep.models.search import MatchEntry, ResultTree


class SessionStatus(Enum):
    """States of the interactive session."""

    EDITING = "editing"
    SEARCHING = "searching"
    BROWSING = "browsing"
    ERROR = "error"
    EXITED = "exited"


class Direction(Enum):
    NEXT = 1
    PREV = -1


@dataclass(frozen=True)
class Selection:
    """Selected entry (index into the flattened tree) and scroll offset in display rows."""

    selected_index: int | None = None
    scroll_offset: int = 0


@dataclass(frozen=True)
class ResultRow:
    """One display row: a file header (``entry is None``) or a matched line."""

    file_path: str
    entry: MatchEntry | None = None
    line_count: int = 0

    @property
    def is_header(self) -> bool:
        return self.entry is None


@dataclass(frozen=True)
class ScrollWindow:
    """Rows visible in the viewport and the position of the selected one within them."""

    rows: tuple[ResultRow, ...] = ()
    offset: int = 0
    selected_row: int | None = None
    total_rows: int = 0


@dataclass
class SessionState:
    """Everything the controller owns. Mutated only by SessionController."""

    query: Query = field(default_factory=Query)
    result_tree: ResultTree = field(default_factory=ResultTree)
    selection: Selection = field(default_factory=Selection)
    status: SessionStatus = SessionStatus.EDITING
    error_message: str = ""
    last_committed_sequence_number: int = 0
    last_committed_query: Query | None = None
    pending: bool = False
    legend_visible: bool = True


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of the session for one frame."""

    status: SessionStatus
    query: Query
    command_line: str
    window: ScrollWindow
    hit_lines: int
    hit_files: int
    error_message: str = ""
    results_query: Query | None = None
    pending: bool = False
    legend_visible: bool = True


@dataclass(frozen=True)
class ExitSummary:
    """What the session leaves behind: the last committed query, if any."""

    last_committed_query: Query | None = None
