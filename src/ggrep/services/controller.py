"""Session controller: the state machine behind the interactive search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from result import Err, Ok

from ggrep.data.git import command_line
from ggrep.models.actions import Action, InputEvent
from ggrep.models.query import Query, SearchFlag
from ggrep.models.search import SearchOutcome, SearchRequest
from ggrep.models.session import (
    Direction,
    ExitSummary,
    RenderSnapshot,
    SessionState,
    SessionStatus,
)
from ggrep.services import query_model
from ggrep.services.result_model import ResultModel

if TYPE_CHECKING:
    from ggrep.services.protocols import SearchRunnerProtocol

logger = logging.getLogger(__name__)

UNPARSEABLE_OUTPUT_MESSAGE = "Unable to parse git grep output"


class SessionController:
    """Owns SessionState and routes every mutation through its operations.

    Editing never searches on its own; ``commit`` does. Outcomes are applied
    only when they carry the sequence number of the latest committed request.
    """

    def __init__(
        self,
        runner: SearchRunnerProtocol,
        query: Query | None = None,
        *,
        git_executable: str = "git",
        legend_visible: bool = True,
    ) -> None:
        self._runner = runner
        self._git_executable = git_executable
        self._results = ResultModel()
        self._state = SessionState(query=query or Query(), legend_visible=legend_visible)
        self._results_query: Query | None = None
        self._page_size = 10

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def results(self) -> ResultModel:
        return self._results

    @property
    def exited(self) -> bool:
        return self._state.status is SessionStatus.EXITED

    @property
    def exit_summary(self) -> ExitSummary:
        return ExitSummary(last_committed_query=self._state.last_committed_query)

    # Query editing

    def insert_char(self, c: str) -> SessionStatus:
        return self._edit(query_model.insert_char(self._state.query, c))

    def delete_before_cursor(self) -> SessionStatus:
        return self._edit(query_model.delete_before_cursor(self._state.query))

    def delete_after_cursor(self) -> SessionStatus:
        return self._edit(query_model.delete_after_cursor(self._state.query))

    def delete_to_end(self) -> SessionStatus:
        return self._edit(query_model.delete_to_end(self._state.query))

    def move_cursor(self, delta: int) -> SessionStatus:
        return self._edit(query_model.move_cursor(self._state.query, delta))

    def move_cursor_to_start(self) -> SessionStatus:
        return self._edit(query_model.move_cursor_to_start(self._state.query))

    def move_cursor_to_end(self) -> SessionStatus:
        return self._edit(query_model.move_cursor_to_end(self._state.query))

    def toggle_flag(self, flag: SearchFlag) -> SessionStatus:
        return self._edit(query_model.toggle_flag(self._state.query, flag))

    def clear(self) -> SessionStatus:
        return self._edit(query_model.clear(self._state.query))

    # Searching

    def commit(self) -> SessionStatus:
        """Submit the current query, superseding any outstanding search."""
        if self.exited:
            return self._state.status
        state = self._state
        state.last_committed_sequence_number += 1
        state.last_committed_query = state.query
        state.pending = True
        state.error_message = ""
        state.status = SessionStatus.SEARCHING
        self._runner.submit(SearchRequest(state.query, state.last_committed_sequence_number))
        return state.status

    def poll(self) -> bool:
        """Apply a completed search if the runner has one. Returns True if state changed."""
        if self.exited:
            return False
        outcome = self._runner.poll()
        if outcome is None:
            return False
        return self.apply_outcome(outcome)

    def apply_outcome(self, outcome: SearchOutcome) -> bool:
        """Apply ``outcome`` unless it is stale. Returns True if state changed."""
        state = self._state
        if (
            self.exited
            or not state.pending
            or outcome.sequence_number != state.last_committed_sequence_number
        ):
            logger.debug("Ignoring outcome %d", outcome.sequence_number)
            return False

        state.pending = False
        # Edits made while the search ran keep the session in EDITING.
        searching = state.status is SessionStatus.SEARCHING
        match outcome.status:
            case Ok(raw_lines):
                query = state.last_committed_query or state.query
                tree = self._results.rebuild(raw_lines, revision=query.revision)
                self._sync_results()
                if tree.is_empty() and any(raw_lines):
                    self._fail(UNPARSEABLE_OUTPUT_MESSAGE, searching)
                else:
                    self._results_query = query
                    state.error_message = ""
                    if searching:
                        state.status = SessionStatus.BROWSING
            case Err(message):
                self._fail(message, searching)
        return True

    # Browsing

    def move_selection(self, direction: Direction, count: int = 1) -> SessionStatus:
        if self._state.status is SessionStatus.BROWSING:
            self._results.move_selection(direction, count)
            self._sync_results()
        return self._state.status

    def page(self, direction: Direction) -> SessionStatus:
        return self.move_selection(direction, self._page_size)

    # Session

    def toggle_legend(self) -> SessionStatus:
        self._state.legend_visible = not self._state.legend_visible
        return self._state.status

    def quit(self) -> ExitSummary:
        self._state.status = SessionStatus.EXITED
        self._state.pending = False
        return self.exit_summary

    def dispatch(self, event: InputEvent) -> SessionStatus:
        """Route one decoded input event to the matching operation."""
        if self.exited:
            return self._state.status

        match event.action:
            case Action.QUIT:
                self.quit()
            case Action.INSERT_CHAR:
                self.insert_char(event.char)
            case Action.DELETE_BACKWARD:
                self.delete_before_cursor()
            case Action.DELETE_CHAR:
                self.delete_after_cursor()
            case Action.DELETE_TO_END:
                self.delete_to_end()
            case Action.CLEAR:
                self.clear()
            case Action.MOVE_BACKWARD:
                self.move_cursor(-1)
            case Action.MOVE_FORWARD:
                self.move_cursor(1)
            case Action.MOVE_TO_START:
                self.move_cursor_to_start()
            case Action.MOVE_TO_END:
                self.move_cursor_to_end()
            case Action.TOGGLE_FLAG if event.flag is not None:
                self.toggle_flag(event.flag)
            case Action.ACCEPT_INPUT:
                self.commit()
            case Action.CURSOR_UP:
                self.move_selection(Direction.PREV)
            case Action.CURSOR_DOWN:
                self.move_selection(Direction.NEXT)
            case Action.PAGE_UP:
                self.page(Direction.PREV)
            case Action.PAGE_DOWN:
                self.page(Direction.NEXT)
            case Action.TOGGLE_LEGEND:
                self.toggle_legend()
            case _:
                logger.debug("Unhandled input event: %s", event)
        return self._state.status

    def snapshot(self, viewport_height: int) -> RenderSnapshot:
        """Derive the frame to render. Only the scroll offset is adjusted."""
        state = self._state
        self._page_size = max(viewport_height - 1, 1)
        window = self._results.current_scroll_window(viewport_height)
        self._sync_results()
        return RenderSnapshot(
            status=state.status,
            query=state.query,
            command_line=command_line(state.query, self._git_executable),
            window=window,
            hit_lines=state.result_tree.hit_lines,
            hit_files=state.result_tree.hit_files,
            error_message=state.error_message,
            results_query=self._results_query,
            pending=state.pending,
            legend_visible=state.legend_visible,
        )

    def _edit(self, query: Query) -> SessionStatus:
        if self.exited:
            return self._state.status
        self._state.query = query
        self._state.status = SessionStatus.EDITING
        return self._state.status

    def _fail(self, message: str, searching: bool) -> None:
        logger.info("Search %d failed: %s", self._state.last_committed_sequence_number, message)
        self._state.error_message = message
        if searching:
            self._state.status = SessionStatus.ERROR

    def _sync_results(self) -> None:
        self._state.result_tree = self._results.tree
        self._state.selection = self._results.selection
