"""Result model: parsed matches plus selection and scroll state."""

from __future__ import annotations

import logging

from ggrep.data.parser import parse_grep_output
from ggrep.models.search import MatchEntry, ResultTree
from ggrep.models.session import Direction, ResultRow, ScrollWindow, Selection

logger = logging.getLogger(__name__)


class ResultModel:
    """Owns the current ResultTree and the selection over its flattened entries.

    Display rows interleave one header row per file with that file's entry
    rows; the scroll offset counts display rows.
    """

    def __init__(self) -> None:
        self._tree = ResultTree()
        self._entries: list[MatchEntry] = []
        self._rows: list[ResultRow] = []
        self._entry_rows: list[int] = []
        self._selection = Selection()

    @property
    def tree(self) -> ResultTree:
        return self._tree

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def selected_entry(self) -> MatchEntry | None:
        index = self._selection.selected_index
        return None if index is None else self._entries[index]

    @property
    def rows(self) -> tuple[ResultRow, ...]:
        return tuple(self._rows)

    def rebuild(self, raw_lines: list[str], *, revision: str = "") -> ResultTree:
        """Replace the tree with parsed ``raw_lines``, keeping the selected entry if present."""
        previous = self.selected_entry
        self._set_tree(parse_grep_output(raw_lines, revision=revision))

        kept = None if previous is None else self._tree.index_of(previous.key)
        if kept is not None:
            self._selection = Selection(kept, self._selection.scroll_offset)
        elif self._entries:
            self._selection = Selection(0, 0)
        else:
            self._selection = Selection()
        logger.debug(
            "Rebuilt results: %d lines in %d files, selection %s",
            self._tree.hit_lines,
            self._tree.hit_files,
            self._selection.selected_index,
        )
        return self._tree

    def move_selection(self, direction: Direction, count: int = 1) -> Selection:
        """Step ``count`` entries forward or back, clamping at both ends."""
        index = self._selection.selected_index
        if index is None:
            return self._selection
        target = index + direction.value * max(count, 0)
        target = max(0, min(target, len(self._entries) - 1))
        self._selection = Selection(target, self._selection.scroll_offset)
        return self._selection

    def current_scroll_window(self, viewport_height: int) -> ScrollWindow:
        """Rows visible in a viewport of ``viewport_height`` rows.

        Scrolls only when the selected row would fall outside the window, and
        then by the minimal amount.
        """
        height = max(viewport_height, 0)
        total = len(self._rows)
        offset = self._selection.scroll_offset
        selected_row = None
        if self._selection.selected_index is not None:
            selected_row = self._entry_rows[self._selection.selected_index]
            if selected_row < offset:
                # Reveal the file header above a group's first entry.
                first_in_group = self._rows[selected_row - 1].is_header
                offset = selected_row - 1 if first_in_group and height > 1 else selected_row
            elif height and selected_row >= offset + height:
                offset = selected_row - height + 1
        offset = max(0, min(offset, max(total - height, 0)))
        self._selection = Selection(self._selection.selected_index, offset)

        return ScrollWindow(
            rows=tuple(self._rows[offset : offset + height]),
            offset=offset,
            selected_row=None if selected_row is None else selected_row - offset,
            total_rows=total,
        )

    def _set_tree(self, tree: ResultTree) -> None:
        self._tree = tree
        self._entries = tree.flatten()
        self._rows = []
        self._entry_rows = []
        for group in tree.groups:
            self._rows.append(ResultRow(group.file_path, None, len(group.entries)))
            for entry in group.entries:
                self._entry_rows.append(len(self._rows))
                self._rows.append(ResultRow(group.file_path, entry))
