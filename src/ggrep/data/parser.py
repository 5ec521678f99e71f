"""Parser for ``path:line_number:content`` git grep output."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ggrep.models.search import FileGroup, MatchEntry, ResultTree

logger = logging.getLogger(__name__)


def parse_match_line(line: str, *, revision: str = "") -> MatchEntry | None:
    """Split one output line on its first two ``:`` delimiters.

    Returns None for lines that do not have the expected shape.
    """
    if revision:
        prefix = f"{revision}:"
        if line.startswith(prefix):
            line = line[len(prefix) :]
    parts = line.split(":", 2)
    if len(parts) != 3:
        return None
    file_path, line_num, content = parts
    if not file_path or not (line_num.isascii() and line_num.isdigit()):
        return None
    line_number = int(line_num)
    if line_number < 1:
        return None
    return MatchEntry(file_path=file_path, line_number=line_number, line_text=content)


def parse_grep_output(lines: Iterable[str], *, revision: str = "") -> ResultTree:
    """Group consecutive matches sharing a path, preserving git's order."""
    groups: list[FileGroup] = []
    current_path: str | None = None
    current: list[MatchEntry] = []

    for line_num, line in enumerate(lines, 1):
        if not line:
            continue
        entry = parse_match_line(line, revision=revision)
        if entry is None:
            logger.debug("Skipping malformed git grep line %d: %r", line_num, line)
            continue

        if entry.file_path != current_path:
            if current_path is not None:
                groups.append(FileGroup(file_path=current_path, entries=tuple(current)))
            current_path = entry.file_path
            current = []
        elif entry.line_number <= current[-1].line_number:
            logger.debug("Skipping out-of-order git grep line %d: %r", line_num, line)
            continue
        current.append(entry)

    if current_path is not None:
        groups.append(FileGroup(file_path=current_path, entries=tuple(current)))
    return ResultTree(groups=tuple(groups))
