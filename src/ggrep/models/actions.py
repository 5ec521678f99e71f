"""Input actions the session controller understands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ggrep.models.query import SearchFlag


class Action(Enum):
    """Decoded user intents. Key glyphs are mapped onto these in ``ggrep.ui.keys``."""

    QUIT = "quit"
    INSERT_CHAR = "insert-char"
    DELETE_BACKWARD = "delete-backward"
    DELETE_CHAR = "delete-char"
    DELETE_TO_END = "delete-to-end"
    CLEAR = "clear"
    MOVE_BACKWARD = "move-backward"
    MOVE_FORWARD = "move-forward"
    MOVE_TO_START = "move-to-start"
    MOVE_TO_END = "move-to-end"
    TOGGLE_FLAG = "toggle-flag"
    ACCEPT_INPUT = "accept-input"
    CURSOR_UP = "cursor-up"
    CURSOR_DOWN = "cursor-down"
    PAGE_UP = "page-up"
    PAGE_DOWN = "page-down"
    TOGGLE_LEGEND = "toggle-legend"


@dataclass(frozen=True)
class InputEvent:
    """One decoded input event. ``char`` is set for INSERT_CHAR, ``flag`` for TOGGLE_FLAG."""

    action: Action
    char: str = ""
    flag: SearchFlag | None = None
