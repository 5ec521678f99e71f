"""Decoding raw terminal input into controller events."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ggrep.models.actions import Action, InputEvent
from ggrep.models.query import FLAG_OPTIONS

ESC = "\x1b"

_ESCAPE_SEQUENCE_RE = re.compile(r"\x1b(?:\[[0-9;?]*[A-Za-z~]|O[A-Za-z])")
# ESC, or the start of a CSI/SS3 sequence, ending a chunk: more bytes may follow.
_INCOMPLETE_ESCAPE_RE = re.compile(r"\x1b(?:\[[0-9;?]*|O)?\Z")

KEY_BINDINGS: dict[str, Action] = {
    "\r": Action.ACCEPT_INPUT,
    "\n": Action.ACCEPT_INPUT,
    "\x03": Action.QUIT,  # C-c
    ESC: Action.QUIT,
    "\x7f": Action.DELETE_BACKWARD,
    "\x08": Action.DELETE_BACKWARD,  # C-h
    "\x04": Action.DELETE_CHAR,  # C-d
    "\x1b[3~": Action.DELETE_CHAR,
    "\x0b": Action.DELETE_TO_END,  # C-k
    "\x15": Action.CLEAR,  # C-u
    "\x02": Action.MOVE_BACKWARD,  # C-b
    "\x1b[D": Action.MOVE_BACKWARD,
    "\x1bOD": Action.MOVE_BACKWARD,
    "\x06": Action.MOVE_FORWARD,  # C-f
    "\x1b[C": Action.MOVE_FORWARD,
    "\x1bOC": Action.MOVE_FORWARD,
    "\x01": Action.MOVE_TO_START,  # C-a
    "\x1b[H": Action.MOVE_TO_START,
    "\x1b[1~": Action.MOVE_TO_START,
    "\x05": Action.MOVE_TO_END,  # C-e
    "\x1b[F": Action.MOVE_TO_END,
    "\x1b[4~": Action.MOVE_TO_END,
    "\x10": Action.CURSOR_UP,  # C-p
    "\x1b[A": Action.CURSOR_UP,
    "\x1bOA": Action.CURSOR_UP,
    "\x0e": Action.CURSOR_DOWN,  # C-n
    "\x1b[B": Action.CURSOR_DOWN,
    "\x1bOB": Action.CURSOR_DOWN,
    "\x1b[5~": Action.PAGE_UP,
    "\x1b[6~": Action.PAGE_DOWN,
    "\x1bh": Action.TOGGLE_LEGEND,
}

# Alt+<key> toggles the flag whose FlagOption.key matches.
FLAG_BINDINGS = {ESC + item.key: item.flag for item in FLAG_OPTIONS}


@dataclass(frozen=True)
class KeyHelp:
    """One line of the key legend."""

    keys: str
    label: str


EDITING_HELP: tuple[KeyHelp, ...] = (
    KeyHelp("ENTER", "search"),
    KeyHelp("ESC,C-c", "quit"),
    KeyHelp("←,C-b / →,C-f", "move"),
    KeyHelp("C-a / C-e", "head / tail"),
    KeyHelp("BS / DEL,C-d", "delete"),
    KeyHelp("C-k / C-u", "kill / clear"),
    KeyHelp("↑,C-p / ↓,C-n", "select"),
    KeyHelp("PgUp / PgDn", "page"),
    KeyHelp("M-h", "hide legend"),
)


def split_keys(data: str) -> list[str]:
    """Split a chunk of terminal input into individual key strings.

    A lone ESC at the end of a chunk is the Escape key; ESC followed by a
    single character is an Alt chord.
    """
    keys: list[str] = []
    index = 0
    while index < len(data):
        if data[index] != ESC:
            keys.append(data[index])
            index += 1
            continue
        match = _ESCAPE_SEQUENCE_RE.match(data, index)
        if match:
            keys.append(match.group())
            index = match.end()
        elif index + 1 < len(data) and data[index + 1] != ESC:
            keys.append(data[index : index + 2])
            index += 2
        else:
            keys.append(ESC)
            index += 1
    return keys


def split_incomplete(data: str) -> tuple[str, str]:
    """Split ``data`` into complete input and a trailing partial escape sequence."""
    match = _INCOMPLETE_ESCAPE_RE.search(data)
    if match is None:
        return data, ""
    return data[: match.start()], match.group()


def decode_key(key: str) -> InputEvent | None:
    """Map one key string to an input event, or None when it is not bound."""
    if key in KEY_BINDINGS:
        return InputEvent(KEY_BINDINGS[key])
    if key in FLAG_BINDINGS:
        return InputEvent(Action.TOGGLE_FLAG, flag=FLAG_BINDINGS[key])
    if len(key) == 1 and key.isprintable():
        return InputEvent(Action.INSERT_CHAR, char=key)
    return None


def decode_input(data: str) -> list[InputEvent]:
    """Decode a chunk of terminal input into events, dropping unbound keys."""
    events = [decode_key(key) for key in split_keys(data)]
    return [event for event in events if event is not None]
