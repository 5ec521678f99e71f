"""Tests for the terminal event source and logging setup."""

from __future__ import annotations

import logging

import pytest

from ggrep.config import Config
from ggrep.models.actions import Action, InputEvent
from ggrep.ui.app import configure_logging
from ggrep.ui.terminal import ESCAPE_DELAY, TerminalInput


@pytest.mark.asyncio
async def test_fed_input_is_queued_in_order() -> None:
    source = TerminalInput()
    source.feed("x\r")
    assert await source.next_event(0.1) == InputEvent(Action.INSERT_CHAR, char="x")
    assert await source.next_event(0.1) == InputEvent(Action.ACCEPT_INPUT)


@pytest.mark.asyncio
async def test_next_event_times_out() -> None:
    assert await TerminalInput().next_event(0.01) is None


@pytest.mark.asyncio
async def test_escape_sequence_split_across_reads() -> None:
    source = TerminalInput()
    source.feed("\x1b")
    source.feed("[A")
    assert await source.next_event(0.5) == InputEvent(Action.CURSOR_UP)
    assert await source.next_event(ESCAPE_DELAY * 2) is None


@pytest.mark.asyncio
async def test_lone_escape_is_quit_after_delay() -> None:
    source = TerminalInput()
    source.feed("ab\x1b")
    assert await source.next_event(0.5) == InputEvent(Action.INSERT_CHAR, char="a")
    assert await source.next_event(0.5) == InputEvent(Action.INSERT_CHAR, char="b")
    assert await source.next_event(0.5) == InputEvent(Action.QUIT)


def test_configure_logging_creates_log_dir(monkeypatch, test_config: Config) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    configure_logging(test_config)
    assert test_config.log_path.parent.is_dir()
    assert captured["filename"] == test_config.log_path
    assert captured["level"] == "WARNING"
