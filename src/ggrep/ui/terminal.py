"""Terminal input: cbreak-style raw mode and an asyncio event source over stdin."""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import sys
import termios
import tty
from typing import TextIO

from ggrep.models.actions import InputEvent
from ggrep.ui.keys import decode_input, split_incomplete

logger = logging.getLogger(__name__)

# How long a partial escape sequence waits for the rest of its bytes.
ESCAPE_DELAY = 0.05


class TerminalInput:
    """Reads stdin without blocking the event loop and queues decoded events.

    Use as a context manager inside a running loop: entering switches the
    terminal to a raw-ish mode (no echo, no line buffering, no signal keys)
    while leaving output processing alone so rendering still works.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdin
        self._fd: int | None = None
        self._saved: list | None = None
        self._queue: asyncio.Queue[InputEvent] = asyncio.Queue()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self._flush_handle: asyncio.TimerHandle | None = None

    def __enter__(self) -> TerminalInput:
        fd = self._stream.fileno()
        self._fd = fd
        self._saved = termios.tcgetattr(fd)
        mode = termios.tcgetattr(fd)
        mode[tty.IFLAG] &= ~(termios.IXON | termios.ICRNL)
        mode[tty.LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN)
        mode[tty.CC][termios.VMIN] = 1
        mode[tty.CC][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSAFLUSH, mode)
        asyncio.get_running_loop().add_reader(fd, self._on_readable)
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # type: ignore[no-untyped-def]
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None
        if self._fd is None:
            return
        asyncio.get_running_loop().remove_reader(self._fd)
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        self._fd = None

    def feed(self, data: str) -> None:
        """Decode ``data`` as if it had been typed.

        A trailing ESC or partial escape sequence is held back until the next
        chunk arrives, or decoded as typed once ``ESCAPE_DELAY`` passes.
        """
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None
        complete, self._pending = split_incomplete(self._pending + data)
        self._enqueue(complete)
        if self._pending:
            self._flush_handle = asyncio.get_running_loop().call_later(
                ESCAPE_DELAY, self._flush_pending
            )

    async def next_event(self, timeout: float) -> InputEvent | None:
        """Next decoded event, or None if nothing arrives within ``timeout`` seconds."""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None

    def _flush_pending(self) -> None:
        self._flush_handle = None
        pending, self._pending = self._pending, ""
        self._enqueue(pending)

    def _enqueue(self, data: str) -> None:
        for event in decode_input(data):
            self._queue.put_nowait(event)

    def _on_readable(self) -> None:
        if self._fd is None:
            return
        try:
            data = os.read(self._fd, 1024)
        except OSError:
            logger.warning("Failed reading terminal input", exc_info=True)
            return
        if data:
            self.feed(self._decoder.decode(data))
