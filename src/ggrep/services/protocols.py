"""Protocol definitions for services and their collaborators."""

from __future__ import annotations

from typing import Protocol

from result import Result

from ggrep.models.actions import InputEvent
from ggrep.models.query import Query
from ggrep.models.search import SearchOutcome, SearchRequest
from ggrep.models.session import RenderSnapshot


class GrepExecutorProtocol(Protocol):
    """Runs the external search for one query."""

    async def grep(self, query: Query) -> Result[list[str], str]: ...


class SearchRunnerProtocol(Protocol):
    """Non-blocking submit/poll interface keyed by sequence number."""

    def submit(self, request: SearchRequest) -> None: ...

    def poll(self) -> SearchOutcome | None: ...


class EventSourceProtocol(Protocol):
    """Delivers decoded input events."""

    async def next_event(self, timeout: float) -> InputEvent | None: ...


class RendererProtocol(Protocol):
    """Paints snapshots; never mutates controller state."""

    def viewport_height(self) -> int: ...

    def render(self, snapshot: RenderSnapshot) -> None: ...
