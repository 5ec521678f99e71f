"""Search runner: at most one git grep of interest, stale outcomes dropped."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from result import Err

from ggrep.models.search import SearchOutcome, SearchRequest

if TYPE_CHECKING:
    from ggrep.services.protocols import GrepExecutorProtocol

logger = logging.getLogger(__name__)


class SearchRunner:
    """Starts searches as asyncio tasks and hands back only the latest outcome.

    ``submit`` must be called from a running event loop. A superseded task is
    cancelled, but nothing relies on that: its outcome is filtered out by
    sequence number whenever it completes.
    """

    def __init__(self, executor: GrepExecutorProtocol) -> None:
        self._executor = executor
        self._latest: int | None = None
        self._inflight: asyncio.Task[SearchOutcome] | None = None
        self._abandoned: set[asyncio.Task[Any]] = set()

    @property
    def latest_sequence_number(self) -> int | None:
        return self._latest

    @property
    def busy(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def submit(self, request: SearchRequest) -> None:
        """Start searching for ``request``, abandoning any earlier invocation."""
        if self._latest is not None and request.sequence_number <= self._latest:
            logger.warning(
                "Ignoring request %d: not newer than %d", request.sequence_number, self._latest
            )
            return
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Abandoning search %s for %d", self._latest, request.sequence_number)
            self._abandon(self._inflight)

        self._latest = request.sequence_number
        self._inflight = asyncio.get_running_loop().create_task(self._execute(request))
        logger.debug("Submitted search %d: %r", request.sequence_number, request.query.pattern)

    def poll(self) -> SearchOutcome | None:
        """Return the completed outcome of the latest request, at most once."""
        task = self._inflight
        if task is None or not task.done():
            return None
        self._inflight = None
        if task.cancelled():
            return None
        outcome = task.result()
        if outcome.sequence_number != self._latest:
            logger.debug("Dropping stale outcome %d", outcome.sequence_number)
            return None
        return outcome

    async def wait(self) -> None:
        """Block until the in-flight search, if any, has finished."""
        if self._inflight is not None:
            await asyncio.wait({self._inflight})

    def cancel_all(self) -> None:
        """Abandon the in-flight search (used on shutdown)."""
        if self._inflight is not None and not self._inflight.done():
            self._abandon(self._inflight)
        self._inflight = None

    async def _execute(self, request: SearchRequest) -> SearchOutcome:
        if not request.query.pattern:
            return SearchOutcome(request.sequence_number, Err("Search pattern cannot be empty"))
        try:
            status = await self._executor.grep(request.query)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("Search %d failed", request.sequence_number)
            status = Err(f"Search failed: {exc}")
        return SearchOutcome(request.sequence_number, status)

    def _abandon(self, task: asyncio.Task[Any]) -> None:
        task.cancel()
        self._abandoned.add(task)
        task.add_done_callback(self._abandoned.discard)
