"""Application loop: wires terminal input, controller, runner and renderer."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ggrep.data.git import GitGrep
from ggrep.models.session import ExitSummary
from ggrep.services.controller import SessionController
from ggrep.services.search_runner import SearchRunner
from ggrep.ui.render import Renderer
from ggrep.ui.terminal import TerminalInput

if TYPE_CHECKING:
    from ggrep.config import Config
    from ggrep.models.query import Query
    from ggrep.services.protocols import EventSourceProtocol, RendererProtocol

logger = logging.getLogger(__name__)


def configure_logging(config: Config) -> None:
    """Send logs to a file; the terminal belongs to the renderer."""
    config.log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=config.log_path,
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def run_session(
    controller: SessionController,
    events: EventSourceProtocol,
    renderer: RendererProtocol,
    poll_interval: float,
) -> ExitSummary:
    """Cooperative loop: handle input, apply finished searches, repaint when dirty."""
    renderer.render(controller.snapshot(renderer.viewport_height()))
    last_height = renderer.viewport_height()

    while not controller.exited:
        dirty = False
        event = await events.next_event(poll_interval)
        if event is not None:
            controller.dispatch(event)
            dirty = True
        if controller.poll():
            dirty = True

        height = renderer.viewport_height()
        if height != last_height:
            last_height = height
            dirty = True
        if dirty and not controller.exited:
            renderer.render(controller.snapshot(height))

    return controller.exit_summary


async def _run(config: Config, query: Query) -> ExitSummary:
    runner = SearchRunner(GitGrep(config))
    controller = SessionController(
        runner,
        query,
        git_executable=config.git_executable,
        legend_visible=config.legend_visible,
    )
    if query.pattern:
        controller.commit()

    try:
        with TerminalInput() as events, Renderer() as renderer:
            return await run_session(controller, events, renderer, config.poll_interval)
    finally:
        runner.cancel_all()


def run_app(config: Config, query: Query) -> ExitSummary:
    """Entry point: run the interactive session until the user quits."""
    configure_logging(config)
    logger.info("Starting ggrep in %s", config.repo_dir)
    return asyncio.run(_run(config, query))
