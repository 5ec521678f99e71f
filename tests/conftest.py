"""Shared fixtures for ggrep tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from result import Ok, Result

from ggrep.config import Config
from ggrep.models.query import Query
from ggrep.models.search import SearchOutcome, SearchRequest

TODO_OUTPUT = [
    "a.rs:3:// TODO fix",
    "a.rs:9:// TODO later",
    "b.rs:1:TODO: x",
]


class FakeExecutor:
    """Executor whose searches finish only when the test releases them."""

    def __init__(self) -> None:
        self.queries: list[Query] = []
        self._gates: list[asyncio.Future[Result[list[str], str]]] = []

    async def grep(self, query: Query) -> Result[list[str], str]:
        self.queries.append(query)
        gate: asyncio.Future[Result[list[str], str]] = asyncio.get_running_loop().create_future()
        self._gates.append(gate)
        return await gate

    def finish(self, index: int, status: Result[list[str], str]) -> None:
        self._gates[index].set_result(status)


class FakeRunner:
    """Runner that records requests and returns queued outcomes from poll()."""

    def __init__(self) -> None:
        self.requests: list[SearchRequest] = []
        self.outcomes: list[SearchOutcome] = []

    def submit(self, request: SearchRequest) -> None:
        self.requests.append(request)

    def poll(self) -> SearchOutcome | None:
        return self.outcomes.pop(0) if self.outcomes else None

    def complete(self, status: Result[list[str], str], index: int = -1) -> SearchOutcome:
        outcome = SearchOutcome(self.requests[index].sequence_number, status)
        self.outcomes.append(outcome)
        return outcome


@pytest.fixture
def todo_output() -> list[str]:
    return list(TODO_OUTPUT)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config pointing at temporary directories."""
    return Config(repo_dir=tmp_path / "repo", cache_dir=tmp_path / "cache")


@pytest.fixture
def ok_todo(todo_output: list[str]) -> Result[list[str], str]:
    return Ok(todo_output)
