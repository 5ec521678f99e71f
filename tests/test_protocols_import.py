"""Protocol module smoke test."""

from __future__ import annotations

from ggrep.services import protocols


def test_protocols_module_imports() -> None:
    assert hasattr(protocols, "GrepExecutorProtocol")
    assert hasattr(protocols, "SearchRunnerProtocol")
    assert hasattr(protocols, "EventSourceProtocol")
    assert hasattr(protocols, "RendererProtocol")
