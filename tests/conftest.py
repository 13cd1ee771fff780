"""
Sisyphus Test Configuration

Shared pytest fixtures and configuration for all test types.
"""

from typing import Any, Callable, Iterable, Mapping

import httpx
import pytest


# Configure pytest collection
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (httpx wired through respx)")


class ScriptedTransport:
    """Transport replaying a fixed list of outcomes.

    Exceptions in the script are raised, anything else is returned. Every
    spec received is recorded in ``calls``.
    """

    def __init__(self, outcomes: Iterable[Any]) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []

    async def perform_request(self, spec: Mapping[str, Any]) -> Any:
        self.calls.append(dict(spec))
        if not self._outcomes:
            raise AssertionError("transport called more often than scripted")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def scripted_transport() -> Callable[..., ScriptedTransport]:
    """Provide a factory for ScriptedTransport instances."""
    def _make(*outcomes: Any) -> ScriptedTransport:
        return ScriptedTransport(outcomes)
    return _make


@pytest.fixture
def ok_response() -> httpx.Response:
    """Provide a 200 response with an ok payload."""
    return httpx.Response(200, json={"ok": True})


@pytest.fixture
def fail_response() -> httpx.Response:
    """Provide a 400 response with a failed payload."""
    return httpx.Response(400, json={"ok": False})
