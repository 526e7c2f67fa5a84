"""Pytest fixtures and shared fakes for testing.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Iterator

import pytest

from tests.fakes import InMemoryFileSystem
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    _ = (self, kwargs)
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Block all network access in tests.

    The engine performs no IO beyond local files, so any connection attempt is a bug.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture(autouse=True)
def isolate_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear engine environment variables so a developer's .env cannot leak in."""
    for name in ("CRS_SECOND_LANGUAGE_SCHEDULE", "CRS_TOTAL_CAP", "CRS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def fresh_engine_loggers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give each test fresh handlers so log output lands in that test's captured stderr."""
    for name in ("crs_engine.calculate",):
        monkeypatch.setattr(logging.getLogger(name), "handlers", [])
        monkeypatch.setattr(logging.getLogger(name), "propagate", True)


@pytest.fixture
def in_memory_fs() -> InMemoryFileSystem:
    """Provide an empty in-memory filesystem."""
    return InMemoryFileSystem()
