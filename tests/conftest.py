"""Pytest fixtures for pgscope tests."""

from __future__ import annotations

from typing import Any

import pytest
import structlog

from pgscope.domain.exceptions import ConnectionOpenError

# capture_logs() only sees loggers that were not cached on first use
structlog.configure(cache_logger_on_first_use=False)


# --- Fake database client ---


class FakeDbClient:
    """In-memory DbClient recording its lifecycle calls."""

    def __init__(
        self,
        connection_options: Any = "",
        *,
        open_error: Exception | None = None,
        close_error: Exception | None = None,
        ping_error: Exception | None = None,
    ) -> None:
        self.connection_options = connection_options
        self._open_error = open_error
        self._close_error = close_error
        self._ping_error = ping_error
        self.open_calls = 0
        self.close_calls = 0
        self.ping_calls = 0

    @property
    def is_open(self) -> bool:
        return self.open_calls > 0 and self.close_calls == 0

    async def open(self) -> None:
        self.open_calls += 1
        if self._open_error:
            raise self._open_error

    async def close(self) -> None:
        self.close_calls += 1
        if self._close_error:
            raise self._close_error

    async def ping(self) -> None:
        self.ping_calls += 1
        if self._ping_error:
            raise self._ping_error


class FakeClientFactory:
    """client_factory that builds FakeDbClients and keeps them for assertions."""

    def __init__(self, **client_kwargs: Any) -> None:
        self._client_kwargs = client_kwargs
        self.clients: list[FakeDbClient] = []

    def __call__(self, connection_options: Any) -> FakeDbClient:
        client = FakeDbClient(connection_options, **self._client_kwargs)
        self.clients.append(client)
        return client


# --- Fake Falcon request/response ---


class FakeRequest:
    def __init__(self, method: str = "GET") -> None:
        self.method = method


class FakeResponse:
    """Response double; run_close_callbacks() plays the 'response sent' event."""

    def __init__(self) -> None:
        self.status: Any = None
        self.media: Any = None
        self.complete = False
        self.callbacks: list = []

    def schedule(self, callback) -> None:
        self.callbacks.append(callback)

    async def run_close_callbacks(self) -> None:
        for callback in self.callbacks:
            await callback()


# --- Fixtures ---


@pytest.fixture
def client_factory() -> FakeClientFactory:
    """Factory whose clients open and close successfully."""
    return FakeClientFactory()


@pytest.fixture
def failing_client_factory():
    """Build a factory whose clients fail to open with the given SQLSTATE."""

    def _make(code: str | None = "XX000", message: str = "boom") -> FakeClientFactory:
        return FakeClientFactory(open_error=ConnectionOpenError(message, code=code))

    return _make


@pytest.fixture
def kill_calls(monkeypatch) -> list[tuple[int, int]]:
    """Intercept os.kill so fatal-error tests never signal the test runner."""
    import os

    calls: list[tuple[int, int]] = []
    monkeypatch.setattr(os, "kill", lambda pid, sig: calls.append((pid, sig)))
    return calls
