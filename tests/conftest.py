"""Shared pytest fixtures and test helpers for ujcon tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from ujcon.infrastructure.http import build_client

DIRECT_URL = "https://direct.example/latest/USD"
WRAPPED_URL = "https://wrapped.example/latest/USD"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's shell environment from leaking into settings."""
    for name in ("MOCK_RATE", "UJCON_MOCK_RATE", "UJCON_VERBOSE", "UJCON_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ujcon = logging.getLogger("ujcon")
    ujcon_level = ujcon.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ujcon.setLevel(ujcon_level)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def json_handler(
    routes: dict[str, tuple[int, Any]],
    calls: list[str] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Build a MockTransport handler serving ``{url: (status, json_body)}``.

    Unknown URLs raise ``httpx.ConnectError``.  Requested URLs are appended
    to *calls* when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        if url not in routes:
            raise httpx.ConnectError("connection refused", request=request)
        status, body = routes[url]
        return httpx.Response(status, json=body)

    return handler


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    """An ``httpx.Client`` with project defaults backed by *handler*."""
    return build_client(transport=httpx.MockTransport(handler))
