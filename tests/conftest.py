"""Shared fixtures: a local stand-in for the Marketstack and GoldAPI endpoints."""

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from quoteline.config import GoldApiConfig, MarketstackConfig

NOT_FOUND_BODY = json.dumps({"error": {"code": "not_found", "message": "Not found"}})


@dataclass
class RecordedRequest:
    """A request received by the fake provider server."""

    path: str
    query: dict[str, str]
    headers: dict[str, str]


class FakeProviderServer:
    """Serves canned responses per path and records every request."""

    def __init__(self) -> None:
        self.server: TestServer | None = None
        self.routes: dict[str, tuple[int, str]] = {}
        self.requests: list[RecordedRequest] = []

    def url(self, path: str) -> str:
        assert self.server is not None
        return str(self.server.make_url(path))

    def respond(
        self, path: str, body: Any = None, status: int = 200, raw: str | None = None
    ) -> None:
        """Register the response for ``path``; ``raw`` bypasses JSON encoding."""
        self.routes[path] = (status, raw if raw is not None else json.dumps(body))

    @property
    def paths(self) -> list[str]:
        return [r.path for r in self.requests]

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            RecordedRequest(
                path=request.path,
                query=dict(request.query),
                headers=dict(request.headers),
            )
        )
        status, text = self.routes.get(request.path, (404, NOT_FOUND_BODY))
        return web.Response(status=status, text=text, content_type="application/json")


@pytest.fixture
async def fake_api() -> AsyncIterator[FakeProviderServer]:
    """Start a fake provider server on a free local port."""
    fake = FakeProviderServer()
    app = web.Application()
    app.router.add_get("/{tail:.*}", fake.handle)

    server = TestServer(app)
    await server.start_server()
    fake.server = server

    yield fake

    await server.close()


@pytest.fixture
def marketstack_config(fake_api: FakeProviderServer) -> MarketstackConfig:
    """Marketstack configuration pointing at the fake server."""
    return MarketstackConfig(base_url=fake_api.url("/v1"), access_key="test-key")


@pytest.fixture
def goldapi_config(fake_api: FakeProviderServer) -> GoldApiConfig:
    """GoldAPI configuration pointing at the fake server."""
    return GoldApiConfig(base_url=fake_api.url("/api"), access_token="test-token")


@pytest.fixture
def sgol_ticker_body() -> dict[str, Any]:
    return {
        "name": "abrdn Physical Gold Shares ETF",
        "symbol": "SGOL",
        "has_intraday": False,
        "has_eod": True,
        "stock_exchange": {"name": "NYSE ARCA", "mic": "ARCX"},
    }


@pytest.fixture
def sgol_eod_body() -> dict[str, Any]:
    return {
        "open": 20.1,
        "high": 20.5,
        "low": 19.9,
        "close": 20.3,
        "volume": 1000000,
        "symbol": "SGOL",
        "exchange": "ARCX",
        "date": "2024-05-03T00:00:00+0000",
    }


CONFIG_ENV_VARS = [
    "MARKETSTACK__ACCESS_KEY",
    "MARKETSTACK__BASE_URL",
    "MARKETSTACK__EXCHANGE",
    "GOLDAPI__ACCESS_TOKEN",
    "GOLDAPI__BASE_URL",
    "QUOTE__SYMBOL",
    "QUOTE__SECONDARY_IDENTIFIER",
    "LOGGING__LEVEL",
    "LOGGING__FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Isolate configuration from the caller's environment and any .env file."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
