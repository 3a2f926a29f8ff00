"""Shared pytest fixtures for the elasticsearch-mcp-server test suite."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from elasticsearch_mcp import es_client
from elasticsearch_mcp.config import EsConfig


@pytest.fixture
def config() -> EsConfig:
    return EsConfig(url="http://localhost:9200", api_key="secret")


@pytest.fixture
def mock_es(monkeypatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """Route every upstream call through an ``httpx.MockTransport``.

    Call the fixture with a request handler; it returns the list that
    collects each request the handler sees.
    """

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def fake_make_client(cfg: EsConfig) -> httpx.AsyncClient:
            return httpx.AsyncClient(base_url=cfg.url, transport=httpx.MockTransport(recording))

        monkeypatch.setattr(es_client, "_make_client", fake_make_client)
        return seen

    return install
