"""Async Elasticsearch REST client using httpx.

One coroutine per endpoint the tools need. Every call opens its own
short-lived AsyncClient; there is no pooling, retry or timeout.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from elasticsearch_mcp.config import EsConfig

log = logging.getLogger("elasticsearch-mcp")


class EsRequestError(RuntimeError):
    """Elasticsearch answered with a non-success status."""


def _make_client(config: EsConfig) -> httpx.AsyncClient:
    """Create an AsyncClient bound to the cluster URL (caller manages lifecycle)."""
    # TODO: attach config.api_key once the expected auth header scheme is settled.
    return httpx.AsyncClient(base_url=config.url, timeout=None)


def _check(resp: httpx.Response, what: str, *, with_body: bool = False) -> None:
    if resp.is_success:
        return
    message = f"Failed to {what}: {resp.reason_phrase}"
    if with_body:
        message += f" response: {resp.text}"
    raise EsRequestError(message)


async def cat_indices(config: EsConfig) -> list[dict[str, Any]]:
    """Return the rows of ``GET /_cat/indices?format=json``."""
    async with _make_client(config) as client:
        resp = await client.get("/_cat/indices", params={"format": "json"})
        _check(resp, "fetch indices")
        return resp.json()


async def cat_aliases(config: EsConfig) -> list[dict[str, Any]]:
    """Return the rows of ``GET /_cat/aliases?format=json``."""
    async with _make_client(config) as client:
        resp = await client.get("/_cat/aliases", params={"format": "json"})
        _check(resp, "fetch aliases")
        return resp.json()


async def get_mapping(config: EsConfig, target: str) -> dict[str, Any]:
    """Fetch ``GET /{target}/_mapping``.

    *target* may be an index or an alias; the cluster resolves aliases and
    keys the response by concrete index name.
    """
    async with _make_client(config) as client:
        resp = await client.get(f"/{target}/_mapping")
        _check(resp, "fetch mappings")
        return resp.json()


async def search(config: EsConfig, target: str, body: dict[str, Any]) -> dict[str, Any]:
    """POST *body* unchanged to ``/{target}/_search`` and return the response."""
    log.debug("Searching %s", target)
    async with _make_client(config) as client:
        resp = await client.post(f"/{target}/_search", json=body)
        _check(resp, "search", with_body=True)
        return resp.json()
