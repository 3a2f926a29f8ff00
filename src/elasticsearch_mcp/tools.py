"""Tool handlers: call Elasticsearch and shape the response into text fragments.

Every handler returns a list of ``TextContent`` and never raises. Failures are
logged and reported as a single ``Error: ...`` fragment.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from mcp.types import TextContent

from elasticsearch_mcp import es_client
from elasticsearch_mcp.config import EsConfig

log = logging.getLogger("elasticsearch-mcp")

# ValueError covers json.JSONDecodeError. InvalidURL is not an HTTPError subclass.
# The rest catch unexpected response shapes.
_HANDLED_ERRORS = (
    httpx.HTTPError,
    httpx.InvalidURL,
    es_client.EsRequestError,
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
)


def _text(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def _pretty(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _compact(data: object) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _error(action: str, exc: Exception) -> list[TextContent]:
    message = str(exc) or type(exc).__name__
    log.error("%s: %s", action, message)
    return [_text(f"Error: {message}")]


def _project(row: dict[str, Any], fields: dict[str, tuple[str, ...]]) -> dict[str, Any]:
    """Keep *fields* of a ``_cat`` row, trying each source column in order."""
    record: dict[str, Any] = {}
    for name, columns in fields.items():
        for column in columns:
            if column in row:
                record[name] = row[column]
                break
    return record


_INDEX_FIELDS = {
    "index": ("index",),
    "health": ("health",),
    "status": ("status",),
    "docsCount": ("docs.count", "docsCount"),
}

_ALIAS_FIELDS = {
    "alias": ("alias",),
    "index": ("index",),
}


# ---------------------------------------------------------------------------
# Catalog tools
# ---------------------------------------------------------------------------


async def list_indices(config: EsConfig) -> list[TextContent]:
    """List every index with its health, status and document count."""
    try:
        rows = await es_client.cat_indices(config)
        indices = [_project(row, _INDEX_FIELDS) for row in rows]
    except _HANDLED_ERRORS as exc:
        return _error("Failed to list indices", exc)
    return [_text(f"Found {len(indices)} indices"), _text(_pretty(indices))]


async def list_aliases(config: EsConfig) -> list[TextContent]:
    """List every alias and the index it points to."""
    try:
        rows = await es_client.cat_aliases(config)
        aliases = [_project(row, _ALIAS_FIELDS) for row in rows]
    except _HANDLED_ERRORS as exc:
        return _error("Failed to list aliases", exc)
    return [_text(f"Found {len(aliases)} aliases"), _text(_pretty(aliases))]


# ---------------------------------------------------------------------------
# Mapping tools
# ---------------------------------------------------------------------------


async def get_mappings_of_index(config: EsConfig, index: str) -> list[TextContent]:
    """Return the field mappings of *index*, or ``{}`` when it has none."""
    try:
        data = await es_client.get_mapping(config, index)
        mappings = (data.get(index) or {}).get("mappings") or {}
    except _HANDLED_ERRORS as exc:
        return _error("Failed to get mappings", exc)
    return [
        _text(f"Mappings for index: {index}"),
        _text(f"Mappings for index {index}: {_pretty(mappings)}"),
    ]


async def get_mappings_of_alias(config: EsConfig, alias: str) -> list[TextContent]:
    """Return the indices behind *alias* and the full mapping document."""
    try:
        data = await es_client.get_mapping(config, alias)
        indices = list(data)
    except _HANDLED_ERRORS as exc:
        return _error("Failed to get mappings", exc)
    return [
        _text(f"Mappings for alias: {alias}"),
        _text(f"Indexes for alias {alias}: {_pretty(indices)}"),
        _text(f"Mappings for alias {alias}: {_pretty(data or {})}"),
    ]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def _total_hits(hits: dict[str, Any]) -> int:
    """Read ``hits.total``, which is a bare number or a ``{"value": n}`` object."""
    total = hits.get("total")
    if isinstance(total, dict):
        return total.get("value") or 0
    return total or 0


def format_hit(hit: dict[str, Any]) -> str:
    """Render one search hit as ``field: value`` lines.

    Highlighted fields come first and replace their plain ``_source`` line.
    """
    highlight = hit.get("highlight") or {}
    source = hit.get("_source") or {}

    lines: list[str] = []
    for field, fragments in highlight.items():
        if fragments:
            joined = " ... ".join(str(fragment) for fragment in fragments)
            lines.append(f"{field} (highlighted): {joined}")
    for field, value in source.items():
        if field not in highlight:
            lines.append(f"{field}: {_compact(value)}")
    return "\n".join(lines).strip()


async def search(
    config: EsConfig, index_or_alias: str, query_body: dict[str, Any]
) -> list[TextContent]:
    """Run *query_body* against *index_or_alias* and render the hits."""
    try:
        result = await es_client.search(config, index_or_alias, query_body)
        hits = result["hits"]
        documents = hits["hits"]
        offset = query_body.get("from") or 0
        metadata = _text(
            f"Total results: {_total_hits(hits)}, "
            f"showing {len(documents)} from position {offset}"
        )
        fragments = [_text(format_hit(hit)) for hit in documents]
    except _HANDLED_ERRORS as exc:
        return _error("Search failed", exc)
    return [metadata, *fragments]
