"""MCP Server definition — registers the Elasticsearch tools via FastMCP."""

import json
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import AfterValidator, Field, StringConstraints

from elasticsearch_mcp import tools
from elasticsearch_mcp.config import EsConfig

SERVER_NAME = "elasticsearch-mcp-server"


def _json_round_trip(value: dict[str, Any]) -> dict[str, Any]:
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as exc:
        raise ValueError("queryBody must be a valid Elasticsearch query DSL object") from exc


IndexName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
    Field(description="Name of the Elasticsearch index to get mappings for"),
]
AliasName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
    Field(description="Name of the Elasticsearch alias to get mappings for"),
]
SearchTarget = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
    Field(description="Name of the Elasticsearch index or alias to search"),
]
QueryBody = Annotated[
    dict[str, Any],
    AfterValidator(_json_round_trip),
    Field(
        description=(
            "Complete Elasticsearch query DSL object that can include "
            "query, size, from, sort, etc."
        )
    ),
]


def create_server(config: EsConfig) -> FastMCP:
    """Build a FastMCP server whose tools all talk to the cluster in *config*."""
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Read-only access to an Elasticsearch cluster: list indices and aliases, "
            "inspect field mappings and run query DSL searches."
        ),
    )

    @mcp.tool(name="list_indices", description="List all available Elasticsearch indices")
    async def list_indices() -> list[TextContent]:
        return await tools.list_indices(config)

    @mcp.tool(name="list_aliases", description="List all available Elasticsearch aliases")
    async def list_aliases() -> list[TextContent]:
        return await tools.list_aliases(config)

    @mcp.tool(
        name="get_mappings_of_index",
        description="Get field mappings for a specific Elasticsearch index",
    )
    async def get_mappings_of_index(index: IndexName) -> list[TextContent]:
        return await tools.get_mappings_of_index(config, index)

    @mcp.tool(
        name="get_mappings_of_alias",
        description="Get field mappings for a specific Elasticsearch alias",
    )
    async def get_mappings_of_alias(alias: AliasName) -> list[TextContent]:
        return await tools.get_mappings_of_alias(config, alias)

    @mcp.tool(
        name="search",
        description="Perform an Elasticsearch search with the provided query DSL.",
    )
    async def search(
        index_or_alias: SearchTarget,
        queryBody: QueryBody,  # noqa: N803
    ) -> list[TextContent]:
        return await tools.search(config, index_or_alias, queryBody)

    return mcp
