"""elasticsearch-mcp-server: MCP tools for browsing and searching an Elasticsearch cluster."""

import logging
import os
import sys

from elasticsearch_mcp.config import ConfigError, load_config
from elasticsearch_mcp.server import create_server

__version__ = "0.1.0"

log = logging.getLogger("elasticsearch-mcp")


def main() -> None:
    """CLI entry point — starts the MCP server over stdio."""
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    known_level = isinstance(logging.getLevelName(level), int)
    # stdout carries the protocol, so logs go to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=level if known_level else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not known_level:
        log.warning("Unknown LOG_LEVEL %r, using INFO", level)

    try:
        config = load_config()
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        sys.exit(1)

    try:
        create_server(config).run(transport="stdio")
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down.")
    except Exception as exc:
        log.error("Server error: %s", exc)
        sys.exit(1)
