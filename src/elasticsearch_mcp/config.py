"""Connection settings read from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlparse


class ConfigError(ValueError):
    """Raised when the environment does not describe a usable cluster."""


@dataclass(frozen=True, slots=True)
class EsConfig:
    """Immutable settings shared by every tool handler.

    ``api_key`` is kept for callers that need it but is not sent upstream.
    """

    url: str
    api_key: str = ""

    def __post_init__(self) -> None:
        if not self.url:
            raise ConfigError("Elasticsearch URL cannot be empty")
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(f"Invalid Elasticsearch URL format: {self.url!r}")


def load_config(environ: Mapping[str, str] | None = None) -> EsConfig:
    """Build an :class:`EsConfig` from ``ES_URL`` and ``ES_API_KEY``."""
    env = os.environ if environ is None else environ
    return EsConfig(
        url=env.get("ES_URL", "").strip(),
        api_key=env.get("ES_API_KEY", "").strip(),
    )
