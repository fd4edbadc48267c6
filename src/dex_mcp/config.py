"""Process configuration from environment variables."""
import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .client import DEFAULT_GRAPHQL_URL, DEFAULT_REST_URL
from .errors import ConfigurationError


@dataclass(frozen=True)
class Settings:
    api_key: str
    graphql_url: str = DEFAULT_GRAPHQL_URL
    rest_url: str = DEFAULT_REST_URL
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings; DEX_API_KEY is required."""
    env = os.environ if environ is None else environ

    api_key = env.get("DEX_API_KEY")
    if not api_key:
        raise ConfigurationError("DEX_API_KEY is not set. Export your Dex API key before starting the server.")

    return Settings(
        api_key=api_key,
        graphql_url=env.get("DEX_API_BASE_URL") or DEFAULT_GRAPHQL_URL,
        rest_url=env.get("DEX_REST_BASE_URL") or DEFAULT_REST_URL,
        log_level=(env.get("DEX_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    # stdout carries the MCP protocol (or one-shot output), so log to stderr
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )
