"""
Shared server configuration for the Play review relay.

This module centralizes configuration values for the HTTP front end and the
upstream API call.
"""

import os
from typing import Optional

from ..utils.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PUBLIC_DIR,
    DEFAULT_UPSTREAM_TIMEOUT,
)


class ServerConfig:
    """HTTP front end and upstream call settings, read from the environment."""

    def __init__(self) -> None:
        self.host = os.getenv("REVIEWS_HOST", DEFAULT_HOST)
        self.port = int(os.getenv("REVIEWS_PORT", str(DEFAULT_PORT)))
        self.public_dir = os.path.abspath(
            os.getenv("REVIEWS_PUBLIC_DIR", DEFAULT_PUBLIC_DIR)
        )
        self.upstream_timeout = float(
            os.getenv("REVIEWS_UPSTREAM_TIMEOUT", str(DEFAULT_UPSTREAM_TIMEOUT))
        )
        self.log_level = os.getenv("REVIEWS_LOG_LEVEL", "INFO").upper()

    @property
    def base_url(self) -> str:
        host = "localhost" if self.host in ("0.0.0.0", "") else self.host
        return f"http://{host}:{self.port}"


# Global configuration instance
_server_config: Optional[ServerConfig] = None


def get_server_config() -> ServerConfig:
    """Get the global server configuration instance."""
    global _server_config
    if _server_config is None:
        _server_config = ServerConfig()
    return _server_config


def reload_server_config() -> ServerConfig:
    """Reload the server configuration from environment variables."""
    global _server_config
    _server_config = ServerConfig()
    return _server_config
