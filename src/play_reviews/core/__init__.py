"""
Core utilities package for the Play review relay.

This package provides shared server configuration.
"""

from .config import (
    ServerConfig,
    get_server_config,
    reload_server_config,
)

__all__ = [
    "ServerConfig",
    "get_server_config",
    "reload_server_config",
]
