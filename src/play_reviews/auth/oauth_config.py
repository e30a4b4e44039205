"""
OAuth Configuration Management for the Play review relay.

This module centralizes OAuth-related configuration to eliminate hardcoded values.
"""

import os
from typing import Optional

from ..utils.constants import (
    DEFAULT_TOKEN_FILE,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_CONSENT_TIMEOUT,
)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class OAuthConfig:
    """
    Centralized OAuth configuration management.

    Provides a single source of truth for all OAuth-related configuration values.
    Both files default to the process working directory.
    """

    def __init__(self) -> None:
        # Persisted credential (token.json)
        self.token_path = os.path.abspath(
            os.path.expanduser(
                os.getenv("REVIEWS_TOKEN_PATH", os.path.join(os.getcwd(), DEFAULT_TOKEN_FILE))
            )
        )

        # Pre-provisioned client registration (credentials.json)
        self.client_secrets_path = os.path.abspath(
            os.path.expanduser(
                os.getenv(
                    "REVIEWS_CREDENTIALS_PATH",
                    os.path.join(os.getcwd(), DEFAULT_CREDENTIALS_FILE),
                )
            )
        )

        # OAuth client configuration from environment (overrides the file)
        self.client_id = os.getenv("GOOGLE_OAUTH_CLIENT_ID")
        self.client_secret = os.getenv("GOOGLE_OAUTH_CLIENT_SECRET")

        # Upper bound on the interactive browser flow, in seconds
        self.consent_timeout = int(
            os.getenv("REVIEWS_CONSENT_TIMEOUT", str(DEFAULT_CONSENT_TIMEOUT))
        )

        # Refresh stale cached credentials before handing them out
        self.proactive_refresh = _env_flag("REVIEWS_PROACTIVE_REFRESH")

    def is_configured(self) -> bool:
        """Check if OAuth is properly configured."""
        if self.client_id and self.client_secret:
            return True
        return os.path.exists(self.client_secrets_path)


# Global configuration instance
_oauth_config: Optional[OAuthConfig] = None


def get_oauth_config() -> OAuthConfig:
    """Get the global OAuth configuration instance."""
    global _oauth_config
    if _oauth_config is None:
        _oauth_config = OAuthConfig()
    return _oauth_config


def reload_oauth_config() -> OAuthConfig:
    """Reload the OAuth configuration from environment variables."""
    global _oauth_config
    _oauth_config = OAuthConfig()
    return _oauth_config
