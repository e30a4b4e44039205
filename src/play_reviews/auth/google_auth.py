"""
Core Google OAuth Logic for the Play review relay.

This module owns the credential lifecycle: reuse of the persisted token,
the interactive consent flow on a cache miss, and persistence of new grants.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, Any, List, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.transport.requests import Request
from google.auth.exceptions import RefreshError, TransportError

from .scopes import get_scopes
from .credential_store import CredentialStore, get_credential_store
from .oauth_config import OAuthConfig, get_oauth_config
from ..utils.constants import DEFAULT_TOKEN_URI
from ..utils.errors import (
    AuthorizationError,
    ConfigError,
    PersistenceError,
    MISSING_CLIENT_CONFIG,
)

logger = logging.getLogger(__name__)


def load_client_secrets_from_env() -> Optional[Dict[str, Any]]:
    """
    Load client secrets from environment variables.

    Returns:
        Client secrets configuration dict or None if not set.
    """
    client_id = os.getenv("GOOGLE_OAUTH_CLIENT_ID")
    client_secret = os.getenv("GOOGLE_OAUTH_CLIENT_SECRET")

    if client_id and client_secret:
        config = {
            "installed": {
                "client_id": client_id,
                "client_secret": client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": DEFAULT_TOKEN_URI,
                "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
                "redirect_uris": ["http://localhost"],
            }
        }
        logger.debug("Loaded OAuth credentials from environment variables")
        return config

    return None


def load_client_secrets(client_secrets_path: str) -> Dict[str, Any]:
    """
    Load the client registration from environment variables or file.

    Args:
        client_secrets_path: Path to client secrets JSON file (fallback)

    Returns:
        Client configuration dict with a single "installed" or "web" section

    Raises:
        ConfigError: If no registration is available or the file is invalid
    """
    env_config = load_client_secrets_from_env()
    if env_config:
        return env_config

    try:
        with open(client_secrets_path, "r") as f:
            client_config = json.load(f)
    except (IOError, ValueError) as e:
        logger.error(f"Error loading client secrets from {client_secrets_path}: {e}")
        raise ConfigError("OAuth client registration unavailable", str(e)) from e

    if not isinstance(client_config, dict):
        raise ConfigError("Invalid client secrets file format", client_secrets_path)

    for client_type in ("installed", "web"):
        key = client_config.get(client_type)
        if isinstance(key, dict):
            if not key.get("client_id") or not key.get("client_secret"):
                raise ConfigError(
                    "Client secrets file lacks client_id or client_secret",
                    client_secrets_path,
                )
            logger.debug(f"Loaded OAuth credentials from {client_secrets_path}")
            return {client_type: key}

    raise ConfigError("Invalid client secrets file format", client_secrets_path)


def get_client_key(client_config: Dict[str, Any]) -> Dict[str, Any]:
    """Return the "installed" or "web" section of a client configuration."""
    return client_config.get("installed") or client_config["web"]


def check_client_secrets() -> Optional[str]:
    """
    Check if OAuth client secrets are available.

    Returns:
        Error message if secrets not found, None otherwise.
    """
    config = get_oauth_config()

    if config.is_configured():
        return None

    return (
        f"OAuth client credentials not found. Please either:\n"
        f"1. Set GOOGLE_OAUTH_CLIENT_ID and GOOGLE_OAUTH_CLIENT_SECRET environment variables\n"
        f"2. Place credentials.json at {config.client_secrets_path}"
    )


class ConsentProvider(ABC):
    """Interactive step in which the operator grants the requested scopes."""

    @abstractmethod
    def authorize(
        self, scopes: List[str], client_config: Dict[str, Any], timeout: Optional[float]
    ) -> Credentials:
        """Block until the operator grants access, then return the credential."""
        pass


class InstalledAppConsentProvider(ConsentProvider):
    """Browser-based consent using a loopback redirect on a local port."""

    def __init__(self, port: int = 0, open_browser: bool = True) -> None:
        self.port = port
        self.open_browser = open_browser

    def authorize(
        self, scopes: List[str], client_config: Dict[str, Any], timeout: Optional[float]
    ) -> Credentials:
        flow = InstalledAppFlow.from_client_config(client_config, scopes)
        # offline + consent so Google always issues a refresh token
        return flow.run_local_server(
            port=self.port,
            open_browser=self.open_browser,
            timeout_seconds=timeout,
            access_type="offline",
            prompt="consent",
        )


class CredentialManager:
    """
    Produces a usable credential for every request, minimizing interactive consent.

    A cached credential is returned without validation unless proactive refresh
    is enabled; google-auth refreshes the access token on first use.
    """

    def __init__(
        self,
        store: Optional[CredentialStore] = None,
        consent_provider: Optional[ConsentProvider] = None,
        scopes: Optional[List[str]] = None,
        config: Optional[OAuthConfig] = None,
    ) -> None:
        self.config = config or get_oauth_config()
        self.store = store or get_credential_store()
        self.consent_provider = consent_provider or InstalledAppConsentProvider()
        self.scopes = scopes or get_scopes()
        self._lock = RLock()

    def acquire(self) -> Credentials:
        """
        Return the cached credential, or run the consent flow on a cache miss.

        Calls are serialized. While one call waits on the browser consent flow
        (up to the consent timeout), every other request in the process blocks
        here too, including requests that later fail for other reasons.

        Raises:
            ConfigError: If the client registration is needed but unavailable
            AuthorizationError: If the consent flow fails
        """
        with self._lock:
            credentials = self.load_persisted()
            if credentials is not None and self.config.proactive_refresh:
                credentials = self._refresh_if_stale(credentials)

            if credentials is not None:
                logger.debug("Using cached credentials")
                return credentials

            credentials = self._run_consent()

            if not credentials.refresh_token:
                logger.warning("Consent returned no refresh token; credential not cached")
                return credentials

            try:
                self.save(credentials)
            except PersistenceError as e:
                logger.warning(f"Credential obtained but not cached: {e}")

            return credentials

    def load_persisted(self) -> Optional[Credentials]:
        """Read the persisted credential. A failed read is a cache miss."""
        try:
            return self.store.load()
        except Exception as e:
            logger.warning(f"Failed to load persisted credentials: {e}")
            return None

    def save(self, credentials: Credentials) -> None:
        """
        Persist a credential together with the client identity that issued it.

        Raises:
            PersistenceError: If the client registration is unavailable or the
                store cannot write the record
        """
        try:
            key = get_client_key(load_client_secrets(self.config.client_secrets_path))
            client_id = key["client_id"]
            client_secret = key["client_secret"]
        except (ConfigError, KeyError) as e:
            raise PersistenceError(
                "Cannot persist credentials without client registration",
                MISSING_CLIENT_CONFIG,
                str(e),
            ) from e

        self.store.save(
            Credentials(
                token=credentials.token,
                refresh_token=credentials.refresh_token,
                token_uri=getattr(credentials, "token_uri", None) or DEFAULT_TOKEN_URI,
                client_id=client_id,
                client_secret=client_secret,
                scopes=self.scopes,
                expiry=credentials.expiry,
            )
        )

    def _refresh_if_stale(self, credentials: Credentials) -> Optional[Credentials]:
        if credentials.valid:
            return credentials

        logger.info("Cached credentials stale, attempting refresh")
        try:
            credentials.refresh(Request())
        except (RefreshError, TransportError) as e:
            logger.warning(f"Token refresh failed, falling back to consent: {e}")
            return None

        logger.info("Credentials refreshed successfully")
        return credentials

    def _run_consent(self) -> Credentials:
        client_config = load_client_secrets(self.config.client_secrets_path)

        logger.info("No cached credentials, starting interactive consent flow")
        try:
            credentials = self.consent_provider.authorize(
                self.scopes, client_config, self.config.consent_timeout
            )
        except AuthorizationError:
            raise
        except Exception as e:
            logger.error(f"Interactive consent failed: {e}", exc_info=True)
            raise AuthorizationError("Interactive consent failed", str(e)) from e

        if credentials is None:
            raise AuthorizationError("Interactive consent returned no credential")

        logger.info("Interactive consent completed")
        return credentials


# Global credential manager instance
_credential_manager: Optional[CredentialManager] = None


def get_credential_manager() -> CredentialManager:
    """Get the global credential manager instance."""
    global _credential_manager
    if _credential_manager is None:
        _credential_manager = CredentialManager()
    return _credential_manager
