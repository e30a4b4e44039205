"""
Credential Store for the Play review relay.

This module provides a standardized interface for credential storage and retrieval.
The default implementation keeps a single authorized-user record in token.json.
"""

import os
import json
import logging
import tempfile
from abc import ABC, abstractmethod
from typing import Optional, List

from google.oauth2.credentials import Credentials

from .oauth_config import get_oauth_config
from ..utils.constants import AUTHORIZED_USER_TYPE
from ..utils.errors import PersistenceError, INCOMPLETE_CREDENTIAL, WRITE_FAILED

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Abstract base class for single-record credential storage."""

    @abstractmethod
    def load(self) -> Optional[Credentials]:
        """Load the stored credential, or None if there is none."""
        pass

    @abstractmethod
    def save(self, credentials: Credentials) -> None:
        """Persist the credential. Raises PersistenceError on failure."""
        pass


def credentials_to_record(credentials: Credentials) -> dict:
    """
    Build the persisted authorized-user record for a credential.

    Raises:
        PersistenceError: If the credential lacks a refresh token or client identity.
    """
    missing = [
        name
        for name in ("refresh_token", "client_id", "client_secret")
        if not getattr(credentials, name, None)
    ]
    if missing:
        raise PersistenceError(
            "Refusing to persist an incomplete credential",
            INCOMPLETE_CREDENTIAL,
            f"missing {', '.join(missing)}",
        )

    return {
        "type": AUTHORIZED_USER_TYPE,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "refresh_token": credentials.refresh_token,
    }


class TokenFileCredentialStore(CredentialStore):
    """Credential store backed by a single JSON file (token.json)."""

    def __init__(self, path: Optional[str] = None, scopes: Optional[List[str]] = None) -> None:
        """
        Initialize the token file store.

        Args:
            path: Token file path. If None, uses the configured token path.
            scopes: Scopes to attach to loaded credentials.
        """
        self.path = path or get_oauth_config().token_path
        self.scopes = scopes
        logger.debug(f"TokenFileCredentialStore initialized: {self.path}")

    def _ensure_dir_exists(self) -> None:
        """Ensure the token file's parent directory exists."""
        target_dir = os.path.dirname(self.path)
        if target_dir and not os.path.exists(target_dir):
            os.makedirs(target_dir, exist_ok=True)
            logger.info(f"Created credentials directory: {target_dir}")

    def load(self) -> Optional[Credentials]:
        """Load credentials from the token file. Never raises."""
        if not os.path.exists(self.path):
            logger.debug(f"No token file found at {self.path}")
            return None

        try:
            with open(self.path, "r") as f:
                record = json.load(f)
        except (IOError, ValueError) as e:
            logger.warning(f"Could not read token file {self.path}: {e}")
            return None

        if not isinstance(record, dict):
            logger.warning(f"Ignoring token file {self.path}: not a JSON object")
            return None

        record_type = record.get("type", AUTHORIZED_USER_TYPE)
        if record_type != AUTHORIZED_USER_TYPE:
            logger.warning(
                f"Ignoring token file {self.path}: unsupported type '{record_type}'"
            )
            return None

        try:
            credentials = Credentials.from_authorized_user_info(record, self.scopes)
        except (ValueError, KeyError) as e:
            logger.warning(f"Ignoring malformed token file {self.path}: {e}")
            return None

        if not credentials.refresh_token:
            logger.warning(f"Ignoring token file {self.path}: empty refresh token")
            return None

        logger.debug(f"Loaded credentials from {self.path}")
        return credentials

    def save(self, credentials: Credentials) -> None:
        """Write the authorized-user record atomically (temp file + rename)."""
        record = credentials_to_record(credentials)

        try:
            self._ensure_dir_exists()
            target_dir = os.path.dirname(self.path) or "."
            fd, temp_path = tempfile.mkstemp(dir=target_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(record, f)
                os.replace(temp_path, self.path)
            except Exception:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error storing credentials to {self.path}: {e}")
            raise PersistenceError(
                "Could not write token file", WRITE_FAILED, str(e)
            ) from e

        logger.info(f"Token stored to {self.path}")


# Global credential store instance
_credential_store: Optional[CredentialStore] = None


def get_credential_store() -> CredentialStore:
    """Get the global credential store instance."""
    global _credential_store

    if _credential_store is None:
        _credential_store = TokenFileCredentialStore()
        logger.info(f"Initialized credential store: {type(_credential_store).__name__}")

    return _credential_store


def set_credential_store(store: Optional[CredentialStore]) -> None:
    """Set the global credential store instance (None resets to the default)."""
    global _credential_store
    _credential_store = store
    if store is not None:
        logger.info(f"Set credential store: {type(store).__name__}")
