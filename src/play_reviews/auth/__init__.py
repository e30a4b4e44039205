"""
OAuth Authentication Package for the Play review relay.

This package provides the credential lifecycle for a single operator:
- Pluggable credential store (token.json by default, atomic writes)
- Interactive browser consent on first run
- Reuse of the persisted refresh token across restarts
"""

from .scopes import SCOPES, ANDROID_PUBLISHER_SCOPE, get_scopes
from .credential_store import (
    CredentialStore,
    TokenFileCredentialStore,
    get_credential_store,
    set_credential_store,
)
from .google_auth import (
    CredentialManager,
    ConsentProvider,
    InstalledAppConsentProvider,
    get_credential_manager,
    check_client_secrets,
    load_client_secrets,
)

__all__ = [
    # Scopes
    "SCOPES",
    "ANDROID_PUBLISHER_SCOPE",
    "get_scopes",
    # Credential Store
    "CredentialStore",
    "TokenFileCredentialStore",
    "get_credential_store",
    "set_credential_store",
    # Credential lifecycle
    "CredentialManager",
    "ConsentProvider",
    "InstalledAppConsentProvider",
    "get_credential_manager",
    "check_client_secrets",
    "load_client_secrets",
]
