"""Play Reviews - Google Play review relay package.

This package serves an app's Google Play reviews over HTTP, reusing a single
operator's OAuth credential across requests and restarts.
"""
from .auth import CredentialManager
from .client import AuthorizedRequestGateway

__version__ = "0.1.0"
__all__ = ["CredentialManager", "AuthorizedRequestGateway"]
