"""
Google OAuth Scopes for the Play review relay.

This module defines the OAuth scopes required for Google Play Developer API access.
"""

from typing import List

# Google Play Developer API scope
ANDROID_PUBLISHER_SCOPE = "https://www.googleapis.com/auth/androidpublisher"

# Combined scopes for the review relay
SCOPES = [ANDROID_PUBLISHER_SCOPE]


def get_scopes() -> List[str]:
    """
    Get the list of OAuth scopes required for review access.

    Returns:
        List of unique OAuth scopes.
    """
    return list(dict.fromkeys(SCOPES))
