"""Google API service construction for a caller-supplied credential."""
import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from typing import Any, Optional

from ..core.config import get_server_config
from ..utils.constants import ANDROID_PUBLISHER_API, ANDROID_PUBLISHER_VERSION


def build_publisher_service(credentials: Credentials, timeout: Optional[float] = None) -> Any:
    """Build an androidpublisher service bound to the given credential.

    Args:
        credentials: The credential to authorize requests with.
        timeout: Socket timeout in seconds; defaults to the configured upstream timeout.

    Returns:
        The discovery-based androidpublisher resource.
    """
    if timeout is None:
        timeout = get_server_config().upstream_timeout
    http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout))
    return build(
        ANDROID_PUBLISHER_API,
        ANDROID_PUBLISHER_VERSION,
        http=http,
        cache_discovery=False,
    )
