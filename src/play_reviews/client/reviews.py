"""Review listing against the Google Play Developer API."""
import logging
from typing import Any, Callable, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.errors import HttpError

from .base import build_publisher_service
from ..utils.constants import TRANSLATION_LANGUAGE
from ..utils.errors import (
    FetchError,
    handle_http_error,
    MISSING_PACKAGE_NAME,
    UPSTREAM_ERROR,
)

logger = logging.getLogger(__name__)


class AuthorizedRequestGateway:
    """Performs one authorized review listing call and classifies the outcome.

    The credential is passed in per call; no service object is shared between
    requests.
    """

    def __init__(
        self,
        service_factory: Callable[..., Any] = build_publisher_service,
        timeout: Optional[float] = None,
    ) -> None:
        self.service_factory = service_factory
        self.timeout = timeout

    def fetch(self, package_name: Optional[str], credentials: Credentials) -> list[dict[str, Any]]:
        """List reviews for an app.

        Args:
            package_name: Application package name, e.g. "com.example.app".
            credentials: Credential authorizing the call.

        Returns:
            The review records exactly as returned by the API.

        Raises:
            FetchError: If the package name is missing or the upstream call fails.
        """
        if not package_name:
            raise FetchError("Package name is missing in the request", MISSING_PACKAGE_NAME)

        try:
            service = self.service_factory(credentials, timeout=self.timeout)
            response = service.reviews().list(
                packageName=package_name,
                translationLanguage=TRANSLATION_LANGUAGE,
            ).execute()
        except HttpError as e:
            logger.error(f"HttpError fetching reviews for {package_name}: {e}")
            raise handle_http_error(e, package_name) from e
        except Exception as e:
            logger.error(f"Error fetching reviews for {package_name}: {e}")
            raise FetchError("Review listing failed", UPSTREAM_ERROR, str(e)) from e

        if not isinstance(response, dict):
            raise FetchError(
                "Review listing failed",
                UPSTREAM_ERROR,
                f"Unexpected response type: {type(response).__name__}",
            )

        reviews = response.get("reviews", [])
        if not isinstance(reviews, list):
            raise FetchError(
                "Review listing failed", UPSTREAM_ERROR, "Malformed 'reviews' field"
            )

        logger.info(f"Fetched {len(reviews)} reviews for {package_name}")
        logger.debug(f"Reviews from API: {reviews}")
        return reviews
