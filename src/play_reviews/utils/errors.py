"""Custom exceptions for the Play review relay.

This module provides structured error handling with specific exception types
for each stage of a review request. All exceptions inherit from ReviewsError.
"""
from typing import Optional, Any

# Failure causes
CONSENT_FAILED = "consent-failed"
MISSING_CLIENT_CONFIG = "missing-client-config"
INCOMPLETE_CREDENTIAL = "incomplete-credential"
WRITE_FAILED = "write-failed"
MISSING_PACKAGE_NAME = "missing-package-name"
UPSTREAM_ERROR = "upstream-error"


class ReviewsError(Exception):
    """Base exception for all play-reviews errors.

    Attributes:
        message: Human-readable error description.
        cause: Short machine-readable failure cause.
        detail: Optional opaque detail for operators.
    """

    def __init__(
        self, message: str, cause: Optional[str] = None, detail: Optional[str] = None
    ) -> None:
        self.message = message
        self.cause = cause
        self.detail = detail
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the error message, optionally including cause and detail."""
        text = self.message
        if self.cause:
            text = f"{text} [{self.cause}]"
        if self.detail:
            text = f"{text}: {self.detail}"
        return text


class AuthorizationError(ReviewsError):
    """Raised when the consent flow could not produce a credential."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message, CONSENT_FAILED, detail)


class PersistenceError(ReviewsError):
    """Raised when a credential could not be durably cached."""
    pass


class FetchError(ReviewsError):
    """Raised when the review listing call fails after authorization."""
    pass


class ConfigError(ReviewsError):
    """Raised when the OAuth client registration is missing or unreadable."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message, MISSING_CLIENT_CONFIG, detail)


def handle_http_error(error: Any, package_name: Optional[str] = None) -> FetchError:
    """Convert googleapiclient HttpError to a FetchError.

    Args:
        error: The HttpError from googleapiclient.
        package_name: Optional package name for context.

    Returns:
        A FetchError whose detail describes the upstream status.
    """
    context = f" (package: {package_name})" if package_name else ""
    try:
        status = error.resp.status
    except AttributeError:
        return FetchError(
            "Review listing failed", UPSTREAM_ERROR, f"API error: {error}{context}"
        )

    if status == 401:
        detail = "Authentication failed. Delete token.json and authorize again."
    elif status == 403:
        detail = "Access denied. Check the account has access to this app in Play Console."
    elif status == 404:
        detail = "Package not found. Check the package name."
    elif status == 429:
        detail = "API quota exceeded. Please wait a moment and try again."
    else:
        detail = f"API error (HTTP {status}): {error}"
    return FetchError("Review listing failed", UPSTREAM_ERROR, f"{detail}{context}")


def format_error(action: str, error: Exception) -> str:
    """Format an error message consistently.

    Args:
        action: The action that failed (e.g., "Authorize", "Fetch reviews").
        error: The exception that occurred.

    Returns:
        Formatted error string.
    """
    if isinstance(error, ReviewsError):
        return f"{action} failed: {error.format_message()}"
    return f"{action} failed: {str(error)}"
