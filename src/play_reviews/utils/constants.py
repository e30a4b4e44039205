"""Centralized constants for the Play review relay."""

# Persisted credential record
AUTHORIZED_USER_TYPE = 'authorized_user'
DEFAULT_TOKEN_URI = 'https://oauth2.googleapis.com/token'

# Upstream API
ANDROID_PUBLISHER_API = 'androidpublisher'
ANDROID_PUBLISHER_VERSION = 'v3'
TRANSLATION_LANGUAGE = 'en'

# Default Values
DEFAULT_PORT = 5501
DEFAULT_HOST = '0.0.0.0'
DEFAULT_PUBLIC_DIR = 'public'
DEFAULT_TOKEN_FILE = 'token.json'
DEFAULT_CREDENTIALS_FILE = 'credentials.json'
DEFAULT_CONSENT_TIMEOUT = 300
DEFAULT_UPSTREAM_TIMEOUT = 30

# HTTP boundary
REVIEWS_ERROR_MESSAGE = 'Failed to fetch reviews'
