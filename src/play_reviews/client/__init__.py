"""Google Play Developer API client."""
from .base import build_publisher_service
from .reviews import AuthorizedRequestGateway

__all__ = ['AuthorizedRequestGateway', 'build_publisher_service']
