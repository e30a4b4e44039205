"""HTTP front end: the review route and static file serving."""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ..auth.google_auth import CredentialManager
from ..client.reviews import AuthorizedRequestGateway
from ..core.config import get_server_config
from ..utils.constants import REVIEWS_ERROR_MESSAGE
from ..utils.errors import format_error

logger = logging.getLogger(__name__)


def create_app(
    manager: Optional[CredentialManager] = None,
    gateway: Optional[AuthorizedRequestGateway] = None,
    public_dir: Optional[str] = None,
) -> FastAPI:
    """Create the review relay application.

    Args:
        manager: Credential manager; a default one is created if omitted.
        gateway: Review gateway; a default one is created if omitted.
        public_dir: Directory served at "/"; defaults to the configured one.

    Returns:
        The configured FastAPI application.
    """
    config = get_server_config()
    app = FastAPI(title="Play Reviews")
    app.state.manager = manager or CredentialManager()
    app.state.gateway = gateway or AuthorizedRequestGateway(timeout=config.upstream_timeout)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Sync handler: runs in the threadpool since auth and API calls block
    @app.get("/reviews")
    def get_reviews(package_name: Optional[str] = Query(None, alias="packageName")):
        """Return the app's reviews, or a generic error on any failure."""
        try:
            credentials = app.state.manager.acquire()
            reviews = app.state.gateway.fetch(package_name, credentials)
        except Exception as e:
            logger.error(format_error("Fetch reviews", e), exc_info=True)
            return JSONResponse(status_code=500, content={"error": REVIEWS_ERROR_MESSAGE})
        return reviews

    static_dir = public_dir or config.public_dir
    if os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="public")
    else:
        logger.warning(f"Static directory not found, not serving files: {static_dir}")

    return app
