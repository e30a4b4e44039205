"""HTTP server for the Play review relay."""

import logging

import uvicorn
from dotenv import load_dotenv

from .main import create_app
from ..core.config import reload_server_config
from ..auth.oauth_config import reload_oauth_config

__all__ = ["create_app", "main"]

logger = logging.getLogger(__name__)


def main():
    """Entry point for the Play review relay server."""
    load_dotenv()
    config = reload_server_config()
    reload_oauth_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app()
    logger.info(f"Server is running on {config.base_url}")
    uvicorn.run(app, host=config.host, port=config.port, log_level="warning")
