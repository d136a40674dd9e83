"""Process entrypoint: `gamers-api` (or `python -m src.main`)."""

import logging

import uvicorn

from src.api.app import create_app
from src.core.config import get_api_config

logger = logging.getLogger(__name__)


def run() -> None:
    config = get_api_config()
    app = create_app(config)
    logger.info("The server is running on port %d", config.port)
    # access lines come from the app's own middleware
    uvicorn.run(app, host=config.host, port=config.port, access_log=False)


if __name__ == "__main__":
    run()
