"""
Builds the FastAPI application: CORS, access logging, error handlers, the gamers router and the docs page.
"""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.api.dependencies import attach_store
from src.api.error_handlers import register_error_handlers
from src.api.routers.gamers import router as gamers_router
from src.core.config import ApiConfig, get_api_config
from src.core.logging import configure_logging
from src.db.repository import GamerRepository

access_logger = logging.getLogger("src.api.access")


def create_app(
    config: ApiConfig | None = None, repository: GamerRepository | None = None
) -> FastAPI:
    """Create configured FastAPI application instance. A given repository replaces the configured store."""

    config = config or get_api_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.api_name,
        description=config.description,
        version=config.app_version,
        docs_url=config.docs_path,
        openapi_url=f"{config.docs_path}/openapi.json",
        redoc_url=None,
        servers=[{"url": config.server_url}],
        openapi_tags=[{"name": "Gamers", "description": "The Gamers managing API"}],
    )
    app.state.config = config
    attach_store(app, config, repository)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000.0
        access_logger.info(
            "%s %s %d %.3f ms - %s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            response.headers.get("content-length", "-"),
        )
        return response

    register_error_handlers(app)
    app.include_router(gamers_router, prefix=config.path_prefix)

    return app
