"""
Dependency factories for FastAPI routes.

The store is attached to `app.state` once at startup and handed to the service per request,
so routes never reach for a module-level store and tests can pass their own repository.
"""

from typing import Annotated, Generator

from fastapi import Depends, FastAPI, Request

from src.core.config import ApiConfig
from src.core.shared_types import StoreBackend
from src.db.database import build_session_factory
from src.db.json_repository import JsonFileGamerRepository
from src.db.repository import GamerRepository
from src.db.sql_repository import SQLGamerRepository
from src.services.gamer_service import GamerService


def attach_store(
    app: FastAPI, config: ApiConfig, repository: GamerRepository | None = None
) -> None:
    """Initialize the configured store and keep a handle on the app state."""
    app.state.repository = None
    app.state.session_factory = None

    if repository is None and config.store_backend == StoreBackend.SQL:
        session_factory = build_session_factory(config.database_url)
        with session_factory() as db:
            SQLGamerRepository(db).initialize()
        app.state.session_factory = session_factory
        return

    if repository is None:
        repository = JsonFileGamerRepository(config.db_file, config.collection_name)
    repository.initialize()
    app.state.repository = repository


def get_repository(request: Request) -> Generator[GamerRepository, None, None]:
    """Shared repository, or one SQL session per request."""
    repository = request.app.state.repository
    if repository is not None:
        yield repository
        return

    db = request.app.state.session_factory()
    try:
        yield SQLGamerRepository(db)
    finally:
        db.close()


def get_gamer_service(
    repository: Annotated[GamerRepository, Depends(get_repository)],
) -> GamerService:
    return GamerService(repository)
