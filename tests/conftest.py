"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.api.app import create_app
from src.core.config import ApiConfig
from src.db.json_repository import JsonFileGamerRepository
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    """Location of the backing file. Does not exist until a repository initializes it."""
    return tmp_path / "db.json"


@pytest.fixture
def json_repo(db_file: Path) -> JsonFileGamerRepository:
    """Initialized JSON store on an empty temporary file."""
    repo = JsonFileGamerRepository(db_file)
    repo.initialize()
    return repo


@pytest.fixture
def test_config(db_file: Path) -> ApiConfig:
    return ApiConfig(db_file=str(db_file), port=4000)


@pytest.fixture
def client(test_config: ApiConfig) -> Generator[TestClient, None, None]:
    """API client on top of a fresh JSON store."""
    app = create_app(test_config)
    with TestClient(app) as test_client:
        yield test_client
