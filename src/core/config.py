"""
Runtime settings, read from the environment (and a local `.env` file).

Defaults are enough to run the service locally: JSON store in `db.json`, port 4000.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.shared_types import StoreBackend


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Gamers API"
    app_version: str = "1.0.0"
    description: str = "A simple gamers ranking"
    host: str = "0.0.0.0"
    port: int = 4000
    path_prefix: str = "/gamers"
    docs_path: str = "/api-docs"
    store_backend: StoreBackend = StoreBackend.JSON
    db_file: str = "db.json"
    collection_name: str = "gamers"
    database_url: str = "sqlite:///gamers.db"
    log_level: str = "INFO"
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"Port must be between 1 and 65535, got {value}.")
        return value

    @field_validator("path_prefix", "docs_path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Path must start with '/': {value!r}")
        value = value.rstrip("/")
        if not value:
            raise ValueError("Path cannot be the root path.")
        return value

    @field_validator("collection_name")
    @classmethod
    def validate_collection_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Collection name cannot be empty.")
        return value.strip()

    @property
    def server_url(self) -> str:
        return f"http://localhost:{self.port}"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    defaults = ApiConfig()
    return ApiConfig.model_validate(
        {
            "api_name": os.getenv("API_NAME", defaults.api_name),
            "app_version": os.getenv("APP_VERSION", defaults.app_version),
            "description": os.getenv("API_DESCRIPTION", defaults.description),
            "host": os.getenv("HOST", defaults.host),
            "port": _env_int("PORT", defaults.port),
            "path_prefix": os.getenv("GAMERS_PATH_PREFIX", defaults.path_prefix),
            "docs_path": os.getenv("API_DOCS_PATH", defaults.docs_path),
            "store_backend": os.getenv("STORE_BACKEND", defaults.store_backend).lower(),
            "db_file": os.getenv("DB_FILE", defaults.db_file),
            "collection_name": os.getenv("DB_COLLECTION", defaults.collection_name),
            "database_url": os.getenv("DATABASE_URL", defaults.database_url),
            "log_level": os.getenv("LOG_LEVEL", defaults.log_level),
            "allowed_origins": _env_list("CORS_ALLOWED_ORIGINS", defaults.allowed_origins),
        }
    )


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
