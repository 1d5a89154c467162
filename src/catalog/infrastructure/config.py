"""Runtime configuration.

Values come from ``CATALOG_*`` environment variables, optionally read
from a ``.env`` file in the working directory. The backend is chosen
here once; nothing below ``bootstrap`` looks at it again.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog.infrastructure.persistence.sql_product_repository import IdentifierPolicy

_DB_TYPE_ALIASES = {
    "sql": "sql",
    "mysql": "sql",
    "sqlite": "sql",
    "postgresql": "sql",
    "postgres": "sql",
    "mongodb": "mongodb",
    "mongo": "mongodb",
}


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    db_type: Literal["sql", "mongodb"] = "sql"

    # Relational store
    database_url: str = "sqlite:///./catalog.db"
    create_schema: bool = True
    identifier_policy: IdentifierPolicy = IdentifierPolicy.GENERATED

    # Document store
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "catalog"
    mongodb_collection: str = "products"
    mongodb_key_field: Literal["_id", "product_id"] = "_id"
    mongodb_server_selection_timeout_ms: int = Field(default=5000, gt=0)

    # HTTP server
    server_host: str = "0.0.0.0"
    server_port: int = Field(default=5000, gt=0, lt=65536)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("db_type", mode="before")
    @classmethod
    def _normalize_db_type(cls, value: object) -> object:
        if isinstance(value, str):
            key = value.strip().lower()
            if key not in _DB_TYPE_ALIASES:
                raise ValueError(f"unsupported DB_TYPE: {value}")
            return _DB_TYPE_ALIASES[key]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()
