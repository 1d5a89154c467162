"""Tests for environment-driven settings and the backend factory."""

import mongomock
import pytest
from pydantic import ValidationError as SettingsError

from catalog.infrastructure import bootstrap
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    IdentifierPolicy,
    SqlProductRepository,
)


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("CATALOG_DB_TYPE", "CATALOG_DATABASE_URL", "CATALOG_SERVER_PORT"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.db_type == "sql"
        assert s.server_port == 5000
        assert s.identifier_policy is IdentifierPolicy.GENERATED

    @pytest.mark.parametrize("raw,expected", [("mysql", "sql"), ("MongoDB", "mongodb"), ("sqlite", "sql")])
    def test_db_type_aliases(self, monkeypatch, raw, expected):
        monkeypatch.setenv("CATALOG_DB_TYPE", raw)
        assert Settings(_env_file=None).db_type == expected

    def test_unsupported_db_type_rejected(self, monkeypatch):
        monkeypatch.setenv("CATALOG_DB_TYPE", "oracle")
        with pytest.raises(SettingsError, match="unsupported DB_TYPE"):
            Settings(_env_file=None)

    def test_env_file_is_read(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CATALOG_MONGODB_DATABASE", raising=False)
        env = tmp_path / ".env"
        env.write_text("CATALOG_MONGODB_DATABASE=shop\nCATALOG_LOG_LEVEL=debug\n")
        s = Settings(_env_file=env)
        assert s.mongodb_database == "shop"
        assert s.log_level == "DEBUG"

    def test_invalid_port_rejected(self, monkeypatch):
        monkeypatch.setenv("CATALOG_SERVER_PORT", "0")
        with pytest.raises(SettingsError):
            Settings(_env_file=None)


class TestBootstrap:

    def test_sql_backend(self, sqlite_url):
        repo = bootstrap.product_repository(
            Settings(_env_file=None, db_type="sql", database_url=sqlite_url)
        )
        with repo:
            assert isinstance(repo, SqlProductRepository)
            assert repo.list_all() == []

    def test_mongodb_backend(self, monkeypatch):
        monkeypatch.setattr(
            "catalog.infrastructure.persistence.mongo_product_repository.MongoClient",
            mongomock.MongoClient,
        )
        repo = bootstrap.product_repository(Settings(_env_file=None, db_type="mongodb"))
        with repo:
            assert isinstance(repo, MongoProductRepository)
            assert repo.list_all() == []
