"""Shared fixtures: one repository per backend, built the way production builds them."""

from __future__ import annotations

import mongomock
import pytest

from catalog.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
def sql_repo(sqlite_url):
    repo = SqlProductRepository(sqlite_url, create_schema=True)
    yield repo
    repo.close()


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def mongo_repo(mongo_client):
    repo = MongoProductRepository(
        "mongodb://localhost:27017", "catalog_test", "products", client=mongo_client
    )
    yield repo
    repo.close()


@pytest.fixture(params=["sql", "mongodb"])
def repository(request):
    """Each contract test runs once against every backend."""
    fixture = "sql_repo" if request.param == "sql" else "mongo_repo"
    return request.getfixturevalue(fixture)
