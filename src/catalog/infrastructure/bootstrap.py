"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers,
and the only place that looks at which backend is configured. Every
other module depends only on ``ProductRepository``.
"""

from __future__ import annotations

from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.config import Settings, get_settings
from catalog.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)


def product_repository(settings: Settings | None = None) -> ProductRepository:
    """Build the one repository this process talks to.

    Raises StoreConnectionError if the configured store is unreachable.
    """
    settings = settings or get_settings()

    if settings.db_type == "mongodb":
        return MongoProductRepository(
            settings.mongodb_uri,
            settings.mongodb_database,
            settings.mongodb_collection,
            key_field=settings.mongodb_key_field,
            server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
        )

    return SqlProductRepository(
        settings.database_url,
        identifier_policy=settings.identifier_policy,
        create_schema=settings.create_schema,
    )
