"""SQLAlchemy-backed implementation of ProductRepository.

Products live in a single ``Product`` table keyed by an integer
``product_id``. The engine is created once when the repository is
built, checked with ``SELECT 1``, and disposed on ``close()``; its
connection pool is what concurrent requests share.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

from loguru import logger
from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    MetaData,
    Numeric,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Connection, Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from catalog.domain.deadline import Deadline, check
from catalog.domain.exceptions import (
    NotFoundError,
    PersistenceError,
    StoreConnectionError,
    ValidationError,
)
from catalog.domain.model.identifier import IntegerId, OpaqueId, ProductId
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

# product_id is a signed 64-bit column
KEY_MIN = -(2**63)
KEY_MAX = 2**63 - 1

_DIGITS = re.compile(r"^[0-9]+$")

metadata = MetaData()

product_table = Table(
    "Product",
    metadata,
    Column(
        "product_id",
        # SQLite only auto-increments a plain INTEGER primary key
        BigInteger().with_variant(Integer(), "sqlite"),
        primary_key=True,
        autoincrement=True,
    ),
    Column("product_name", Text, nullable=False),
    Column("price", Numeric(12, 2, asdecimal=True), nullable=False),
    Column("stock", Integer, nullable=False),
)


class IdentifierPolicy(str, enum.Enum):
    """Who decides a new product's key."""

    GENERATED = "generated"
    CLIENT_SUPPLIED = "client_supplied"


class SqlProductRepository(ProductRepository):

    def __init__(
        self,
        url: str,
        *,
        identifier_policy: IdentifierPolicy = IdentifierPolicy.GENERATED,
        create_schema: bool = False,
        engine_options: dict[str, Any] | None = None,
    ) -> None:
        try:
            engine = create_engine(url, **_engine_options(url, engine_options))
        except (SQLAlchemyError, ImportError, ValueError) as exc:
            raise StoreConnectionError(f"Invalid database URL: {exc}") from exc
        self._setup(engine, identifier_policy, create_schema)

    @classmethod
    def from_engine(
        cls,
        engine: Engine,
        *,
        identifier_policy: IdentifierPolicy = IdentifierPolicy.GENERATED,
        create_schema: bool = False,
    ) -> SqlProductRepository:
        """Build a repository around an engine created elsewhere."""
        repo = cls.__new__(cls)
        repo._setup(engine, identifier_policy, create_schema)
        return repo

    def _setup(
        self, engine: Engine, identifier_policy: IdentifierPolicy, create_schema: bool
    ) -> None:
        self._engine = engine
        self._identifier_policy = IdentifierPolicy(identifier_policy)
        self._closed = False

        logger.info(
            "Connecting to relational store at {}",
            engine.url.render_as_string(hide_password=True),
        )
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            if create_schema:
                metadata.create_all(engine, checkfirst=True)
        except SQLAlchemyError as exc:
            engine.dispose()
            logger.error("Relational store is unreachable: {}", exc)
            raise StoreConnectionError(f"Cannot connect to the database: {exc}") from exc

    # --- ProductRepository interface ------------------------------------------

    def save(self, product: Product, deadline: Deadline | None = None) -> ProductId:
        values = _to_row(product)
        key = _key_of(product.id)
        if key is not None:
            values["product_id"] = key
        elif product.id:
            raise ValidationError(
                f"Relational store keys are 64-bit integers, got {product.id!s}"
            )
        elif self._identifier_policy is IdentifierPolicy.CLIENT_SUPPLIED:
            raise ValidationError("Product ID is required")

        with self._transaction("save", deadline) as connection:
            result = connection.execute(insert(product_table).values(**values))
            if key is None:
                key = result.inserted_primary_key[0]

        logger.debug("Inserted product {}", key)
        return IntegerId(int(key))

    def get_by_id(
        self, product_id: ProductId, deadline: Deadline | None = None
    ) -> Product | None:
        key = _key_of(product_id)
        if key is None:
            return None
        query = select(product_table).where(product_table.c.product_id == key)
        with self._transaction("get_by_id", deadline) as connection:
            row = connection.execute(query).first()
        return None if row is None else _from_row(row)

    def list_all(self, deadline: Deadline | None = None) -> list[Product]:
        query = select(product_table).order_by(product_table.c.product_id)
        with self._transaction("list_all", deadline) as connection:
            rows = connection.execute(query).all()
        return [_from_row(row) for row in rows]

    def update(self, product: Product, deadline: Deadline | None = None) -> None:
        key = _key_of(product.id)
        if key is None:
            raise NotFoundError(f"Product with ID '{product.id!s}' not found")
        statement = (
            update(product_table)
            .where(product_table.c.product_id == key)
            .values(**_to_row(product))
        )
        with self._transaction("update", deadline) as connection:
            result = connection.execute(statement)
            if result.rowcount == 0:
                raise NotFoundError(f"Product with ID '{key}' not found")

    def delete(self, product_id: ProductId, deadline: Deadline | None = None) -> None:
        key = _key_of(product_id)
        if key is None:
            raise NotFoundError(f"Product with ID '{product_id!s}' not found")
        statement = delete(product_table).where(product_table.c.product_id == key)
        with self._transaction("delete", deadline) as connection:
            result = connection.execute(statement)
            if result.rowcount == 0:
                raise NotFoundError(f"Product with ID '{key}' not found")

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._engine.dispose()
            logger.info("Relational store connection released")

    # --- Internal helpers -----------------------------------------------------

    @contextmanager
    def _transaction(
        self, operation: str, deadline: Deadline | None
    ) -> Iterator[Connection]:
        """Run one operation in its own transaction, translating driver faults."""
        check(deadline)
        if self._closed:
            raise PersistenceError("Repository is closed")
        try:
            with self._engine.begin() as connection:
                yield connection
                check(deadline)
        except SQLAlchemyError as exc:
            logger.error("Relational store failed during {}: {}", operation, exc)
            raise PersistenceError(f"Database error during {operation}: {exc}") from exc


def _engine_options(url: str, overrides: dict[str, Any] | None) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Requests are served from a thread pool
        options["connect_args"] = {"check_same_thread": False, "timeout": 20}
    options.update(overrides or {})
    return options


def _key_of(product_id: ProductId) -> int | None:
    """Integer key named by ``product_id``, or None if it cannot name a row."""
    if isinstance(product_id, IntegerId):
        key = product_id.value
    elif isinstance(product_id, OpaqueId) and _DIGITS.match(product_id.value):
        key = int(product_id.value)
    else:
        return None
    return key if KEY_MIN <= key <= KEY_MAX else None


def _to_row(product: Product) -> dict[str, Any]:
    return {
        "product_name": product.name,
        "price": product.price,
        "stock": product.stock,
    }


def _from_row(row: Row) -> Product:
    try:
        return Product(
            id=IntegerId(int(row.product_id)),
            name=row.product_name,
            price=Decimal(str(row.price)),
            stock=int(row.stock),
        )
    except (ValidationError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Corrupt product row {row.product_id}: {exc}") from exc
