"""MongoDB-backed implementation of ProductRepository.

Products are documents in one collection::

    {<key>, "product_name": str, "price": float, "stock": int}

By default ``<key>`` is ``_id`` and MongoDB generates it; the adapter
turns the returned ``ObjectId`` into an ``OpaqueId``. With
``key_field="product_id"`` the caller supplies the key, which is stored
as its text form and always read back as an ``OpaqueId``; ``_id`` is
left to the store as an internal detail.

Every driver call runs inside ``pymongo.timeout`` with whatever budget
the request deadline has left, so a slow server is abandoned rather
than waited on.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from decimal import Decimal
from typing import Any

import pymongo
from bson import ObjectId
from loguru import logger
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from catalog.domain.deadline import Deadline, check
from catalog.domain.exceptions import (
    NotFoundError,
    OperationCancelledError,
    PersistenceError,
    StoreConnectionError,
    ValidationError,
)
from catalog.domain.model.identifier import OpaqueId, ProductId, text_of
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

KEY_FIELDS = ("_id", "product_id")


class MongoProductRepository(ProductRepository):

    def __init__(
        self,
        uri: str,
        database: str,
        collection: str,
        *,
        key_field: str = "_id",
        client: Any = None,
        server_selection_timeout_ms: int = 5000,
    ) -> None:
        if key_field not in KEY_FIELDS:
            raise ValueError(f"key_field must be one of {KEY_FIELDS}, got {key_field!r}")
        self._key_field = key_field
        self._owns_client = client is None
        self._closed = False

        logger.info("Connecting to document store {}.{}", database, collection)
        try:
            if client is None:
                client = MongoClient(
                    uri, serverSelectionTimeoutMS=server_selection_timeout_ms
                )
            self._client = client
            client.admin.command("ping")
            self._collection = client[database][collection]
            if key_field != "_id":
                self._collection.create_index(key_field, unique=True)
        except PyMongoError as exc:
            if self._owns_client and client is not None:
                client.close()
            logger.error("Document store is unreachable: {}", exc)
            raise StoreConnectionError(f"Cannot connect to MongoDB: {exc}") from exc

    # --- ProductRepository interface ------------------------------------------

    def save(self, product: Product, deadline: Deadline | None = None) -> ProductId:
        document = _to_document(product)
        if product.id:
            key = self._key_of(product.id)
            if key is None:
                raise ValidationError(
                    f"Document store keys are object ids, got {product.id!s}"
                )
            document[self._key_field] = key
        elif self._key_field != "_id":
            raise ValidationError("Product ID is required")

        self._begin(deadline)
        try:
            with _bounded(deadline):
                result = self._collection.insert_one(document)
        except PyMongoError as exc:
            raise self._fault("save", exc, deadline) from exc

        if product.id:
            return self._decode_id(document[self._key_field])
        logger.debug("Inserted product {}", result.inserted_id)
        return self._decode_id(result.inserted_id)

    def get_by_id(
        self, product_id: ProductId, deadline: Deadline | None = None
    ) -> Product | None:
        key = self._key_of(product_id)
        if key is None:
            return None

        self._begin(deadline)
        try:
            with _bounded(deadline):
                document = self._collection.find_one({self._key_field: key})
        except PyMongoError as exc:
            raise self._fault("get_by_id", exc, deadline) from exc
        return None if document is None else self._from_document(document)

    def list_all(self, deadline: Deadline | None = None) -> list[Product]:
        self._begin(deadline)
        products: list[Product] = []
        try:
            with _bounded(deadline), self._collection.find({}) as cursor:
                for document in cursor:
                    check(deadline)
                    products.append(self._from_document(document))
        except PyMongoError as exc:
            raise self._fault("list_all", exc, deadline) from exc
        return products

    def update(self, product: Product, deadline: Deadline | None = None) -> None:
        key = self._key_of(product.id)
        if key is None:
            raise NotFoundError(f"Product with ID '{product.id!s}' not found")

        replacement = _to_document(product)
        if self._key_field != "_id":
            replacement[self._key_field] = key

        self._begin(deadline)
        try:
            with _bounded(deadline):
                result = self._collection.replace_one({self._key_field: key}, replacement)
        except PyMongoError as exc:
            raise self._fault("update", exc, deadline) from exc
        if result.matched_count == 0:
            raise NotFoundError(f"Product with ID '{product.id!s}' not found")

    def delete(self, product_id: ProductId, deadline: Deadline | None = None) -> None:
        key = self._key_of(product_id)
        if key is None:
            raise NotFoundError(f"Product with ID '{product_id!s}' not found")

        self._begin(deadline)
        try:
            with _bounded(deadline):
                result = self._collection.delete_one({self._key_field: key})
        except PyMongoError as exc:
            raise self._fault("delete", exc, deadline) from exc
        if result.deleted_count == 0:
            raise NotFoundError(f"Product with ID '{product_id!s}' not found")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()
        logger.info("Document store connection released")

    # --- Serialization helpers ------------------------------------------------

    def _key_of(self, product_id: ProductId) -> Any:
        """Stored key value for ``product_id``, or None if it cannot name a document."""
        if self._key_field == "_id":
            if isinstance(product_id, OpaqueId) and product_id.is_object_id:
                return ObjectId(product_id.value)
            return None
        if not product_id:
            return None
        return text_of(product_id)

    def _decode_id(self, raw: Any) -> OpaqueId:
        if isinstance(raw, ObjectId) and self._key_field == "_id":
            return OpaqueId(str(raw))
        if isinstance(raw, str):
            return OpaqueId(raw)
        raise ValueError(f"unsupported {self._key_field} {raw!r}")

    def _from_document(self, document: dict[str, Any]) -> Product:
        try:
            return Product(
                id=self._decode_id(document[self._key_field]),
                name=document["product_name"],
                price=Decimal(str(document["price"])),
                stock=int(document["stock"]),
            )
        except (KeyError, TypeError, ValueError, ArithmeticError, ValidationError) as exc:
            raise PersistenceError(
                f"Cannot decode product document {document.get('_id')!s}: {exc}"
            ) from exc

    # --- Internal helpers -----------------------------------------------------

    def _begin(self, deadline: Deadline | None) -> None:
        check(deadline)
        if self._closed:
            raise PersistenceError("Repository is closed")

    @staticmethod
    def _fault(
        operation: str, exc: PyMongoError, deadline: Deadline | None
    ) -> PersistenceError:
        if exc.timeout and deadline is not None:
            logger.warning("Document store {} ran past the request deadline", operation)
            return OperationCancelledError(f"Operation deadline exceeded during {operation}")
        logger.error("Document store failed during {}: {}", operation, exc)
        return PersistenceError(f"MongoDB error during {operation}: {exc}")


def _bounded(deadline: Deadline | None) -> AbstractContextManager[Any]:
    """Client-side operation timeout for the time ``deadline`` has left."""
    remaining = deadline.remaining() if deadline is not None else None
    if remaining is None:
        return nullcontext()
    return pymongo.timeout(max(remaining, 0.001))


def _to_document(product: Product) -> dict[str, Any]:
    return {
        "product_name": product.name,
        "price": float(product.price),
        "stock": product.stock,
    }
