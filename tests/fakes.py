"""In-memory fake repository for testing.

Implements the same abstract interface as the SQL and MongoDB
repositories but keeps everything in a dict. No I/O, no side effects.
"""

from __future__ import annotations

from catalog.domain.deadline import Deadline, check
from catalog.domain.exceptions import NotFoundError, PersistenceError
from catalog.domain.model.identifier import IntegerId, ProductId
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[ProductId, Product] = {}
        self._next_id = 1
        self.save_calls = 0
        self.closed = False
        for p in products or []:
            self.save(p)

    def save(self, product: Product, deadline: Deadline | None = None) -> ProductId:
        check(deadline)
        self.save_calls += 1
        product_id = product.id or IntegerId(self._next_id)
        if isinstance(product_id, IntegerId):
            self._next_id = max(self._next_id, product_id.value) + 1
        self._store[product_id] = product.with_id(product_id)
        return product_id

    def get_by_id(
        self, product_id: ProductId, deadline: Deadline | None = None
    ) -> Product | None:
        check(deadline)
        return self._store.get(product_id)

    def list_all(self, deadline: Deadline | None = None) -> list[Product]:
        check(deadline)
        return list(self._store.values())

    def update(self, product: Product, deadline: Deadline | None = None) -> None:
        check(deadline)
        if product.id not in self._store:
            raise NotFoundError(f"Product with ID '{product.id}' not found")
        self._store[product.id] = product

    def delete(self, product_id: ProductId, deadline: Deadline | None = None) -> None:
        check(deadline)
        if self._store.pop(product_id, None) is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")

    def close(self) -> None:
        self.closed = True


class BrokenProductRepository(FakeProductRepository):
    """Every store call fails as if the database went away."""

    def save(self, product, deadline=None):
        raise PersistenceError("store unreachable")

    def get_by_id(self, product_id, deadline=None):
        raise PersistenceError("store unreachable")

    def list_all(self, deadline=None):
        raise PersistenceError("store unreachable")

    def update(self, product, deadline=None):
        raise PersistenceError("store unreachable")

    def delete(self, product_id, deadline=None):
        raise PersistenceError("store unreachable")
