"""Abstract repository for the Product entity.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, MongoDB, in-memory)
live in the infrastructure layer and in the tests.

Every implementation reports the same outcomes the same way:

- an absent product is ``None`` from ``get_by_id``, never an error;
- ``update``/``delete`` of an absent product raise ``NotFoundError``,
  whatever the store's own "nothing changed" signal looks like;
- store faults raise ``PersistenceError``; driver exceptions never
  escape.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from catalog.domain.deadline import Deadline
from catalog.domain.model.identifier import ProductId
from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def save(self, product: Product, deadline: Deadline | None = None) -> ProductId:
        """Persist a new product and return the identifier it was stored under."""

    @abstractmethod
    def get_by_id(
        self, product_id: ProductId, deadline: Deadline | None = None
    ) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, deadline: Deadline | None = None) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def update(self, product: Product, deadline: Deadline | None = None) -> None:
        """Overwrite the stored product that has ``product.id``."""

    @abstractmethod
    def delete(self, product_id: ProductId, deadline: Deadline | None = None) -> None:
        """Remove a product."""

    def close(self) -> None:
        """Release the connection held by the repository."""

    # --- Scoped resource ------------------------------------------------------

    def __enter__(self) -> ProductRepository:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
