"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the delivery layer (HTTP, CLI) and the
application layer without exposing domain internals to the outside
world.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from catalog.domain.model.identifier import wire_value
from catalog.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: int | str | None
    product_name: str
    price: float
    stock: int

    @property
    def id_text(self) -> str:
        return "" if self.id is None else str(self.id)

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=wire_value(product.id),
            product_name=product.name,
            price=float(product.price),
            stock=product.stock,
        )

    def to_dict(self) -> dict:
        return asdict(self)

