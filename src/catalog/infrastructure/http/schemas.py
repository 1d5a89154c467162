"""Request bodies accepted by the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from catalog.domain.model.identifier import UNSET, ProductId, identifier_from_value
from catalog.domain.model.product import Product, to_price


class ProductIn(BaseModel):
    """Body of POST and PUT requests."""

    id: int | str | None = None
    product_name: str
    price: float = Field(ge=0)
    stock: int = Field(ge=0)

    def to_product(self, product_id: ProductId = UNSET) -> Product:
        """Build the domain product; ``product_id`` overrides the body's id."""
        return Product(
            name=self.product_name,
            price=to_price(self.price),
            stock=self.stock,
            id=product_id or identifier_from_value(self.id),
        )
