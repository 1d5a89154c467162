"""Product entity.

The catalog manages a single entity. Its identity is backend-dependent
(see ``identifier``); everything else is plain data with a couple of
invariants that hold regardless of where the product is stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.identifier import UNSET, ProductId, wire_value

CENT = Decimal("0.01")
# Prices are stored as NUMERIC(12, 2)
MAX_PRICE = Decimal("9999999999.99")


@dataclass
class Product:
    """A product in the catalog.

    ``id`` stays ``UNSET`` until an adapter saves the product and hands
    back the identifier it was stored under.
    """

    name: str
    price: Decimal
    stock: int
    id: ProductId = field(default=UNSET)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise ValidationError(
                f"Product name must be text, got {type(self.name).__name__}"
            )
        if not isinstance(self.price, Decimal):
            raise ValidationError(
                f"Product price must be a Decimal, got {type(self.price).__name__}"
            )
        if not self.price.is_finite() or self.price < Decimal("0"):
            raise ValidationError(f"Product price cannot be negative, got {self.price}")
        if self.price > MAX_PRICE:
            raise ValidationError(
                f"Product price cannot exceed {MAX_PRICE}, got {self.price}"
            )
        if self.price != self.price.quantize(CENT):
            raise ValidationError(
                f"Product price has more than two decimal places, got {self.price}"
            )
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError(
                f"Product stock must be an integer, got {type(self.stock).__name__}"
            )
        if self.stock < 0:
            raise ValidationError(f"Product stock cannot be negative, got {self.stock}")

    def with_id(self, product_id: ProductId) -> Product:
        """Return a copy of this product stored under ``product_id``."""
        return replace(self, id=product_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": wire_value(self.id),
            "product_name": self.name,
            "price": float(self.price),
            "stock": self.stock,
        }

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        name: str,
        price: str | float | int | Decimal,
        stock: int,
        product_id: ProductId = UNSET,
    ) -> Product:
        """Convenient factory that coerces the price to Decimal safely."""
        return Product(name=name, price=to_price(price), stock=stock, id=product_id)


def to_price(amount: str | float | int | Decimal) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid price: {amount!r}")
    try:
        return Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid price: {amount!r}") from exc
