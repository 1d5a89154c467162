"""Identifier validation shared by the use cases that target one product."""

from __future__ import annotations

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.identifier import (
    IntegerId,
    OpaqueId,
    ProductId,
    identifier_from_text,
)


def require_identifier(product_id: ProductId | str) -> IntegerId | OpaqueId:
    """Accept a parsed identifier or raw text; reject UNSET and unparseable text."""
    if isinstance(product_id, str):
        return identifier_from_text(product_id)
    if isinstance(product_id, (IntegerId, OpaqueId)):
        return product_id
    raise ValidationError("Product ID is required")
