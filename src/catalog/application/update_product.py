"""Application service: Update Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.application.validation import require_identifier
from catalog.domain.deadline import Deadline
from catalog.domain.exceptions import CatalogError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product: Product, deadline: Deadline | None = None) -> Product:
        """Overwrite the stored fields of ``product.id``.

        A missing product surfaces as NotFoundError from the repository,
        whichever store is behind it.
        """
        product_id = require_identifier(product.id)
        if not product.name or not product.name.strip():
            raise ValidationError("Product name is required")

        candidate = product.with_id(product_id)
        candidate.name = product.name.strip()
        try:
            self._product_repo.update(candidate, deadline)
        except CatalogError as exc:
            logger.warning("Update product {} failed: {}", product_id, exc)
            raise

        logger.info("Updated product {}", product_id)
        return candidate
