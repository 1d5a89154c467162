"""Application service: Create Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.domain.deadline import Deadline
from catalog.domain.exceptions import CatalogError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product: Product, deadline: Deadline | None = None) -> Product:
        """Add a new product to the catalog.

        The identifier is left to the repository unless the caller
        supplied one; the returned product carries whichever was used.
        """
        if not product.name or not product.name.strip():
            raise ValidationError("Product name is required")

        candidate = product.with_id(product.id)
        candidate.name = product.name.strip()
        try:
            product_id = self._product_repo.save(candidate, deadline)
        except CatalogError as exc:
            logger.warning("Create product '{}' failed: {}", candidate.name, exc)
            raise

        logger.info("Created product {} '{}'", product_id, candidate.name)
        return candidate.with_id(product_id)
