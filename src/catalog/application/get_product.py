"""Application service: Get Product use case (query)."""

from __future__ import annotations

from loguru import logger

from catalog.application.validation import require_identifier
from catalog.domain.deadline import Deadline
from catalog.domain.exceptions import CatalogError, NotFoundError
from catalog.domain.model.identifier import ProductId
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class GetProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self, product_id: ProductId | str, deadline: Deadline | None = None
    ) -> Product:
        product_id = require_identifier(product_id)
        try:
            product = self._product_repo.get_by_id(product_id, deadline)
        except CatalogError as exc:
            logger.warning("Get product {} failed: {}", product_id, exc)
            raise

        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product
