"""Application service: Delete Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.application.validation import require_identifier
from catalog.domain.deadline import Deadline
from catalog.domain.exceptions import CatalogError
from catalog.domain.model.identifier import ProductId
from catalog.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: ProductId | str, deadline: Deadline | None = None) -> None:
        product_id = require_identifier(product_id)
        try:
            self._product_repo.delete(product_id, deadline)
        except CatalogError as exc:
            logger.warning("Delete product {} failed: {}", product_id, exc)
            raise

        logger.info("Deleted product {}", product_id)
