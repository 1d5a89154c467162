"""Tests for the UpdateProduct use case."""

from decimal import Decimal

import pytest

from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import NotFoundError, ValidationError
from catalog.domain.model.identifier import IntegerId
from catalog.domain.model.product import Product
from tests.fakes import FakeProductRepository


class TestUpdateProduct:

    def test_update_overwrites_fields(self):
        repo = FakeProductRepository([Product.create("Widget", "15.00", 10)])

        UpdateProductHandler(repo).handle(Product.create("Widget Pro", "19.50", 4, IntegerId(1)))

        stored = repo.get_by_id(IntegerId(1))
        assert stored.name == "Widget Pro"
        assert stored.price == Decimal("19.50")
        assert stored.stock == 4

    def test_unset_identifier_rejected(self):
        repo = FakeProductRepository()
        with pytest.raises(ValidationError, match="ID is required"):
            UpdateProductHandler(repo).handle(Product.create("Widget", "1", 1))

    def test_empty_name_rejected(self):
        repo = FakeProductRepository([Product.create("Widget", "15.00", 10)])
        with pytest.raises(ValidationError, match="name is required"):
            UpdateProductHandler(repo).handle(Product.create(" ", "1", 1, IntegerId(1)))

    def test_missing_product_is_not_found(self):
        repo = FakeProductRepository()
        with pytest.raises(NotFoundError):
            UpdateProductHandler(repo).handle(Product.create("Ghost", "1", 1, IntegerId(999)))

    @pytest.mark.parametrize("backend", ["sql_repo", "mongo_repo"])
    def test_missing_product_is_not_found_on_every_store(self, backend, request):
        repo = request.getfixturevalue(backend)
        with pytest.raises(NotFoundError):
            UpdateProductHandler(repo).handle(Product.create("Ghost", "1", 1, IntegerId(999)))
