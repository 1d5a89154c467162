"""Tests for the GetProductByID and GetAllProducts use cases."""

import pytest

from catalog.application.get_product import GetProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.domain.exceptions import InvalidIdentifier, NotFoundError, ValidationError
from catalog.domain.model.identifier import UNSET, IntegerId
from catalog.domain.model.product import Product
from tests.fakes import FakeProductRepository


def _setup():
    return FakeProductRepository(
        [
            Product.create("Widget", "15.00", 10),
            Product.create("Gadget", "25.00", 3),
        ]
    )


class TestGetProduct:

    def test_get_by_parsed_identifier(self):
        product = GetProductHandler(_setup()).handle(IntegerId(2))
        assert product.name == "Gadget"

    def test_get_by_text(self):
        product = GetProductHandler(_setup()).handle("1")
        assert product.name == "Widget"

    def test_missing_product_is_not_found(self):
        with pytest.raises(NotFoundError, match="not found"):
            GetProductHandler(_setup()).handle(IntegerId(999))

    def test_unset_identifier_rejected(self):
        with pytest.raises(ValidationError, match="required"):
            GetProductHandler(_setup()).handle(UNSET)

    def test_unparseable_text_rejected(self):
        with pytest.raises(InvalidIdentifier):
            GetProductHandler(_setup()).handle("widget")


class TestListProducts:

    def test_lists_everything(self):
        names = [p.name for p in ListProductsHandler(_setup()).handle()]
        assert names == ["Widget", "Gadget"]

    def test_empty_catalog_is_empty_list(self):
        assert ListProductsHandler(FakeProductRepository()).handle() == []
