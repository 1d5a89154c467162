"""Unit tests for the Product entity."""

from decimal import Decimal

import pytest

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.identifier import UNSET, IntegerId
from catalog.domain.model.product import Product


class TestProductCreation:

    def test_new_product_has_unset_id(self):
        p = Product.create("Widget", "9.99", 5)
        assert p.id is UNSET
        assert p.price == Decimal("9.99")

    def test_float_price_coerced_without_binary_noise(self):
        assert Product.create("Widget", 9.99, 5).price == Decimal("9.99")

    def test_zero_price_and_stock_allowed(self):
        p = Product.create("Freebie", 0, 0)
        assert p.price == Decimal("0")
        assert p.stock == 0

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create("Widget", "-1", 5)

    def test_unparseable_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid price"):
            Product.create("Widget", "cheap", 5)

    def test_nan_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create("Widget", "NaN", 5)

    def test_sub_cent_price_rejected(self):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            Product.create("Widget", "9.999", 5)

    def test_trailing_zeros_below_cents_allowed(self):
        assert Product.create("Widget", "1.500", 5).price == Decimal("1.5")

    def test_price_above_column_range_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Product.create("Widget", "10000000000", 5)

    def test_float_price_needs_factory(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Product(name="Widget", price=9.99, stock=5)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="stock cannot be negative"):
            Product.create("Widget", "1", -1)

    def test_non_integer_stock_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Product.create("Widget", "1", 2.5)

    def test_empty_name_is_left_to_the_use_case(self):
        assert Product.create("", "1", 1).name == ""


class TestProductHelpers:

    def test_with_id_returns_copy(self):
        p = Product.create("Widget", "9.99", 5)
        stored = p.with_id(IntegerId(1))
        assert stored.id == IntegerId(1)
        assert p.id is UNSET

    def test_equality_is_by_value(self):
        assert Product.create("Widget", "10", 1) == Product.create("Widget", "10.00", 1)

    def test_to_dict(self):
        p = Product.create("Widget", "9.99", 5, IntegerId(3))
        assert p.to_dict() == {
            "id": 3,
            "product_name": "Widget",
            "price": 9.99,
            "stock": 5,
        }
