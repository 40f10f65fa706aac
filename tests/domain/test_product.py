"""Unit tests for the Product aggregate."""

import pytest

from storeops.domain.exceptions import InsufficientStockError, ValidationError
from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import Money


def _widget(stock: int = 10, discounted: str | None = None) -> Product:
    return Product(
        id="1",
        name="Widget",
        price=Money.of("100.00"),
        stock=stock,
        discounted_price=Money.of(discounted) if discounted else None,
    )


class TestProductStock:

    def test_reduce_stock(self):
        p = _widget(stock=10)
        p.reduce_stock(4)
        assert p.stock == 6

    def test_reduce_to_zero(self):
        p = _widget(stock=3)
        p.reduce_stock(3)
        assert p.stock == 0

    def test_reduce_more_than_available_rejected(self):
        p = _widget(stock=3)
        with pytest.raises(InsufficientStockError, match="Insufficient stock for product: Widget"):
            p.reduce_stock(5)
        assert p.stock == 3

    def test_insufficient_stock_carries_numbers(self):
        p = _widget(stock=3)
        with pytest.raises(InsufficientStockError) as exc_info:
            p.reduce_stock(5)
        assert exc_info.value.requested == 5
        assert exc_info.value.available == 3

    def test_insufficient_stock_is_validation_error(self):
        p = _widget(stock=0)
        with pytest.raises(ValidationError):
            p.reduce_stock(1)

    def test_reduce_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _widget().reduce_stock(0)

    def test_restock(self):
        p = _widget(stock=2)
        p.restock(5)
        assert p.stock == 7

    def test_restock_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _widget().restock(0)

    def test_set_stock(self):
        p = _widget(stock=2)
        p.set_stock(0)
        assert p.stock == 0

    def test_set_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _widget().set_stock(-1)

    def test_has_stock(self):
        p = _widget(stock=5)
        assert p.has_stock(5)
        assert not p.has_stock(6)


class TestProductPricing:

    def test_effective_price_defaults_to_price(self):
        assert _widget().effective_price == Money.of("100.00")

    def test_effective_price_uses_discount(self):
        assert _widget(discounted="80.00").effective_price == Money.of("80.00")

    def test_update_price(self):
        p = _widget()
        p.update_price(Money.of("120.00"))
        assert p.price == Money.of("120.00")
        assert p.discounted_price is None

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _widget().update_price(Money.of("0"))

    def test_discount_above_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            _widget().update_price(Money.of("50.00"), Money.of("60.00"))
