"""Unit tests for the StockAllocationService domain service."""

import pytest

from storeops.domain.exceptions import InsufficientStockError
from storeops.domain.model.product import Product
from storeops.domain.model.sale import LineItem
from storeops.domain.model.value_objects import Money, Quantity
from storeops.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import FakeProductRepository


def _setup():
    products = [
        Product(id="1", name="Widget", price=Money.of("15.00"), stock=10),
        Product(id="2", name="Gadget", price=Money.of("25.00"), stock=3),
    ]
    repo = FakeProductRepository(products)
    return StockAllocationService(repo), repo


def _item(product_id: str, name: str, qty: int) -> LineItem:
    return LineItem(
        product_id=product_id,
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of("1.00"),
    )


class TestTakeForItems:

    def test_decrements_every_item(self):
        svc, repo = _setup()
        svc.take_for_items([_item("1", "Widget", 4), _item("2", "Gadget", 3)])
        assert repo.get_by_id("1").stock == 6
        assert repo.get_by_id("2").stock == 0

    def test_short_item_raises(self):
        svc, _ = _setup()
        with pytest.raises(InsufficientStockError, match="Gadget"):
            svc.take_for_items([_item("1", "Widget", 1), _item("2", "Gadget", 5)])

    def test_missing_product_counts_as_no_stock(self):
        svc, _ = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            svc.take_for_items([_item("99", "Ghost", 1)])
        assert exc_info.value.available == 0


class TestReturnForItems:

    def test_increments_every_item(self):
        svc, repo = _setup()
        skipped = svc.return_for_items([_item("1", "Widget", 4), _item("2", "Gadget", 2)])
        assert skipped == []
        assert repo.get_by_id("1").stock == 14
        assert repo.get_by_id("2").stock == 5

    def test_deleted_product_is_skipped(self):
        svc, repo = _setup()
        repo.delete("2")
        ghost = _item("2", "Gadget", 2)
        skipped = svc.return_for_items([_item("1", "Widget", 1), ghost])
        assert skipped == [ghost]
        assert repo.get_by_id("1").stock == 11
