"""Tests for returning sales (InventoryTransactionManager.return_sale)."""

from decimal import Decimal

import pytest

from storeops.application.create_invoice import CreateInvoiceHandler
from storeops.application.create_order import CreateOrderHandler
from storeops.application.dto import ItemSpec
from storeops.application.return_sale import ReturnSaleHandler
from storeops.domain.exceptions import (
    AlreadyReturnedError,
    EntityNotFoundError,
    ValidationError,
)
from storeops.domain.model.sale import (
    Customer,
    DeliveryLocation,
    LineItem,
    SaleDocument,
    SaleStatus,
)
from storeops.domain.model.value_objects import Money, Quantity


def _items() -> list[LineItem]:
    return [
        LineItem("1", "Widget", Quantity(4), Money.of("15.00")),
        LineItem("2", "Gadget", Quantity(2), Money.of("25.00")),
    ]


def _sell(manager) -> SaleDocument:
    items = _items()
    invoice = SaleDocument.create_invoice(
        Customer(name="Walk-in"), items, Money.zero(), Money.zero(), is_pos=True
    )
    return manager.create_sale_with_items(invoice, items, reduce_stock=True)


class TestReturnSale:

    def test_restores_stock(self, uow, manager):
        sale = _sell(manager)
        assert uow.stock_of("1") == 6
        assert uow.stock_of("2") == 1

        manager.return_sale(sale.id)

        assert uow.stock_of("1") == 10
        assert uow.stock_of("2") == 3

    def test_marks_sale_returned(self, uow, manager, now):
        sale = _sell(manager)
        manager.return_sale(sale.id)
        stored = uow.sales.get_by_id(sale.id)
        assert stored.is_returned
        assert stored.returned_at == now

    def test_second_return_rejected(self, uow, manager):
        sale = _sell(manager)
        manager.return_sale(sale.id)
        with pytest.raises(AlreadyReturnedError, match="already returned"):
            manager.return_sale(sale.id)
        assert uow.stock_of("1") == 10

    def test_deleted_product_skipped(self, uow, manager):
        sale = _sell(manager)
        uow.products.delete("2")
        manager.return_sale(sale.id)
        assert uow.stock_of("1") == 10
        assert uow.products.get_by_id("2") is None
        assert uow.sales.get_by_id(sale.id).is_returned

    def test_unknown_sale_rejected(self, manager):
        with pytest.raises(EntityNotFoundError, match="Sale #99 not found"):
            manager.return_sale(99)

    def test_pending_order_rejected(self, uow, manager):
        items = _items()
        order = SaleDocument.create_order(
            Customer(name="Alice", phone="1", address="Dhaka"), items, Money.of("60")
        )
        created = manager.create_sale_with_items(order, items, reduce_stock=False)
        with pytest.raises(ValidationError, match="no stock was taken"):
            manager.return_sale(created.id)
        assert uow.stock_of("1") == 10

    def test_confirmed_order_restores_stock(self, uow, manager):
        items = _items()
        order = SaleDocument.create_order(
            Customer(name="Alice", phone="1", address="Dhaka"), items, Money.of("60")
        )
        created = manager.create_sale_with_items(order, items, reduce_stock=False)
        manager.confirm_order(created.id)
        assert uow.stock_of("1") == 6

        manager.return_sale(created.id)

        assert uow.stock_of("1") == 10
        assert uow.sales.get_by_id(created.id).status == SaleStatus.CONFIRMED


class TestReturnSaleHandler:

    def test_returns_dto(self, manager):
        sale = _sell(manager)
        dto = ReturnSaleHandler(manager).handle(sale.id)
        assert dto.is_returned
        assert dto.returned_at == "2026-05-01 12:00 UTC"


class TestReturnOrderWithInvoice:

    def _invoiced_order(self, uow, manager) -> tuple[int, int]:
        charges = {DeliveryLocation.INSIDE: Decimal("60")}
        order_id = CreateOrderHandler(uow, manager, charges).handle(
            Customer(name="Alice", phone="1", address="Dhaka"),
            [ItemSpec("Widget", 4)],
            "inside",
        ).id
        manager.confirm_order(order_id)
        invoice_id = CreateInvoiceHandler(uow, manager).handle_for_order(order_id).id
        return order_id, invoice_id

    def test_invoice_return_restocks_once(self, uow, manager):
        order_id, invoice_id = self._invoiced_order(uow, manager)
        assert uow.stock_of("1") == 6

        manager.return_sale(invoice_id)

        assert uow.stock_of("1") == 10
        assert uow.sales.get_by_id(order_id).is_returned
        with pytest.raises(AlreadyReturnedError):
            manager.return_sale(order_id)
        assert uow.stock_of("1") == 10

    def test_order_return_also_returns_invoice(self, uow, manager):
        order_id, invoice_id = self._invoiced_order(uow, manager)

        manager.return_sale(order_id)

        assert uow.stock_of("1") == 10
        assert uow.sales.get_by_id(invoice_id).is_returned
        with pytest.raises(AlreadyReturnedError):
            manager.return_sale(invoice_id)
        assert uow.stock_of("1") == 10
