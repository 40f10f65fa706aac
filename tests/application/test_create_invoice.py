"""Tests for the CreateInvoice use case (POS sales and order invoices)."""

from decimal import Decimal

import pytest

from storeops.application.create_invoice import CreateInvoiceHandler
from storeops.application.create_order import CreateOrderHandler
from storeops.application.dto import ItemSpec
from storeops.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storeops.domain.model.sale import Customer, DeliveryLocation

WALK_IN = Customer(name="Walk-in")
ALICE = Customer(name="Alice", phone="01700000000", address="Uttara, Dhaka")


@pytest.fixture
def handler(uow, manager) -> CreateInvoiceHandler:
    return CreateInvoiceHandler(uow, manager)


def _confirmed_order(uow, manager, specs: list[ItemSpec]) -> int:
    charges = {DeliveryLocation.INSIDE: Decimal("60"), DeliveryLocation.OUTSIDE: Decimal("120")}
    order_id = CreateOrderHandler(uow, manager, charges).handle(ALICE, specs, "inside").id
    manager.confirm_order(order_id)
    return order_id


class TestPosInvoice:

    def test_takes_stock(self, uow, handler):
        dto = handler.handle(WALK_IN, [ItemSpec("Widget", 4)])
        assert dto.kind == "invoice"
        assert dto.status == "paid"
        assert dto.is_pos
        assert dto.number == "INV-2026-00001"
        assert uow.stock_of("1") == 6

    def test_discount_and_delivery(self, handler):
        dto = handler.handle(
            WALK_IN, [ItemSpec("Widget", 2)], discount="5", delivery_charge="10"
        )
        assert dto.subtotal == "30.00 BDT"
        assert dto.total == "35.00 BDT"

    def test_payment_method(self, handler):
        dto = handler.handle(WALK_IN, [ItemSpec("Widget", 1)], payment_method="mobile")
        assert dto.payment_method == "mobile"

    def test_insufficient_stock_rejected(self, uow, handler):
        with pytest.raises(InsufficientStockError, match="Gadget"):
            handler.handle(WALK_IN, [ItemSpec("Widget", 2), ItemSpec("Gadget", 4)])
        assert uow.stock_of("1") == 10
        assert uow.sale_count() == 0

    def test_unknown_payment_rejected(self, uow, handler):
        with pytest.raises(ValidationError, match="Unknown payment method"):
            handler.handle(WALK_IN, [ItemSpec("Widget", 1)], payment_method="barter")
        assert uow.stock_of("1") == 10


class TestInvoiceForOrder:

    def test_copies_order_without_taking_stock(self, uow, manager, handler):
        order_id = _confirmed_order(uow, manager, [ItemSpec("Widget", 3)])
        assert uow.stock_of("1") == 7

        dto = handler.handle_for_order(order_id, payment_method="card")

        assert dto.order_id == order_id
        assert not dto.is_pos
        assert dto.customer_name == "Alice"
        assert dto.delivery_charge == "60.00 BDT"
        assert dto.total == "105.00 BDT"
        assert uow.stock_of("1") == 7

    def test_pending_order_rejected(self, uow, manager, handler):
        charges = {DeliveryLocation.INSIDE: Decimal("60")}
        order_id = CreateOrderHandler(uow, manager, charges).handle(
            ALICE, [ItemSpec("Widget", 1)], "inside"
        ).id
        with pytest.raises(ValidationError, match="only confirmed or delivered"):
            handler.handle_for_order(order_id)

    def test_returned_order_rejected(self, uow, manager, handler):
        order_id = _confirmed_order(uow, manager, [ItemSpec("Widget", 1)])
        manager.return_sale(order_id)
        with pytest.raises(ValidationError, match="has been returned"):
            handler.handle_for_order(order_id)

    def test_unknown_order_rejected(self, handler):
        with pytest.raises(EntityNotFoundError, match="Order #7 not found"):
            handler.handle_for_order(7)

    def test_invoice_id_is_not_an_order(self, handler):
        invoice_id = handler.handle(WALK_IN, [ItemSpec("Widget", 1)]).id
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle_for_order(invoice_id)

    def test_second_invoice_for_order_rejected(self, uow, manager, handler):
        order_id = _confirmed_order(uow, manager, [ItemSpec("Widget", 4)])
        first = handler.handle_for_order(order_id)

        with pytest.raises(ValidationError, match=f"already invoiced as {first.number}"):
            handler.handle_for_order(order_id)

        assert uow.sale_count() == 2
        assert uow.stock_of("1") == 6
