"""Application service: Create Invoice use case.

Two flavours:

* POS / counter sale: items are picked from the catalog and stock is
  taken in the same transaction that stores the invoice.
* Invoice for an existing order: items and customer are copied from the
  order. The order's confirmation already took the stock, so none is
  taken again.
"""

from __future__ import annotations

from storeops.application.catalog import resolve_line_items
from storeops.application.dto import ItemSpec, SaleDTO, to_sale_dto
from storeops.application.inventory_transaction_manager import (
    InventoryTransactionManager,
)
from storeops.domain.exceptions import EntityNotFoundError, ValidationError
from storeops.domain.model.sale import (
    Customer,
    SaleDocument,
    SaleKind,
    SaleStatus,
)
from storeops.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storeops.domain.repository.unit_of_work import UnitOfWork

# Orders whose stock has been taken and can therefore be invoiced.
_INVOICEABLE = (SaleStatus.CONFIRMED, SaleStatus.DELIVERED)


class CreateInvoiceHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        manager: InventoryTransactionManager,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._uow = uow
        self._manager = manager
        self._currency = currency

    def handle(
        self,
        customer: Customer,
        item_specs: list[ItemSpec],
        discount: str = "0",
        delivery_charge: str = "0",
        payment_method: str = "cash",
        is_pos: bool = True,
        notes: str | None = None,
    ) -> SaleDTO:
        """Issue an invoice for catalog items and take their stock."""
        with self._uow.transaction() as tx:
            line_items = resolve_line_items(tx.products, item_specs)

        invoice = SaleDocument.create_invoice(
            customer=customer,
            items=line_items,
            delivery_charge=Money.of(delivery_charge, self._currency),
            discount=Money.of(discount, self._currency),
            payment_method=payment_method,
            is_pos=is_pos,
            notes=notes,
        )
        created = self._manager.create_sale_with_items(invoice, invoice.items, reduce_stock=True)
        return to_sale_dto(created)

    def handle_for_order(
        self,
        order_id: int,
        discount: str = "0",
        payment_method: str = "cash",
        notes: str | None = None,
    ) -> SaleDTO:
        """Issue an invoice mirroring a confirmed order.

        An order gets at most one invoice; a returned order gets none.
        Both rules are enforced inside the insert transaction.
        """
        with self._uow.transaction() as tx:
            order = tx.sales.get_by_id(order_id)
        if order is None or order.kind != SaleKind.ORDER:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.status not in _INVOICEABLE:
            raise ValidationError(
                f"Order #{order_id} is {order.status.value}; only confirmed "
                f"or delivered orders can be invoiced"
            )

        invoice = SaleDocument.create_invoice(
            customer=order.customer,
            items=order.items,
            delivery_charge=order.delivery_charge,
            discount=Money.of(discount, order.currency),
            payment_method=payment_method,
            is_pos=False,
            order_id=order.id,
            notes=notes,
        )
        created = self._manager.create_sale_with_items(invoice, invoice.items, reduce_stock=False)
        return to_sale_dto(created)
