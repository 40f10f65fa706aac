"""Application service: Create Order use case.

A website order is stored as PENDING and takes no stock; stock is taken
when the order is confirmed (see UpdateOrderStatusHandler).
"""

from __future__ import annotations

from decimal import Decimal

from storeops.application.catalog import resolve_line_items
from storeops.application.dto import ItemSpec, SaleDTO, to_sale_dto
from storeops.application.inventory_transaction_manager import (
    InventoryTransactionManager,
)
from storeops.domain.exceptions import ValidationError
from storeops.domain.model.sale import Customer, DeliveryLocation, SaleDocument
from storeops.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storeops.domain.repository.unit_of_work import UnitOfWork


class CreateOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        manager: InventoryTransactionManager,
        delivery_charges: dict[DeliveryLocation, Decimal],
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._uow = uow
        self._manager = manager
        self._delivery_charges = delivery_charges
        self._currency = currency

    def handle(
        self,
        customer: Customer,
        item_specs: list[ItemSpec],
        delivery_location: str,
    ) -> SaleDTO:
        """Create a new website order.

        Steps:
        1. Resolve each product name to a Product (fail if not found).
        2. Build line items with *current* prices (snapshot).
        3. Let the SaleDocument factory validate customer and items.
        4. Persist through the manager without touching stock.
        """
        try:
            location = DeliveryLocation(delivery_location)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown delivery location '{delivery_location}'"
            ) from exc

        with self._uow.transaction() as tx:
            line_items = resolve_line_items(tx.products, item_specs)

        charge = Money.of(self._delivery_charges[location], self._currency)
        order = SaleDocument.create_order(customer, line_items, charge)
        created = self._manager.create_sale_with_items(order, order.items, reduce_stock=False)
        return to_sale_dto(created)
