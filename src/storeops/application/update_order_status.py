"""Application service: Update Order Status use case.

Only the move to CONFIRMED has an inventory effect; it is delegated to
the InventoryTransactionManager. Every other legal transition is a plain
status change.
"""

from __future__ import annotations

from storeops.application.dto import SaleDTO, to_sale_dto
from storeops.application.inventory_transaction_manager import (
    InventoryTransactionManager,
)
from storeops.domain.exceptions import EntityNotFoundError, ValidationError
from storeops.domain.model.sale import SaleKind, SaleStatus
from storeops.domain.repository.unit_of_work import UnitOfWork


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork, manager: InventoryTransactionManager) -> None:
        self._uow = uow
        self._manager = manager

    def handle(self, order_id: int, status: str) -> SaleDTO:
        try:
            new_status = SaleStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown order status '{status}'") from exc

        if new_status == SaleStatus.CONFIRMED:
            return to_sale_dto(self._manager.confirm_order(order_id))

        with self._uow.transaction() as tx:
            order = tx.sales.get_by_id(order_id)
            if order is None or order.kind != SaleKind.ORDER:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            order.transition_to(new_status)
            tx.sales.update(order)
        return to_sale_dto(order)
