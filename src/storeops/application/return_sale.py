"""Application service: Return Sale use case."""

from __future__ import annotations

from storeops.application.dto import SaleDTO, to_sale_dto
from storeops.application.inventory_transaction_manager import (
    InventoryTransactionManager,
)


class ReturnSaleHandler:

    def __init__(self, manager: InventoryTransactionManager) -> None:
        self._manager = manager

    def handle(self, sale_id: int) -> SaleDTO:
        """Return a sale, putting its units back on the shelf."""
        return to_sale_dto(self._manager.return_sale(sale_id))
