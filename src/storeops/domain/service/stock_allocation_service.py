"""Domain service: Stock Allocation.

Takes stock out for, and puts stock back from, the line items of a sale.
It must run inside a unit-of-work transaction: each product is re-read
through the transaction's repository right before it is changed, and a
shortfall on any item raises so the transaction discards the items that
were already taken.
"""

from __future__ import annotations

import logging
from datetime import datetime

from storeops.domain.exceptions import InsufficientStockError
from storeops.domain.model.sale import LineItem
from storeops.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def take_for_items(self, items: list[LineItem], at: datetime | None = None) -> None:
        """Decrement stock for every line item, in order.

        A product that no longer exists counts as having no stock.
        """
        for item in items:
            qty = item.quantity.value
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise InsufficientStockError(item.product_name, qty, 0)
            product.reduce_stock(qty, at)
            self._product_repo.save(product)

    def return_for_items(
        self, items: list[LineItem], at: datetime | None = None
    ) -> list[LineItem]:
        """Increment stock for every line item whose product still exists.

        Returns the line items that were skipped because their product
        has since been deleted.
        """
        skipped: list[LineItem] = []
        for item in items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                logger.info(
                    "Skipping restock of %s x%d: product %s no longer exists",
                    item.product_name, item.quantity.value, item.product_id,
                )
                skipped.append(item)
                continue
            product.restock(item.quantity.value, at)
            self._product_repo.save(product)
        return skipped
