"""Application service: Set Stock use case (manual stock count)."""

from __future__ import annotations

from storeops.domain.exceptions import EntityNotFoundError
from storeops.domain.repository.unit_of_work import UnitOfWork


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_name: str, quantity: int) -> None:
        """Overwrite the stock level for a product."""
        with self._uow.transaction() as tx:
            product = tx.products.get_by_name(product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{product_name}'")
            product.set_stock(quantity)
            tx.products.save(product)
