"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storeops.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    price: str
    stock: int


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[InventoryLineDTO]:
        with self._uow.transaction() as tx:
            products = tx.products.list_all()
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                price=str(p.effective_price),
                stock=p.stock,
            )
            for p in products
        ]
