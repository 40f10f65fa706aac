"""Application service: Delete Product use case.

Past sales keep their line items; returning such a sale later simply
skips the deleted product.
"""

from __future__ import annotations

from storeops.domain.exceptions import EntityNotFoundError
from storeops.domain.repository.unit_of_work import UnitOfWork


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> None:
        with self._uow.transaction() as tx:
            if not tx.products.delete(product_id):
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
