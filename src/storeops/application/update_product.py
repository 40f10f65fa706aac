"""Application service: Update Product use case."""

from __future__ import annotations

from storeops.domain.exceptions import EntityNotFoundError
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, product_id: str, new_price: str, discounted_price: str | None = None
    ) -> None:
        """Update a product's price.

        This does NOT affect any existing sales: they captured a
        price snapshot at creation time.
        """
        with self._uow.transaction() as tx:
            product = tx.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            currency = product.price.currency
            product.update_price(
                Money.of(new_price, currency),
                Money.of(discounted_price, currency) if discounted_price is not None else None,
            )
            tx.products.save(product)
