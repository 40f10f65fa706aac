"""Application service: Add Product use case."""

from __future__ import annotations

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storeops.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork, currency: str = DEFAULT_CURRENCY) -> None:
        self._uow = uow
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        discounted_price: str | None = None,
        category: str = "general",
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        regular = Money.of(price, self._currency)
        if regular.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        discounted = (
            Money.of(discounted_price, self._currency)
            if discounted_price is not None
            else None
        )
        if discounted is not None and discounted > regular:
            raise ValidationError("Discounted price cannot exceed the regular price")

        with self._uow.transaction() as tx:
            if tx.products.get_by_name(name.strip()) is not None:
                raise ValidationError(f"Product '{name.strip()}' already exists")

            product = Product(
                id=tx.products.next_id(),
                name=name.strip(),
                price=regular,
                stock=stock,
                discounted_price=discounted,
                category=category,
            )
            tx.products.save(product)
        return product
