"""Product aggregate.

Products live independently of sales. They have their own lifecycle:
prices change, stock moves, products are added and removed from the
catalog. Sales only ever reference a product by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storeops.domain.exceptions import InsufficientStockError, ValidationError
from storeops.domain.model.value_objects import Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``discounted_price``, when set, is not above ``price``
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    discounted_price: Money | None = None
    category: str = "general"
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def effective_price(self) -> Money:
        """The price a customer pays right now."""
        if self.discounted_price is not None:
            return self.discounted_price
        return self.price

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    # --- Stock movements ------------------------------------------------------

    def reduce_stock(self, quantity: int, at: datetime | None = None) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError when fewer units are on hand; the
        product is left untouched in that case.
        """
        if quantity <= 0:
            raise ValidationError("Stock reduction quantity must be positive")
        if not self.has_stock(quantity):
            raise InsufficientStockError(self.name, quantity, self.stock)
        self.stock -= quantity
        self.updated_at = at or _utcnow()

    def restock(self, quantity: int, at: datetime | None = None) -> None:
        """Put *quantity* units back into stock (e.g. on a return)."""
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.stock += quantity
        self.updated_at = at or _utcnow()

    def set_stock(self, quantity: int, at: datetime | None = None) -> None:
        """Overwrite the stock level after a manual count."""
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity
        self.updated_at = at or _utcnow()

    # --- Pricing --------------------------------------------------------------

    def update_price(self, new_price: Money, discounted_price: Money | None = None) -> None:
        """Change the product price.

        This does NOT affect any existing sales because line items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if discounted_price is not None and discounted_price > new_price:
            raise ValidationError("Discounted price cannot exceed the regular price")
        self.price = new_price
        self.discounted_price = discounted_price
        self.updated_at = _utcnow()
