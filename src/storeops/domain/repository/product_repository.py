"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, JSON, in-memory)
live in the infrastructure layer and are only ever used inside a
unit-of-work transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storeops.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unused product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found.

        Inside a stock transaction the row is read for update, so the
        value returned stays current until commit.
        """

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product, stock included."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; False if it did not exist."""
