"""JSON-document-backed implementation of ProductRepository.

Works on the ``products`` list of the document loaded by JsonUnitOfWork;
nothing reaches the file until the unit of work commits.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        numeric = [int(raw["id"]) for raw in self._records if raw["id"].isdigit()]
        return str(max(numeric) + 1) if numeric else "1"

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._records:
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip().lower()
        for raw in self._records:
            if raw["name"].lower() == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._records]
        return sorted(products, key=lambda p: p.name)

    def save(self, product: Product) -> None:
        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(self._records):
            if raw["id"] == product.id:
                self._records[i] = self._to_raw(product)
                return
        self._records.append(self._to_raw(product))

    def delete(self, product_id: str) -> bool:
        for i, raw in enumerate(self._records):
            if raw["id"] == product_id:
                del self._records[i]
                return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "discounted_price": (
                str(product.discounted_price.amount)
                if product.discounted_price is not None
                else None
            ),
            "currency": product.price.currency,
            "stock": product.stock,
            "category": product.category,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "BDT")
        discounted = raw.get("discounted_price")
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), currency),
            stock=raw.get("stock", 0),
            discounted_price=(
                Money(Decimal(discounted), currency) if discounted is not None else None
            ),
            category=raw.get("category", "general"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
