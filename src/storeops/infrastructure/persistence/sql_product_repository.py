"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.product_repository import ProductRepository
from storeops.infrastructure.persistence._timestamps import as_utc
from storeops.infrastructure.persistence.sql_models import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        ids = self._session.scalars(select(ProductRow.id)).all()
        numeric = [int(i) for i in ids if i.isdigit()]
        return str(max(numeric) + 1) if numeric else "1"

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.get(ProductRow, product_id, with_for_update=True)
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        row = self._session.scalars(
            select(ProductRow).where(func.lower(ProductRow.name) == name.strip().lower())
        ).first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.name))
        return [self._to_domain(row) for row in rows]

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id, created_at=product.created_at)
            self._session.add(row)
        row.name = product.name
        row.price = str(product.price.amount)
        row.discounted_price = (
            str(product.discounted_price.amount)
            if product.discounted_price is not None
            else None
        )
        row.currency = product.price.currency
        row.stock = product.stock
        row.category = product.category
        row.updated_at = product.updated_at
        self._session.flush()

    def delete(self, product_id: str) -> bool:
        row = self._session.get(ProductRow, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money(Decimal(row.price), row.currency),
            stock=row.stock,
            discounted_price=(
                Money(Decimal(row.discounted_price), row.currency)
                if row.discounted_price is not None
                else None
            ),
            category=row.category,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
