"""SQLAlchemy implementation of SaleRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storeops.domain.exceptions import DuplicateDocumentNumberError, PersistenceError
from storeops.domain.model.sale import (
    Customer,
    LineItem,
    SaleDocument,
    SaleKind,
    SaleStatus,
)
from storeops.domain.model.value_objects import Money, Quantity
from storeops.domain.repository.sale_repository import SaleRepository
from storeops.infrastructure.persistence._timestamps import as_utc, as_utc_or_none
from storeops.infrastructure.persistence.sql_models import SaleItemRow, SaleRow


class SqlSaleRepository(SaleRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- SaleRepository interface ---------------------------------------------

    def add(self, sale: SaleDocument) -> SaleDocument:
        row = self._to_row(sale)
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            if _is_number_conflict(exc):
                raise DuplicateDocumentNumberError(
                    f"Document number {sale.number} is already taken"
                ) from exc
            raise
        sale.id = row.id
        return sale

    def get_by_id(self, sale_id: int) -> SaleDocument | None:
        row = self._session.get(SaleRow, sale_id, with_for_update=True)
        return self._to_domain(row) if row is not None else None

    def list_all(self, kind: SaleKind | None = None) -> list[SaleDocument]:
        stmt = select(SaleRow).order_by(SaleRow.created_at.desc(), SaleRow.id.desc())
        if kind is not None:
            stmt = stmt.where(SaleRow.kind == kind.value)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def find_invoice_for_order(self, order_id: int) -> SaleDocument | None:
        stmt = (
            select(SaleRow)
            .where(SaleRow.kind == SaleKind.INVOICE.value, SaleRow.order_id == order_id)
            .order_by(SaleRow.id)
            .limit(1)
            .with_for_update()
        )
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def update(self, sale: SaleDocument) -> None:
        row = self._session.get(SaleRow, sale.id)
        if row is None:
            raise PersistenceError(f"Sale #{sale.id} is not persisted")
        row.status = sale.status.value
        row.is_returned = sale.is_returned
        row.returned_at = sale.returned_at
        row.updated_at = sale.updated_at
        self._session.flush()

    def count_created_between(
        self, kind: SaleKind, start: datetime, end: datetime
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(SaleRow)
            .where(
                SaleRow.kind == kind.value,
                SaleRow.created_at >= start,
                SaleRow.created_at < end,
            )
        )
        return self._session.scalar(stmt) or 0

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(sale: SaleDocument) -> SaleRow:
        return SaleRow(
            kind=sale.kind.value,
            number=sale.number,
            customer_name=sale.customer.name,
            customer_phone=sale.customer.phone,
            customer_address=sale.customer.address,
            status=sale.status.value,
            currency=sale.currency,
            subtotal=str(sale.subtotal.amount),
            delivery_charge=str(sale.delivery_charge.amount),
            discount=str(sale.discount.amount),
            total=str(sale.total.amount),
            payment_method=sale.payment_method,
            is_pos=sale.is_pos,
            order_id=sale.order_id,
            notes=sale.notes,
            is_returned=sale.is_returned,
            returned_at=sale.returned_at,
            created_at=sale.created_at,
            updated_at=sale.updated_at,
            items=[
                SaleItemRow(
                    position=position,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    regular_price=str(item.list_price.amount),
                    unit_price=str(item.unit_price.amount),
                    subtotal=str(item.subtotal.amount),
                )
                for position, item in enumerate(sale.items)
            ],
        )

    @staticmethod
    def _to_domain(row: SaleRow) -> SaleDocument:
        currency = row.currency
        return SaleDocument(
            id=row.id,
            kind=SaleKind(row.kind),
            number=row.number,
            customer=Customer(
                name=row.customer_name,
                phone=row.customer_phone,
                address=row.customer_address,
            ),
            items=[
                LineItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=Quantity(item.quantity),
                    unit_price=Money(Decimal(item.unit_price), currency),
                    regular_price=Money(Decimal(item.regular_price), currency),
                )
                for item in row.items
            ],
            status=SaleStatus(row.status),
            delivery_charge=Money(Decimal(row.delivery_charge), currency),
            discount=Money(Decimal(row.discount), currency),
            payment_method=row.payment_method,
            is_pos=row.is_pos,
            order_id=row.order_id,
            notes=row.notes,
            is_returned=row.is_returned,
            returned_at=as_utc_or_none(row.returned_at),
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )


def _is_number_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return "uq_sales_number" in message or "sales.number" in message
