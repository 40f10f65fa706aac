"""JSON-document-backed implementation of SaleRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

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


class JsonSaleRepository(SaleRepository):
    """Operates on the whole document: it owns ``sales`` and ``next_sale_id``."""

    def __init__(self, document: dict) -> None:
        self._document = document
        self._records: list[dict] = document["sales"]

    # --- SaleRepository interface ---------------------------------------------

    def add(self, sale: SaleDocument) -> SaleDocument:
        if any(raw["number"] == sale.number for raw in self._records):
            raise DuplicateDocumentNumberError(
                f"Document number {sale.number} is already taken"
            )
        sale.id = self._document["next_sale_id"]
        self._document["next_sale_id"] = sale.id + 1
        self._records.append(self._to_raw(sale))
        return sale

    def get_by_id(self, sale_id: int) -> SaleDocument | None:
        for raw in self._records:
            if raw["id"] == sale_id:
                return self._to_domain(raw)
        return None

    def list_all(self, kind: SaleKind | None = None) -> list[SaleDocument]:
        sales = [
            self._to_domain(raw)
            for raw in self._records
            if kind is None or raw["kind"] == kind.value
        ]
        return sorted(sales, key=lambda s: (s.created_at, s.id), reverse=True)

    def find_invoice_for_order(self, order_id: int) -> SaleDocument | None:
        for raw in self._records:
            if raw["kind"] == SaleKind.INVOICE.value and raw.get("order_id") == order_id:
                return self._to_domain(raw)
        return None

    def update(self, sale: SaleDocument) -> None:
        for raw in self._records:
            if raw["id"] == sale.id:
                raw["status"] = sale.status.value
                raw["is_returned"] = sale.is_returned
                raw["returned_at"] = (
                    sale.returned_at.isoformat() if sale.returned_at else None
                )
                raw["updated_at"] = sale.updated_at.isoformat()
                return
        raise PersistenceError(f"Sale #{sale.id} is not persisted")

    def count_created_between(
        self, kind: SaleKind, start: datetime, end: datetime
    ) -> int:
        return sum(
            1
            for raw in self._records
            if raw["kind"] == kind.value
            and start <= datetime.fromisoformat(raw["created_at"]) < end
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: SaleDocument) -> dict:
        return {
            "id": sale.id,
            "kind": sale.kind.value,
            "number": sale.number,
            "customer": {
                "name": sale.customer.name,
                "phone": sale.customer.phone,
                "address": sale.customer.address,
            },
            "status": sale.status.value,
            "currency": sale.currency,
            "delivery_charge": str(sale.delivery_charge.amount),
            "discount": str(sale.discount.amount),
            "payment_method": sale.payment_method,
            "is_pos": sale.is_pos,
            "order_id": sale.order_id,
            "notes": sale.notes,
            "is_returned": sale.is_returned,
            "returned_at": sale.returned_at.isoformat() if sale.returned_at else None,
            "created_at": sale.created_at.isoformat(),
            "updated_at": sale.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "regular_price": str(item.list_price.amount),
                    "unit_price": str(item.unit_price.amount),
                }
                for item in sale.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> SaleDocument:
        currency = raw["currency"]
        items = [
            LineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                regular_price=Money(Decimal(i["regular_price"]), currency),
            )
            for i in raw["items"]
        ]
        returned_at = raw.get("returned_at")
        return SaleDocument(
            id=raw["id"],
            kind=SaleKind(raw["kind"]),
            number=raw["number"],
            customer=Customer(**raw["customer"]),
            items=items,
            status=SaleStatus(raw["status"]),
            delivery_charge=Money(Decimal(raw["delivery_charge"]), currency),
            discount=Money(Decimal(raw["discount"]), currency),
            payment_method=raw.get("payment_method", "cash"),
            is_pos=raw.get("is_pos", False),
            order_id=raw.get("order_id"),
            notes=raw.get("notes"),
            is_returned=raw.get("is_returned", False),
            returned_at=datetime.fromisoformat(returned_at) if returned_at else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
