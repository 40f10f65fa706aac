"""Application service: Inventory Transaction Manager.

Every operation that moves stock for a sale goes through here. Each public
method opens exactly one unit-of-work transaction (the legacy order
confirmation path excepted, see ``confirm_order``), so a stock check and
the decrement it guards always commit or roll back together.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from storeops.domain.exceptions import (
    DuplicateDocumentNumberError,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storeops.domain.model.sale import LineItem, SaleDocument, SaleKind, SaleStatus
from storeops.domain.repository.unit_of_work import UnitOfWork
from storeops.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryTransactionManager:

    def __init__(
        self,
        uow: UnitOfWork,
        *,
        invoice_prefix: str = "INV",
        order_prefix: str = "ORD",
        document_number_retries: int = 3,
        atomic_confirmation: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow = uow
        self._prefixes = {
            SaleKind.INVOICE: invoice_prefix,
            SaleKind.ORDER: order_prefix,
        }
        self._retries = document_number_retries
        self._atomic_confirmation = atomic_confirmation
        self._clock = clock

    # --- Sales ----------------------------------------------------------------

    def create_sale_with_items(
        self,
        sale: SaleDocument,
        items: list[LineItem],
        reduce_stock: bool,
    ) -> SaleDocument:
        """Persist *sale* with *items*, optionally taking stock for them.

        Returns the persisted copy of the sale (id, number, timestamps set).
        The object passed in is never modified. When no number is set one
        is generated inside the same transaction; if another writer claimed
        it first the whole transaction is retried with a fresh number.
        """
        self._validate_new_sale(sale, items)
        generate_number = sale.number is None

        attempt = 0
        while True:
            attempt += 1
            try:
                created = self._insert_sale(sale, items, reduce_stock)
            except DuplicateDocumentNumberError:
                if not generate_number or attempt > self._retries:
                    raise
                logger.warning(
                    "Document number collision for new %s (attempt %d), retrying",
                    sale.kind.value, attempt,
                )
                continue
            except InsufficientStockError as exc:
                logger.warning(
                    "Rejected %s for %s: %s", sale.kind.value, sale.customer.name, exc
                )
                raise

            logger.info(
                "Created %s #%s (%s) with %d item(s), stock %s",
                created.kind.value, created.id, created.number, len(created.items),
                "reduced" if reduce_stock else "untouched",
            )
            return created

    def return_sale(self, sale_id: int) -> SaleDocument:
        """Reverse the stock effect of a sale and flag it as returned.

        Products deleted since the sale are skipped; every other product
        gets the line item quantity back. An order and the invoice issued
        for it hold the same units once, so returning either one returns
        both and restocks only once.
        """
        now = self._clock()
        with self._uow.transaction() as tx:
            sale = tx.sales.get_by_id(sale_id)
            if sale is None:
                raise EntityNotFoundError(f"Sale #{sale_id} not found")
            sale.ensure_returnable()
            linked = self._linked_sale(tx, sale)
            if linked is not None:
                linked.ensure_returnable()

            svc = StockAllocationService(tx.products)
            skipped = svc.return_for_items(sale.items, at=now)

            sale.mark_returned(at=now)
            tx.sales.update(sale)
            if linked is not None:
                linked.mark_returned(at=now)
                tx.sales.update(linked)
                logger.info(
                    "Returned linked %s #%s with %s #%s",
                    linked.kind.value, linked.id, sale.kind.value, sale.id,
                )

        logger.info(
            "Returned %s #%s, restocked %d item(s), skipped %d deleted product(s)",
            sale.kind.value, sale.id, len(sale.items) - len(skipped), len(skipped),
        )
        return sale

    # --- Single product -------------------------------------------------------

    def reduce_stock(self, product_id: str, quantity: int) -> bool:
        """Take *quantity* units of one product in its own transaction.

        Returns False, changing nothing, when the product is missing or
        short; translating that into a user-facing error is the caller's
        job.
        """
        if quantity <= 0:
            raise ValidationError("Stock reduction quantity must be positive")

        with self._uow.transaction() as tx:
            product = tx.products.get_by_id(product_id)
            if product is None or not product.has_stock(quantity):
                return False
            product.reduce_stock(quantity, at=self._clock())
            tx.products.save(product)
        return True

    # --- Orders ---------------------------------------------------------------

    def confirm_order(self, order_id: int) -> SaleDocument:
        """Move a pending order to CONFIRMED and take its stock.

        By default the status change and every item's decrement share one
        transaction. With ``atomic_confirmation`` off, each item commits
        separately through ``reduce_stock`` and a shortfall leaves the
        earlier items decremented.
        """
        if not self._atomic_confirmation:
            return self._confirm_order_per_item(order_id)

        now = self._clock()
        with self._uow.transaction() as tx:
            order = self._load_order(tx, order_id)
            order.transition_to(SaleStatus.CONFIRMED, at=now)
            try:
                StockAllocationService(tx.products).take_for_items(order.items, at=now)
            except InsufficientStockError as exc:
                logger.warning("Cannot confirm order #%s: %s", order_id, exc)
                raise
            tx.sales.update(order)

        logger.info("Confirmed order #%s, stock reduced for %d item(s)", order_id, len(order.items))
        return order

    # --- Numbering ------------------------------------------------------------

    def next_document_number(self, kind: SaleKind = SaleKind.INVOICE) -> str:
        """Preview the number the next document of *kind* will receive.

        Informational only: the number actually stored is computed again
        inside the insert transaction.
        """
        with self._uow.transaction() as tx:
            return self._number_for(tx, kind, self._clock().year)

    # --- Internal helpers -----------------------------------------------------

    def _insert_sale(
        self, sale: SaleDocument, items: list[LineItem], reduce_stock: bool
    ) -> SaleDocument:
        now = self._clock()
        record = replace(sale, id=None, items=list(items), created_at=now, updated_at=now)

        with self._uow.transaction() as tx:
            if record.order_id is not None:
                self._check_order_invoiceable(tx, record.order_id)
            if record.number is None:
                record.number = self._number_for(tx, record.kind, now.year)
            tx.sales.add(record)
            if reduce_stock:
                StockAllocationService(tx.products).take_for_items(record.items, at=now)
        return record

    def _confirm_order_per_item(self, order_id: int) -> SaleDocument:
        with self._uow.transaction() as tx:
            order = self._load_order(tx, order_id)
        if not order.can_transition_to(SaleStatus.CONFIRMED):
            order.transition_to(SaleStatus.CONFIRMED)  # raises ValidationError

        for position, item in enumerate(order.items):
            qty = item.quantity.value
            if not self.reduce_stock(item.product_id, qty):
                logger.warning(
                    "Order #%s confirmation stopped at %s; %d earlier item(s) "
                    "stay decremented",
                    order_id, item.product_name, position,
                )
                raise InsufficientStockError(
                    item.product_name, qty, self._stock_of(item.product_id)
                )

        now = self._clock()
        with self._uow.transaction() as tx:
            order = self._load_order(tx, order_id)
            order.transition_to(SaleStatus.CONFIRMED, at=now)
            tx.sales.update(order)
        logger.info("Confirmed order #%s item by item", order_id)
        return order

    def _stock_of(self, product_id: str) -> int:
        with self._uow.transaction() as tx:
            product = tx.products.get_by_id(product_id)
        return product.stock if product is not None else 0

    def _number_for(self, tx: UnitOfWork, kind: SaleKind, year: int) -> str:
        start = datetime(year, 1, 1, tzinfo=timezone.utc)
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
        count = tx.sales.count_created_between(kind, start, end)
        return f"{self._prefixes[kind]}-{year}-{count + 1:05d}"

    @staticmethod
    def _linked_sale(tx: UnitOfWork, sale: SaleDocument) -> SaleDocument | None:
        if sale.kind == SaleKind.INVOICE:
            return tx.sales.get_by_id(sale.order_id) if sale.order_id is not None else None
        return tx.sales.find_invoice_for_order(sale.id)  # type: ignore[arg-type]

    @classmethod
    def _check_order_invoiceable(cls, tx: UnitOfWork, order_id: int) -> None:
        # Locks the order row so two invoices for it cannot race.
        order = cls._load_order(tx, order_id)
        if order.is_returned:
            raise ValidationError(f"Order #{order_id} has been returned")
        existing = tx.sales.find_invoice_for_order(order_id)
        if existing is not None:
            raise ValidationError(
                f"Order #{order_id} is already invoiced as {existing.number}"
            )

    @staticmethod
    def _load_order(tx: UnitOfWork, order_id: int) -> SaleDocument:
        order = tx.sales.get_by_id(order_id)
        if order is None or order.kind != SaleKind.ORDER:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    @staticmethod
    def _validate_new_sale(sale: SaleDocument, items: list[LineItem]) -> None:
        if sale.id is not None:
            raise ValidationError(f"Sale #{sale.id} is already persisted")
        if not items:
            raise ValidationError("A sale must contain at least one item")
        for item in items:
            if item.quantity.value <= 0:
                raise ValidationError(
                    f"Quantity for {item.product_name} must be positive"
                )
