"""Abstract repository for the SaleDocument aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storeops.domain.model.sale import SaleDocument, SaleKind


class SaleRepository(ABC):

    @abstractmethod
    def add(self, sale: SaleDocument) -> SaleDocument:
        """Insert a new sale header and all its line items.

        Assigns ``sale.id`` and returns the same object. Raises
        DuplicateDocumentNumberError if ``sale.number`` is taken.
        """

    @abstractmethod
    def get_by_id(self, sale_id: int) -> SaleDocument | None:
        """Return a sale with its line items, or None if not found."""

    @abstractmethod
    def list_all(self, kind: SaleKind | None = None) -> list[SaleDocument]:
        """Return sales, newest first, optionally of one kind only."""

    @abstractmethod
    def find_invoice_for_order(self, order_id: int) -> SaleDocument | None:
        """Return the invoice issued for order *order_id*, or None."""

    @abstractmethod
    def update(self, sale: SaleDocument) -> None:
        """Persist header changes (status, return flag, timestamps).

        Line items are immutable and are not rewritten.
        """

    @abstractmethod
    def count_created_between(
        self, kind: SaleKind, start: datetime, end: datetime
    ) -> int:
        """Count sales of *kind* with ``start <= created_at < end``."""
