"""Abstract unit of work: the transaction-scoping primitive.

Repositories are only reachable through an open transaction::

    with uow.transaction() as tx:
        product = tx.products.get_by_id("1")
        product.reduce_stock(2)
        tx.products.save(product)

Leaving the block normally commits every change made through ``tx``;
any exception rolls all of them back and propagates unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.repository.sale_repository import SaleRepository


class UnitOfWork(ABC):

    products: ProductRepository
    sales: SaleRepository

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWork]:
        self._begin()
        try:
            yield self
        except BaseException:
            self._rollback()
            raise
        else:
            self._commit()

    @abstractmethod
    def _begin(self) -> None:
        """Open a transaction and bind ``products`` / ``sales`` to it."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every change since ``_begin`` durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every change since ``_begin``."""
