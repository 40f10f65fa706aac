"""Application service: Show / List Sales use cases (queries)."""

from __future__ import annotations

from storeops.application.dto import SaleDTO, to_sale_dto
from storeops.domain.exceptions import EntityNotFoundError
from storeops.domain.model.sale import SaleKind
from storeops.domain.repository.unit_of_work import UnitOfWork


class ShowSaleHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sale_id: int, kind: SaleKind | None = None) -> SaleDTO:
        with self._uow.transaction() as tx:
            sale = tx.sales.get_by_id(sale_id)
        if sale is None or (kind is not None and sale.kind != kind):
            label = kind.value.capitalize() if kind else "Sale"
            raise EntityNotFoundError(f"{label} #{sale_id} not found")
        return to_sale_dto(sale)


class ListSalesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, kind: SaleKind | None = None) -> list[SaleDTO]:
        with self._uow.transaction() as tx:
            sales = tx.sales.list_all(kind)
        return [to_sale_dto(sale) for sale in sales]
