"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The storage backend is
chosen here, once, from Settings and handed to everything that needs it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from storeops.application.inventory_transaction_manager import (
    InventoryTransactionManager,
)
from storeops.config import Settings
from storeops.domain.model.sale import DeliveryLocation
from storeops.domain.repository.unit_of_work import UnitOfWork
from storeops.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from storeops.infrastructure.persistence.sql_unit_of_work import (
    SqlUnitOfWork,
    build_engine,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Application:
    settings: Settings
    uow: UnitOfWork
    manager: InventoryTransactionManager

    @property
    def delivery_charges(self) -> dict[DeliveryLocation, Decimal]:
        return {
            DeliveryLocation.INSIDE: self.settings.delivery_charge_inside,
            DeliveryLocation.OUTSIDE: self.settings.delivery_charge_outside,
        }


def build_unit_of_work(settings: Settings) -> UnitOfWork:
    if settings.backend == "json":
        logger.debug("Using JSON store at %s", settings.data_file)
        return JsonUnitOfWork(settings.data_file)
    logger.debug("Using SQL store at %s", settings.database_url)
    return SqlUnitOfWork(build_engine(settings.database_url, settings.isolation_level))


def build_application(settings: Settings) -> Application:
    uow = build_unit_of_work(settings)
    manager = InventoryTransactionManager(
        uow,
        invoice_prefix=settings.invoice_prefix,
        order_prefix=settings.order_prefix,
        document_number_retries=settings.document_number_retries,
        atomic_confirmation=settings.atomic_confirmation,
    )
    return Application(settings=settings, uow=uow, manager=manager)
