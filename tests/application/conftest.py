from datetime import datetime, timezone

import pytest

from storeops.application.inventory_transaction_manager import (
    InventoryTransactionManager,
)
from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork([
        Product(id="1", name="Widget", price=Money.of("15.00"), stock=10),
        Product(id="2", name="Gadget", price=Money.of("25.00"), stock=3),
        Product(
            id="3", name="Gizmo",
            price=Money.of("100.00"), discounted_price=Money.of("80.00"), stock=5,
        ),
    ])


@pytest.fixture
def manager(uow) -> InventoryTransactionManager:
    return InventoryTransactionManager(uow, clock=lambda: NOW)


@pytest.fixture
def now() -> datetime:
    return NOW
