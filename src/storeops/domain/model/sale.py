"""SaleDocument aggregate: website orders and POS/admin invoices.

Both kinds own an immutable list of line items and affect stock the same
way; they differ only in their status lifecycle and numbering prefix.
Use the ``create_order()`` / ``create_invoice()`` factories for new
documents. The ``__init__`` is intentionally simple so repositories can
reconstitute persisted sales without re-validating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storeops.domain.exceptions import AlreadyReturnedError, ValidationError
from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SaleKind(Enum):
    ORDER = "order"
    INVOICE = "invoice"


class SaleStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    DELIVERED = "delivered"
    PAID = "paid"
    CANCELLED = "cancelled"


class DeliveryLocation(Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"


PAYMENT_METHODS = ("cash", "card", "mobile")

# Allowed status transitions per document kind. Anything absent is illegal.
_TRANSITIONS: dict[SaleKind, dict[SaleStatus, tuple[SaleStatus, ...]]] = {
    SaleKind.ORDER: {
        SaleStatus.PENDING: (SaleStatus.CONFIRMED, SaleStatus.REJECTED),
        SaleStatus.CONFIRMED: (SaleStatus.DELIVERED,),
    },
    SaleKind.INVOICE: {
        SaleStatus.PENDING: (SaleStatus.PAID, SaleStatus.CANCELLED),
    },
}

# Order statuses in which no stock has been taken yet.
_STOCK_FREE_ORDER_STATUSES = (SaleStatus.PENDING, SaleStatus.REJECTED)


@dataclass(frozen=True)
class Customer:
    name: str
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class LineItem:
    """A product/quantity/price record captured at sale time.

    ``unit_price`` is what the customer paid per unit; ``regular_price`` is
    the list price at that moment (they differ when a discount applied).
    Neither ever changes after creation.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    regular_price: Money | None = None

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def list_price(self) -> Money:
        return self.regular_price if self.regular_price is not None else self.unit_price

    @staticmethod
    def snapshot(product: Product, quantity: int) -> LineItem:
        """Build a line item from the product's current prices."""
        return LineItem(
            product_id=product.id,
            product_name=product.name,
            quantity=Quantity(quantity),
            unit_price=product.effective_price,
            regular_price=product.price,
        )


@dataclass
class SaleDocument:
    """Aggregate root for orders and invoices."""

    id: int | None
    kind: SaleKind
    customer: Customer
    items: list[LineItem]
    status: SaleStatus
    delivery_charge: Money
    discount: Money
    number: str | None = None
    payment_method: str = "cash"
    is_pos: bool = False
    order_id: int | None = None
    notes: str | None = None
    is_returned: bool = False
    returned_at: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factories (used for NEW documents only) ------------------------------

    @staticmethod
    def create_order(
        customer: Customer,
        items: list[LineItem],
        delivery_charge: Money,
    ) -> SaleDocument:
        """Create a website order awaiting confirmation."""
        _require_customer_name(customer)
        if not customer.phone or not customer.phone.strip():
            raise ValidationError("Customer phone is required for orders")
        if not customer.address or not customer.address.strip():
            raise ValidationError("Customer address is required for orders")
        _require_items(items)

        return SaleDocument(
            id=None,
            kind=SaleKind.ORDER,
            customer=customer,
            items=list(items),
            status=SaleStatus.PENDING,
            delivery_charge=delivery_charge,
            discount=Money.zero(delivery_charge.currency),
        )

    @staticmethod
    def create_invoice(
        customer: Customer,
        items: list[LineItem],
        delivery_charge: Money,
        discount: Money,
        payment_method: str = "cash",
        is_pos: bool = False,
        order_id: int | None = None,
        notes: str | None = None,
        status: SaleStatus = SaleStatus.PAID,
    ) -> SaleDocument:
        """Create a POS or admin-issued invoice."""
        _require_customer_name(customer)
        _require_items(items)
        if payment_method not in PAYMENT_METHODS:
            raise ValidationError(
                f"Unknown payment method '{payment_method}' "
                f"(expected one of {', '.join(PAYMENT_METHODS)})"
            )
        if status not in (SaleStatus.PAID, SaleStatus.PENDING):
            raise ValidationError(f"Invoices cannot be created as {status.value}")

        invoice = SaleDocument(
            id=None,
            kind=SaleKind.INVOICE,
            customer=customer,
            items=list(items),
            status=status,
            delivery_charge=delivery_charge,
            discount=discount,
            payment_method=payment_method,
            is_pos=is_pos,
            order_id=order_id,
            notes=notes,
        )
        if discount > invoice.subtotal + delivery_charge:
            raise ValidationError(
                f"Discount {discount} exceeds invoice amount "
                f"{invoice.subtotal + delivery_charge}"
            )
        return invoice

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: SaleStatus) -> bool:
        return new_status in _TRANSITIONS[self.kind].get(self.status, ())

    def transition_to(self, new_status: SaleStatus, at: datetime | None = None) -> None:
        """Move to *new_status*; illegal transitions raise ValidationError.

        Stock side effects of entering CONFIRMED are the caller's job and
        must happen in the same transaction.
        """
        if not self.can_transition_to(new_status):
            raise ValidationError(
                f"Cannot move {self.kind.value} #{self.id} from "
                f"{self.status.value} to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = at or _utcnow()

    def ensure_returnable(self) -> None:
        if self.is_returned:
            raise AlreadyReturnedError(self.id)  # type: ignore[arg-type]
        if self.kind == SaleKind.ORDER and self.status in _STOCK_FREE_ORDER_STATUSES:
            raise ValidationError(
                f"Order #{self.id} is {self.status.value}; no stock was taken to return"
            )

    def mark_returned(self, at: datetime | None = None) -> None:
        self.ensure_returnable()
        now = at or _utcnow()
        self.is_returned = True
        self.returned_at = now
        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def currency(self) -> str:
        return self.delivery_charge.currency

    @property
    def subtotal(self) -> Money:
        return Money.total((item.subtotal for item in self.items), self.currency)

    @property
    def total(self) -> Money:
        return self.subtotal + self.delivery_charge - self.discount

    @property
    def total_units(self) -> int:
        return sum(item.quantity.value for item in self.items)


def _require_customer_name(customer: Customer) -> None:
    if not customer.name or not customer.name.strip():
        raise ValidationError("Customer name is required")


def _require_items(items: list[LineItem]) -> None:
    if not items:
        raise ValidationError("A sale must contain at least one item")
