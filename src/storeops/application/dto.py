"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeops.domain.model.sale import SaleDocument

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ItemSpec:
    """Input: what the customer asked for (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    regular_price: str
    unit_price: str  # formatted, e.g. "15.00 BDT"
    subtotal: str


@dataclass(frozen=True)
class SaleDTO:
    """Output: a complete order or invoice as displayed to the user."""

    id: int
    kind: str
    number: str
    customer_name: str
    customer_phone: str | None
    status: str
    items: list[LineItemDTO]
    subtotal: str
    delivery_charge: str
    discount: str
    total: str
    payment_method: str
    is_pos: bool
    order_id: int | None
    is_returned: bool
    returned_at: str | None
    created_at: str


def to_sale_dto(sale: SaleDocument) -> SaleDTO:
    return SaleDTO(
        id=sale.id,  # type: ignore[arg-type]
        kind=sale.kind.value,
        number=sale.number or "",
        customer_name=sale.customer.name,
        customer_phone=sale.customer.phone,
        status=sale.status.value,
        items=[
            LineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                regular_price=str(item.list_price),
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in sale.items
        ],
        subtotal=str(sale.subtotal),
        delivery_charge=str(sale.delivery_charge),
        discount=str(sale.discount),
        total=str(sale.total),
        payment_method=sale.payment_method,
        is_pos=sale.is_pos,
        order_id=sale.order_id,
        is_returned=sale.is_returned,
        returned_at=(
            sale.returned_at.strftime(_TIMESTAMP_FORMAT) if sale.returned_at else None
        ),
        created_at=sale.created_at.strftime(_TIMESTAMP_FORMAT),
    )
