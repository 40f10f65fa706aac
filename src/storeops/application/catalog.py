"""Shared lookup: resolve the items a customer asked for against the catalog."""

from __future__ import annotations

from storeops.application.dto import ItemSpec
from storeops.domain.exceptions import EntityNotFoundError, ValidationError
from storeops.domain.model.sale import LineItem
from storeops.domain.repository.product_repository import ProductRepository


def resolve_line_items(
    product_repo: ProductRepository, item_specs: list[ItemSpec]
) -> list[LineItem]:
    """Resolve each product name and snapshot its *current* prices.

    Stock is not checked here; that happens inside the sale transaction.
    """
    if not item_specs:
        raise ValidationError("A sale must contain at least one item")

    line_items: list[LineItem] = []
    for spec in item_specs:
        product = product_repo.get_by_name(spec.product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
        line_items.append(LineItem.snapshot(product, spec.quantity))
    return line_items
