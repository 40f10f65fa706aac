"""Parsing helpers for command-line item lists."""

from __future__ import annotations

import click

from storeops.application.dto import ItemSpec


def parse_items(raw: str) -> list[ItemSpec]:
    """Parse 'Widget:3,Gadget:5' into ItemSpec list."""
    specs: list[ItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(ItemSpec(product_name=name.strip(), quantity=qty))
    return specs
