"""CLI commands for stock levels."""

from __future__ import annotations

import click

from storeops.application.set_stock import SetStockHandler
from storeops.application.show_inventory import ShowInventoryHandler
from storeops.infrastructure.cli.context import CLI_ERRORS, AppContext


@click.command("set")
@click.option("--product", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.pass_obj
def inventory_set(obj: AppContext, product: str, quantity: int) -> None:
    """Set the stock level for a product."""
    handler = SetStockHandler(obj.app.uow)

    try:
        handler.handle(product_name=product, quantity=quantity)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product}' set to {quantity}")


@click.command("show")
@click.pass_obj
def inventory_show(obj: AppContext) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(obj.app.uow)

    try:
        lines = handler.handle()
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Price':>14} {'Stock':>8}")
    click.echo("-" * 51)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.price:>14} {line.stock:>8}"
        )
