"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storeops.application.add_product import AddProductHandler
from storeops.application.delete_product import DeleteProductHandler
from storeops.application.update_product import UpdateProductHandler
from storeops.infrastructure.cli.context import CLI_ERRORS, AppContext


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Regular price (e.g. 1500.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Initial stock.")
@click.option("--discounted-price", default=None, help="Sale price, if discounted.")
@click.option("--category", default="general", show_default=True, help="Category.")
@click.pass_obj
def product_add(
    obj: AppContext,
    name: str,
    price: str,
    stock: int,
    discounted_price: str | None,
    category: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(obj.app.uow, currency=obj.settings.currency)

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            discounted_price=discounted_price,
            category=category,
        )
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(obj: AppContext) -> None:
    """List all products in the catalog."""
    try:
        with obj.app.uow.transaction() as tx:
            products = tx.products.list_all()
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>14} {'Sale price':>14}")
    click.echo("-" * 57)
    for p in products:
        sale_price = str(p.discounted_price) if p.discounted_price else "-"
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>14} {sale_price:>14}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New regular price.")
@click.option("--discounted-price", default=None, help="New sale price (omit to clear).")
@click.pass_obj
def product_update(
    obj: AppContext, product_id: str, price: str, discounted_price: str | None
) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(obj.app.uow)

    try:
        handler.handle(
            product_id=product_id, new_price=price, discounted_price=discounted_price
        )
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to {price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(obj: AppContext, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(obj.app.uow)

    try:
        handler.handle(product_id)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
