from dataclasses import replace

import click

from storeops.config import BACKENDS, ConfigurationError, load_settings
from storeops.infrastructure.cli.context import AppContext
from storeops.infrastructure.cli.inventory_commands import inventory_set, inventory_show
from storeops.infrastructure.cli.invoice_commands import (
    invoice_create,
    invoice_list,
    invoice_next_number,
    invoice_return,
    invoice_show,
)
from storeops.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from storeops.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storeops.logging_setup import configure_logging


@click.group()
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default=None,
    help="Override STOREOPS_BACKEND for this run.",
)
@click.pass_context
def cli(ctx: click.Context, backend: str | None) -> None:
    """storeops: stock, orders and invoices for a small shop"""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    if backend is not None:
        settings = replace(settings, backend=backend)

    configure_logging(settings.log_level)
    ctx.obj = AppContext(settings)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


@cli.group()
def order() -> None:
    """Manage website orders."""


@cli.group()
def invoice() -> None:
    """Manage invoices and POS sales."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
invoice.add_command(invoice_create)
invoice.add_command(invoice_list)
invoice.add_command(invoice_next_number)
invoice.add_command(invoice_return)
invoice.add_command(invoice_show)
