"""CLI commands for website orders."""

from __future__ import annotations

import click

from storeops.application.create_order import CreateOrderHandler
from storeops.application.show_sale import ListSalesHandler, ShowSaleHandler
from storeops.application.update_order_status import UpdateOrderStatusHandler
from storeops.domain.model.sale import Customer, DeliveryLocation, SaleKind
from storeops.infrastructure.cli.context import CLI_ERRORS, AppContext
from storeops.infrastructure.cli.display import display_sale, display_sale_list
from storeops.infrastructure.cli.parsing import parse_items

_ORDER_STATUSES = ("confirmed", "rejected", "delivered")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option(
    "--location",
    type=click.Choice([loc.value for loc in DeliveryLocation]),
    default=DeliveryLocation.INSIDE.value,
    show_default=True,
    help="Delivery location (sets the delivery charge).",
)
@click.pass_obj
def order_create(
    obj: AppContext, customer: str, phone: str, address: str, items: str, location: str
) -> None:
    """Create a new website order (pending, no stock taken yet)."""
    specs = parse_items(items)

    handler = CreateOrderHandler(
        obj.app.uow,
        obj.app.manager,
        delivery_charges=obj.app.delivery_charges,
        currency=obj.settings.currency,
    )

    try:
        dto = handler.handle(
            customer=Customer(name=customer, phone=phone, address=address),
            item_specs=specs,
            delivery_location=location,
        )
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} {dto.number} created  (status={dto.status})")
    click.echo(f"Total: {dto.total}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(obj: AppContext, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowSaleHandler(obj.app.uow)

    try:
        dto = handler.handle(order_id, kind=SaleKind.ORDER)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    display_sale(dto)


@click.command("list")
@click.pass_obj
def order_list(obj: AppContext) -> None:
    """List orders, newest first."""
    handler = ListSalesHandler(obj.app.uow)

    try:
        dtos = handler.handle(SaleKind.ORDER)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    display_sale_list(dtos, "No orders found.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status", "status", required=True, type=click.Choice(_ORDER_STATUSES), help="New status."
)
@click.pass_obj
def order_status(obj: AppContext, order_id: int, status: str) -> None:
    """Move an order to a new status (confirming takes its stock)."""
    handler = UpdateOrderStatusHandler(obj.app.uow, obj.app.manager)

    try:
        dto = handler.handle(order_id, status)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    if dto.status == "confirmed":
        click.echo(f"Order #{order_id} confirmed, stock reduced.")
    else:
        click.echo(f"Order #{order_id} is now {dto.status}.")
