"""CLI commands for invoices and POS sales."""

from __future__ import annotations

import click

from storeops.application.create_invoice import CreateInvoiceHandler
from storeops.application.return_sale import ReturnSaleHandler
from storeops.application.show_sale import ListSalesHandler, ShowSaleHandler
from storeops.domain.model.sale import PAYMENT_METHODS, Customer, SaleKind
from storeops.infrastructure.cli.context import CLI_ERRORS, AppContext
from storeops.infrastructure.cli.display import display_sale, display_sale_list
from storeops.infrastructure.cli.parsing import parse_items


@click.command("create")
@click.option("--customer", default=None, help="Customer name (POS sales).")
@click.option("--phone", default=None, help="Customer phone.")
@click.option("--address", default=None, help="Customer address.")
@click.option("--items", "items_str", default=None, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--order", "order_id", default=None, type=int, help="Invoice an existing order.")
@click.option("--discount", default="0", show_default=True, help="Discount amount.")
@click.option("--delivery-charge", default=None, help="Delivery charge (POS sales; default 0).")
@click.option(
    "--payment",
    type=click.Choice(PAYMENT_METHODS),
    default="cash",
    show_default=True,
    help="Payment method.",
)
@click.option("--notes", default=None, help="Free-text notes.")
@click.pass_obj
def invoice_create(
    obj: AppContext,
    customer: str | None,
    phone: str | None,
    address: str | None,
    items_str: str | None,
    order_id: int | None,
    discount: str,
    delivery_charge: str | None,
    payment: str,
    notes: str | None,
) -> None:
    """Issue an invoice.

    With --items: a POS sale that takes stock immediately.
    With --order: an invoice for a confirmed order (stock already taken).
    """
    if (items_str is None) == (order_id is None):
        raise click.UsageError("Give exactly one of --items or --order.")
    if items_str is not None and not customer:
        raise click.UsageError("--customer is required with --items.")
    if order_id is not None and delivery_charge is not None:
        raise click.UsageError(
            "--delivery-charge cannot be used with --order; the order's charge applies."
        )

    handler = CreateInvoiceHandler(
        obj.app.uow, obj.app.manager, currency=obj.settings.currency
    )

    try:
        if order_id is not None:
            dto = handler.handle_for_order(
                order_id, discount=discount, payment_method=payment, notes=notes
            )
        else:
            dto = handler.handle(
                customer=Customer(name=customer, phone=phone, address=address),
                item_specs=parse_items(items_str),
                discount=discount,
                delivery_charge=delivery_charge or "0",
                payment_method=payment,
                is_pos=True,
                notes=notes,
            )
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice #{dto.id} {dto.number} created  (total={dto.total})")


@click.command("show")
@click.option("--id", "invoice_id", required=True, type=int, help="Invoice ID to display.")
@click.pass_obj
def invoice_show(obj: AppContext, invoice_id: int) -> None:
    """Show details of an invoice."""
    handler = ShowSaleHandler(obj.app.uow)

    try:
        dto = handler.handle(invoice_id, kind=SaleKind.INVOICE)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    display_sale(dto)


@click.command("list")
@click.pass_obj
def invoice_list(obj: AppContext) -> None:
    """List invoices, newest first."""
    handler = ListSalesHandler(obj.app.uow)

    try:
        dtos = handler.handle(SaleKind.INVOICE)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    display_sale_list(dtos, "No invoices found.")


@click.command("return")
@click.option("--id", "sale_id", required=True, type=int, help="Invoice or order ID.")
@click.pass_obj
def invoice_return(obj: AppContext, sale_id: int) -> None:
    """Return a sale and put its units back in stock."""
    handler = ReturnSaleHandler(obj.app.manager)

    try:
        dto = handler.handle(sale_id)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.kind.capitalize()} #{dto.id} {dto.number} returned, stock restored.")


@click.command("next-number")
@click.pass_obj
def invoice_next_number(obj: AppContext) -> None:
    """Show the number the next invoice will get."""
    try:
        number = obj.app.manager.next_document_number(SaleKind.INVOICE)
    except CLI_ERRORS as exc:
        raise click.ClickException(str(exc))

    click.echo(number)
