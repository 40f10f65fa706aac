"""Shared formatting for showing sales on the terminal."""

from __future__ import annotations

import click

from storeops.application.dto import SaleDTO


def display_sale(dto: SaleDTO) -> None:
    flags = []
    if dto.is_pos:
        flags.append("POS")
    if dto.order_id is not None:
        flags.append(f"for order #{dto.order_id}")
    if dto.is_returned:
        flags.append(f"RETURNED {dto.returned_at}")
    suffix = f"  [{', '.join(flags)}]" if flags else ""

    click.echo(f"{dto.kind.capitalize()} #{dto.id} {dto.number}  (status={dto.status}){suffix}")
    click.echo(f"Customer: {dto.customer_name}")
    if dto.customer_phone:
        click.echo(f"Phone:    {dto.customer_phone}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Subtotal':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.subtotal:>14}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>28}")
    click.echo(f"  {'Delivery':<27} {dto.delivery_charge:>28}")
    click.echo(f"  {'Discount':<27} {dto.discount:>28}")
    click.echo(f"  {'Total':<27} {dto.total:>28}")


def display_sale_list(dtos: list[SaleDTO], empty_message: str) -> None:
    if not dtos:
        click.echo(empty_message)
        return

    click.echo(f"{'ID':<6} {'Number':<16} {'Customer':<20} {'Status':<10} {'Total':>14}")
    click.echo("-" * 70)
    for dto in dtos:
        status = "returned" if dto.is_returned else dto.status
        click.echo(
            f"{dto.id:<6} {dto.number:<16} {dto.customer_name:<20} "
            f"{status:<10} {dto.total:>14}"
        )
