"""CLI commands for checkout and order history."""

from __future__ import annotations

import json

import click

from shopassist.application.dto import OrderDTO
from shopassist.domain.exceptions import DomainException, InfrastructureError
from shopassist.infrastructure.bootstrap import (
    checkout_handler,
    show_orders_handler,
    working_memory_store,
)
from shopassist.infrastructure.config import Settings


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_id}  (status={dto.status})")
    click.echo(f"Placed:   {dto.date}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<28} {item.quantity:>5} "
            f"{'$' + str(item.price):>10} {'$' + str(item.line_total):>10}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<34} {'$' + str(dto.subtotal):>20}")
    click.echo(f"  {'Tax':<34} {'$' + str(dto.tax):>20}")
    click.echo(f"  {'Order Total':<34} {'$' + str(dto.total):>20}")


@click.command("checkout")
@click.option("--resource", "resource_id", required=True, help="Customer/session identity.")
@click.option(
    "--yes/--cancel",
    "confirm",
    default=True,
    help="Confirm the checkout (default) or cancel it.",
)
@click.pass_obj
def checkout(settings: Settings, resource_id: str, confirm: bool) -> None:
    """Place an order for everything in the cart."""
    handler = checkout_handler(settings)

    try:
        result = handler.handle(resource_id, confirm=confirm)
    except InfrastructureError as exc:
        raise click.ClickException(str(exc))

    if not result.success or result.order is None:
        raise click.ClickException(result.message)
    click.echo(result.message)
    click.echo()
    _display_order(result.order)


@click.command("list")
@click.option("--resource", "resource_id", required=True, help="Customer/session identity.")
@click.pass_obj
def orders_list(settings: Settings, resource_id: str) -> None:
    """List every order placed by a resource."""
    handler = show_orders_handler(settings)

    try:
        orders = handler.handle(resource_id)
    except InfrastructureError as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order ID':<26} {'Date':<33} {'Items':>5} {'Total':>10}")
    click.echo("-" * 77)
    for o in orders:
        click.echo(f"{o.order_id:<26} {o.date:<33} {len(o.items):>5} {'$' + str(o.total):>10}")


@click.command("show")
@click.option("--resource", "resource_id", required=True, help="Customer/session identity.")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.pass_obj
def orders_show(settings: Settings, resource_id: str, order_id: str) -> None:
    """Show a single order with its line items and totals."""
    handler = show_orders_handler(settings)

    try:
        order = handler.handle_one(resource_id, order_id)
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    _display_order(order)


@click.command("show")
@click.option("--resource", "resource_id", required=True, help="Customer/session identity.")
@click.pass_obj
def memory_show(settings: Settings, resource_id: str) -> None:
    """Print the raw stored document for a resource."""
    store = working_memory_store(settings)

    try:
        document = store.load_document(resource_id)
    except InfrastructureError as exc:
        raise click.ClickException(str(exc))

    click.echo(json.dumps(document, indent=2))
