"""CLI commands for the Cart."""

from __future__ import annotations

import click

from shopassist.application.dto import CartResultDTO
from shopassist.domain.exceptions import InfrastructureError
from shopassist.domain.model.cart_commands import (
    AddToCart,
    CartCommand,
    ClearCart,
    RemoveFromCart,
    UpdateCartItem,
    ViewCart,
)
from shopassist.infrastructure.bootstrap import manage_cart_handler
from shopassist.infrastructure.config import Settings

resource_option = click.option(
    "--resource", "resource_id", required=True, help="Customer/session identity."
)


def _run(settings: Settings, resource_id: str, command: CartCommand) -> None:
    handler = manage_cart_handler(settings)

    try:
        result = handler.handle(resource_id, command)
    except InfrastructureError as exc:
        raise click.ClickException(str(exc))

    if not result.success:
        raise click.ClickException(result.message)
    click.echo(result.message)
    _display_cart(result)


def _display_cart(result: CartResultDTO) -> None:
    """Shared formatting for displaying a cart."""
    if not result.cart:
        return
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*55}")
    for item in result.cart:
        click.echo(
            f"  {item.name:<28} {item.quantity:>5} "
            f"{'$' + str(item.price):>10} {'$' + str(item.line_total):>10}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Cart Total':<34} {'$' + str(result.cart_total):>20}")


@click.command("add")
@resource_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", type=int, default=1, show_default=True, help="Quantity to add.")
@click.pass_obj
def cart_add(settings: Settings, resource_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    _run(settings, resource_id, AddToCart(product_id, quantity))


@click.command("remove")
@resource_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def cart_remove(settings: Settings, resource_id: str, product_id: str) -> None:
    """Remove a product from the cart."""
    _run(settings, resource_id, RemoveFromCart(product_id))


@click.command("update")
@resource_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", type=int, required=True, help="New quantity (0 removes).")
@click.pass_obj
def cart_update(settings: Settings, resource_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""
    _run(settings, resource_id, UpdateCartItem(product_id, quantity))


@click.command("view")
@resource_option
@click.pass_obj
def cart_view(settings: Settings, resource_id: str) -> None:
    """Show the cart and its total."""
    _run(settings, resource_id, ViewCart())


@click.command("clear")
@resource_option
@click.pass_obj
def cart_clear(settings: Settings, resource_id: str) -> None:
    """Empty the cart."""
    _run(settings, resource_id, ClearCart())
