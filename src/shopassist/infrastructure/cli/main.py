from __future__ import annotations

from pathlib import Path

import click

from shopassist.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_update,
    cart_view,
)
from shopassist.infrastructure.cli.catalog_commands import catalog_search, catalog_show
from shopassist.infrastructure.cli.order_commands import (
    checkout,
    memory_show,
    orders_list,
    orders_show,
)
from shopassist.infrastructure.config import get_settings
from shopassist.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding products.json and working_memory.json.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """shopassist: shopping cart and checkout state engine"""
    settings = get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    configure_logging(settings.log_level, json_output=settings.log_json)
    ctx.obj = settings


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


@cli.group()
def cart() -> None:
    """Manage a resource's cart."""


@cli.group()
def orders() -> None:
    """Inspect order history."""


@cli.group()
def memory() -> None:
    """Inspect stored working memory."""


# Register subcommands
catalog.add_command(catalog_search)
catalog.add_command(catalog_show)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_update)
cart.add_command(cart_view)
cli.add_command(checkout)
orders.add_command(orders_list)
orders.add_command(orders_show)
memory.add_command(memory_show)
