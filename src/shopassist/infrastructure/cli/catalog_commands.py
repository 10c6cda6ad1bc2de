"""CLI commands for catalog lookup."""

from __future__ import annotations

from decimal import Decimal

import click

from shopassist.application.dto import ProductFilter
from shopassist.domain.exceptions import DomainException, InfrastructureError
from shopassist.infrastructure.bootstrap import get_product_handler, search_products_handler
from shopassist.infrastructure.config import Settings


@click.command("search")
@click.option("--query", "-q", default=None, help="Text to match in name or description.")
@click.option("--category", default=None, help="Category (case-insensitive).")
@click.option("--min-price", type=Decimal, default=None, help="Inclusive lower price bound.")
@click.option("--max-price", type=Decimal, default=None, help="Inclusive upper price bound.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum results.")
@click.pass_obj
def catalog_search(
    settings: Settings,
    query: str | None,
    category: str | None,
    min_price: Decimal | None,
    max_price: Decimal | None,
    limit: int | None,
) -> None:
    """Search in-stock products."""
    handler = search_products_handler(settings)
    result = handler.handle(
        ProductFilter(
            query=query,
            category=category,
            min_price=min_price,
            max_price=max_price,
            limit=limit or settings.search_limit,
        )
    )

    click.echo(result.message)
    if not result.products:
        return
    click.echo()
    click.echo(f"  {'ID':<8} {'Name':<28} {'Category':<12} {'Price':>10} {'Stock':>6}")
    click.echo(f"  {'-'*68}")
    for p in result.products:
        click.echo(
            f"  {p.id:<8} {p.name:<28} {p.category:<12} {'$' + str(p.price):>10} {p.stock:>6}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def catalog_show(settings: Settings, product_id: str) -> None:
    """Show a single product."""
    handler = get_product_handler(settings)

    try:
        product = handler.handle(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{product.name}  ({product.id})")
    click.echo(f"Category: {product.category}")
    click.echo(f"Price:    ${product.price}")
    click.echo(f"Stock:    {product.stock}")
    if product.description:
        click.echo()
        click.echo(product.description)
