"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.application.dto import ProductDraft
from catalog.domain.exceptions import DomainException
from catalog.infrastructure.bootstrap import product_service


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, type=float, help="Price (e.g. 15.00).")
def product_add(product_id: str, name: str, price: float) -> None:
    """Add a new product to the catalog."""
    service = product_service()

    try:
        product = service.create_product(ProductDraft(id=product_id, name=name, price=price))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        service.close()

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price:.2f}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    service = product_service()
    try:
        products = service.get_all_products()
    finally:
        service.close()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<20} {'Price':>10}  Created")
    click.echo("-" * 68)
    for p in products:
        click.echo(
            f"{p.id:<10} {p.name:<20} {p.price:>10.2f}  {p.created_at.isoformat()}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    service = product_service()

    try:
        product = service.get_product_by_id(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        service.close()

    click.echo(str(product))


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--price", required=True, type=float, help="New price (e.g. 29.99).")
def product_update(product_id: str, name: str, price: float) -> None:
    """Replace a product's name and price."""
    service = product_service()

    try:
        product = service.update_product(
            product_id, ProductDraft(id=product_id, name=name, price=price)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        service.close()

    click.echo(f"Product #{product.id} updated: '{product.name}' at {product.price:.2f}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    service = product_service()

    try:
        service.delete_product(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        service.close()

    click.echo(f"Product #{product_id} deleted")
