"""CLI commands for the Product entity."""

from __future__ import annotations

import click

from catalog.application.create_product import CreateProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.dto import ProductDTO
from catalog.application.get_product import GetProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import CatalogError
from catalog.domain.model.identifier import UNSET, identifier_from_text
from catalog.domain.model.product import Product, to_price
from catalog.infrastructure.bootstrap import product_repository


def _print_product(dto: ProductDTO) -> None:
    click.echo(f"ID:    {dto.id_text}")
    click.echo(f"Name:  {dto.product_name}")
    click.echo(f"Price: ${dto.price:.2f}")
    click.echo(f"Stock: {dto.stock}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--id", "product_id", default=None, help="Caller-supplied product ID.")
def product_add(name: str, price: str, stock: int, product_id: str | None) -> None:
    """Add a new product to the catalog."""
    try:
        with product_repository() as repo:
            product = CreateProductHandler(repo).handle(
                Product.create(
                    name=name,
                    price=price,
                    stock=stock,
                    product_id=identifier_from_text(product_id) if product_id else UNSET,
                )
            )
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    dto = ProductDTO.from_product(product)
    click.echo(f"Product #{dto.id_text} '{dto.product_name}' added at ${dto.price:.2f}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        with product_repository() as repo:
            products = ListProductsHandler(repo).handle()
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 66)
    for dto in map(ProductDTO.from_product, products):
        click.echo(
            f"{dto.id_text:<26} {dto.product_name:<20} {dto.price:>10.2f} {dto.stock:>7}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    try:
        with product_repository() as repo:
            product = GetProductHandler(repo).handle(product_id)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    _print_product(ProductDTO.from_product(product))


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(
    product_id: str, name: str | None, price: str | None, stock: int | None
) -> None:
    """Change a product's name, price or stock."""
    if name is None and price is None and stock is None:
        raise click.UsageError("Nothing to update: pass --name, --price or --stock")

    try:
        with product_repository() as repo:
            product = GetProductHandler(repo).handle(product_id)
            changed = Product(
                name=product.name if name is None else name,
                price=product.price if price is None else to_price(price),
                stock=product.stock if stock is None else stock,
                id=product.id,
            )
            UpdateProductHandler(repo).handle(changed)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_remove(product_id: str) -> None:
    """Delete a product from the catalog."""
    try:
        with product_repository() as repo:
            DeleteProductHandler(repo).handle(product_id)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed")
