import click

from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_remove,
    product_show,
    product_update,
)
from catalog.infrastructure.config import get_settings
from catalog.infrastructure.logging_setup import configure_logging


@click.group()
def cli() -> None:
    """Product Catalog: CRUD over a relational or document store"""
    configure_logging(get_settings())


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: CATALOG_SERVER_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: CATALOG_SERVER_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from catalog.infrastructure.http.app import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=host or settings.server_host,
        port=port or settings.server_port,
        log_config=None,
    )


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_remove)
product.add_command(product_show)
product.add_command(product_update)
