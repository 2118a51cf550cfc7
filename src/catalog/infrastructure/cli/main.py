import click
import uvicorn

from catalog.infrastructure.bootstrap import product_service
from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from catalog.infrastructure.config import Settings
from catalog.infrastructure.http.app import create_app
from catalog.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Product Catalog"""
    configure_logging(Settings().log_level)


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: $HOST).")
@click.option("--port", default=None, type=int, help="Port (default: $PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    settings = Settings()
    app = create_app(product_service(settings))
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
