"""Command-line interface for the product catalog.

Drives the same ProductCatalogService as the HTTP API, against the
database and cache described by the active configuration.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation

import typer
from rich.console import Console
from rich.table import Table

from product_catalog.api.utils.app_startup import configure_logging
from product_catalog.core.exceptions import CatalogError
from product_catalog.core.services import (
    DbSessionService,
    ProductCatalogService,
    RedisService,
)
from product_catalog.core.storage import build_product_cache
from product_catalog.entities.product import ProductDto, ProductRepository
from product_catalog.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="catalog",
    help="Product catalog service",
    rich_markup_mode="rich",
)
product_app = typer.Typer(help="Manage products")
app.add_typer(product_app, name="product")


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Log level for this run (stderr and log file)"
    ),
) -> None:
    """Product catalog service."""
    configure_logging(level=log_level.upper())


@contextmanager
def catalog_service() -> Iterator[ProductCatalogService]:
    """Yield a catalog service wired from configuration, closing it afterwards."""
    database_service = DbSessionService()
    database_service.create_all()
    redis_service = RedisService()
    cache = build_product_cache(get_config(), redis_service.get_client())
    session = database_service.get_session()
    try:
        yield ProductCatalogService(ProductRepository(session), cache)
    except CatalogError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    finally:
        session.close()
        redis_service.close()


def _parse_price(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise typer.BadParameter(f"{value!r} is not a decimal amount") from e


def _print_products(products: list[ProductDto]) -> None:
    table = Table(title="Products")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Price", justify="right", style="green")
    for product in products:
        table.add_row(str(product.id), product.name, str(product.price))
    console.print(table)


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    DbSessionService().create_all()
    console.print("[green]Database initialized[/green]")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to config)"),
    port: int | None = typer.Option(None, help="Port (defaults to config)"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "product_catalog.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        access_log=False,
    )


@product_app.command("list")
def list_products() -> None:
    """List all products."""
    with catalog_service() as service:
        _print_products(service.list_all())


@product_app.command("get")
def get_product(product_id: int = typer.Argument(..., help="Product ID")) -> None:
    """Show one product."""
    with catalog_service() as service:
        _print_products([service.get(product_id)])


@product_app.command("add")
def add_product(
    name: str = typer.Argument(..., help="Product name"),
    price: Decimal = typer.Argument(..., help="Product price", parser=_parse_price),
) -> None:
    """Create a product."""
    with catalog_service() as service:
        created = service.create(ProductDto(name=name, price=price))
        console.print(f"[green]Created product {created.id}[/green]")
        _print_products([created])


@product_app.command("update")
def update_product(
    product_id: int = typer.Argument(..., help="Product ID"),
    name: str = typer.Argument(..., help="New product name"),
    price: Decimal = typer.Argument(..., help="New product price", parser=_parse_price),
) -> None:
    """Replace a product's name and price."""
    with catalog_service() as service:
        _print_products([service.update(ProductDto(id=product_id, name=name, price=price))])


@product_app.command("rm")
def delete_product(product_id: int = typer.Argument(..., help="Product ID")) -> None:
    """Delete a product."""
    with catalog_service() as service:
        service.delete(product_id)
        console.print(f"[green]Deleted product {product_id}[/green]")


if __name__ == "__main__":
    app()
