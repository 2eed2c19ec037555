"""CLI entry point for the storefront."""

from __future__ import annotations

import asyncio

import click

from .core.config import Settings, load_settings
from .core.errors import OrderNotFoundError
from .domain.checkout import Order
from .observability.logger import setup_logging
from .storage.sql import Database, OrderRepository


def _bootstrap(config: str | None, database_url: str | None) -> Settings:
    overrides: dict = {}
    if database_url:
        overrides["database"] = {"url": database_url}
    settings = load_settings(config_path=config, overrides=overrides)
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
        sql_echo=settings.database.echo,
    )
    return settings


def _print_order(order: Order) -> None:
    click.echo(f"Order {order.id} (customer {order.customer_id})")
    for item in order.items:
        click.echo(
            f"  {item.id:12s} {item.name:24s} {item.quantity:>4d} x {item.price:>10} "
            f"= {item.subtotal():>10}"
        )
    click.echo(f"  Total: {order.total()}")


@click.group()
def main() -> None:
    """Storefront orders and catalogue."""


@main.command("init-db")
@click.option("--config", default=None, help="Config file path")
@click.option("--database-url", default=None, help="Database URL override")
def init_db(config: str | None, database_url: str | None) -> None:
    """Create all tables."""
    settings = _bootstrap(config, database_url)

    async def _run() -> None:
        db = Database.from_config(settings.database)
        try:
            await db.create_all()
        finally:
            await db.dispose()

    asyncio.run(_run())
    click.echo("Database initialised.")


@main.group()
def orders() -> None:
    """Inspect stored orders."""


@orders.command("list")
@click.option("--config", default=None, help="Config file path")
@click.option("--database-url", default=None, help="Database URL override")
def list_orders(config: str | None, database_url: str | None) -> None:
    """List every stored order with its total."""
    settings = _bootstrap(config, database_url)

    async def _run() -> list[Order]:
        db = Database.from_config(settings.database)
        try:
            return await OrderRepository(db).find_all()
        finally:
            await db.dispose()

    found = asyncio.run(_run())
    if not found:
        click.echo("No orders found.")
        return
    for order in found:
        click.echo(f"{order.id:12s} {order.customer_id:12s} {len(order.items):>3d} items  {order.total()}")


@orders.command("show")
@click.argument("order_id")
@click.option("--config", default=None, help="Config file path")
@click.option("--database-url", default=None, help="Database URL override")
def show_order(order_id: str, config: str | None, database_url: str | None) -> None:
    """Show one order with its items."""
    settings = _bootstrap(config, database_url)

    async def _run() -> Order:
        db = Database.from_config(settings.database)
        try:
            return await OrderRepository(db).find(order_id)
        finally:
            await db.dispose()

    try:
        order = asyncio.run(_run())
    except OrderNotFoundError as exc:
        click.echo(str(exc), err=True)
        raise SystemExit(1)
    _print_order(order)
