"""Command-line entry point for the order desk."""

import sys
from collections.abc import Callable
from typing import TypeVar

import click
import structlog

from orderflow.application.common.pagination import MAX_PAGE_SIZE, Pagination
from orderflow.application.ordering.use_cases import (
    CancelOrderCommand,
    GetOrderQuery,
    ListOrdersQuery,
    OrderLineInput,
    PayOrderCommand,
    PlaceOrderCommand,
    ShipOrderCommand,
)
from orderflow.config import Settings, configure_logging, get_settings
from orderflow.core import container
from orderflow.database import create_tables, initialize_database
from orderflow.domain.common.exceptions import DomainError
from orderflow.domain.ordering.entities import Order, OrderStatus
from orderflow.exceptions import OrderflowError
from orderflow.infrastructure.common.di import session_scope
from orderflow.infrastructure.ordering.schemas import OrderResponse
from orderflow.infrastructure.ordering.workers import run_shipment_worker

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class OrderLineParam(click.ParamType):
    """Parses ``SKU:QUANTITY:UNIT_PRICE_CENTS``."""

    name = "line"

    def convert(
        self, value: object, param: click.Parameter | None, ctx: click.Context | None
    ) -> OrderLineInput:
        if isinstance(value, OrderLineInput):
            return value
        parts = str(value).rsplit(":", 2)
        if len(parts) != 3:
            self.fail(f"{value!r} is not SKU:QUANTITY:UNIT_PRICE_CENTS", param, ctx)
        sku, quantity, price = parts
        try:
            return OrderLineInput(sku=sku, quantity=int(quantity), unit_price_cents=int(price))
        except ValueError:
            self.fail(f"{value!r} has a non-integer quantity or price", param, ctx)


def _run(action: Callable[[], T]) -> T:
    """Run a use case inside a session and turn failures into CLI errors."""
    try:
        with session_scope():
            return action()
    except (OrderflowError, DomainError) as e:
        raise click.ClickException(e.message) from e
    except Exception as e:
        logger.exception("cli_command_failed")
        raise click.ClickException("An unexpected error occurred.") from e


def _echo_order(order: Order) -> None:
    click.echo(OrderResponse.from_entity(order).model_dump_json(indent=2))


@click.group()
@click.option(
    "--database-url",
    default=None,
    help="Database URL; defaults to the DATABASE_URL setting.",
)
def cli(database_url: str | None) -> None:
    """Place, pay, ship and cancel orders."""
    settings = get_settings()
    if database_url:
        settings = Settings(DATABASE_URL=database_url)
    configure_logging(settings.ENVIRONMENT, stream=sys.stderr)
    initialize_database(settings)


@cli.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    create_tables()
    click.echo("Database tables created.")


@cli.command()
@click.option("--email", "customer_email", required=True, help="Customer email.")
@click.option("--address", "shipping_address", required=True, help="Shipping address.")
@click.option("--currency", default="EUR", show_default=True, help="ISO 4217 currency code.")
@click.option(
    "--line",
    "lines",
    type=OrderLineParam(),
    multiple=True,
    required=True,
    help="Order line as SKU:QUANTITY:UNIT_PRICE_CENTS; repeatable.",
)
def place(
    customer_email: str,
    shipping_address: str,
    currency: str,
    lines: tuple[OrderLineInput, ...],
) -> None:
    """Place a new order."""
    command = PlaceOrderCommand(
        customer_email=customer_email,
        shipping_address=shipping_address,
        currency=currency,
        lines=lines,
    )
    _echo_order(_run(lambda: container.place_order_use_case().execute(command)))


@cli.command()
@click.argument("order_id", type=int)
@click.option("--amount", "amount_cents", type=int, required=True, help="Order total in cents.")
def pay(order_id: int, amount_cents: int) -> None:
    """Charge an order and mark it as paid."""
    command = PayOrderCommand(order_id=order_id, amount_cents=amount_cents)
    _echo_order(_run(lambda: container.pay_order_use_case().execute(command)))


@cli.command()
@click.argument("order_id", type=int)
def ship(order_id: int) -> None:
    """Ship a paid order."""
    command = ShipOrderCommand(order_id=order_id)
    _echo_order(_run(lambda: container.ship_order_use_case().execute(command)))


@cli.command()
@click.argument("order_id", type=int)
@click.option("--reason", required=True, help="Why the order is cancelled.")
def cancel(order_id: int, reason: str) -> None:
    """Cancel an order, refunding it when it was paid."""
    command = CancelOrderCommand(order_id=order_id, reason=reason)
    _echo_order(_run(lambda: container.cancel_order_use_case().execute(command)))


@cli.command()
@click.argument("order_id", type=int)
def show(order_id: int) -> None:
    """Show one order."""
    query = GetOrderQuery(order_id=order_id)
    _echo_order(_run(lambda: container.get_order_use_case().execute(query)))


@cli.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus]),
    default=None,
    help="Only list orders in this status.",
)
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option(
    "--page-size", type=click.IntRange(1, MAX_PAGE_SIZE), default=20, show_default=True
)
def list_orders(status: str | None, page: int, page_size: int) -> None:
    """List orders, oldest first."""
    query = ListOrdersQuery(
        status=OrderStatus(status) if status else None,
        pagination=Pagination(page=page, page_size=page_size),
    )
    result = _run(lambda: container.list_orders_use_case().execute(query))
    for order in result.items:
        click.echo(
            f"{order.id.value}\t{order.status.value}\t{order.total}\t{order.customer_email}"
        )
    click.echo(f"page {result.page}/{max(result.total_pages, 1)}, {result.total} order(s)")


@cli.command()
@click.option("--once", is_flag=True, help="Run a single pass and exit.")
@click.option("--interval", type=float, default=None, help="Seconds between idle polls.")
@click.option("--batch-size", type=click.IntRange(min=1), default=None)
def work(once: bool, interval: float | None, batch_size: int | None) -> None:
    """Ship paid orders in the background."""
    settings = get_settings()
    if interval is None:
        interval = settings.SHIPMENT_WORKER_POLL_SECONDS
    try:
        shipped = run_shipment_worker(
            poll_interval=interval,
            batch_size=batch_size or settings.SHIPMENT_WORKER_BATCH_SIZE,
            max_iterations=1 if once else None,
        )
    except KeyboardInterrupt:
        click.echo("Shipment worker stopped.")
        return
    except Exception as e:
        logger.exception("shipment_worker_failed")
        raise click.ClickException("Shipment worker failed.") from e
    click.echo(f"Shipped {shipped} order(s).")


if __name__ == "__main__":
    cli()
