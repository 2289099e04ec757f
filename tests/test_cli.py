"""Tests for the orderflow command-line interface."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from orderflow.database import dispose_engine
from orderflow.infrastructure.ordering.cli import cli

Invoke = Callable[..., Result]


@pytest.fixture
def invoke(tmp_path: Path) -> Generator[Invoke, None, None]:
    """Run CLI commands against a fresh SQLite file."""
    runner = CliRunner()
    database_url = f"sqlite:///{tmp_path / 'cli.db'}"

    def run(*args: str) -> Result:
        return runner.invoke(cli, ["--database-url", database_url, *args])

    assert run("init-db").exit_code == 0
    yield run
    dispose_engine()


def place(invoke: Invoke) -> Result:
    return invoke(
        "place",
        "--email",
        "Ada@Example.com",
        "--address",
        "12 Analytical Row",
        "--line",
        "BOOK-001:2:1250",
        "--line",
        "PEN-010:1:300",
    )


def test_init_db(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli, ["--database-url", f"sqlite:///{tmp_path / 'init.db'}", "init-db"]
    )
    dispose_engine()

    assert result.exit_code == 0
    assert "Database tables created." in result.output


def test_place_order(invoke: Invoke) -> None:
    result = place(invoke)

    assert result.exit_code == 0, result.output
    assert '"id": 1' in result.output
    assert '"status": "pending"' in result.output
    assert '"total_cents": 2800' in result.output
    assert '"customer_email": "ada@example.com"' in result.output


def test_place_order_rejects_malformed_line(invoke: Invoke) -> None:
    result = invoke("place", "--email", "ada@example.com", "--address", "x", "--line", "BOOK")

    assert result.exit_code == 2
    assert "SKU:QUANTITY:UNIT_PRICE_CENTS" in result.output


def test_place_order_domain_error(invoke: Invoke) -> None:
    result = invoke(
        "place", "--email", "ada@example.com", "--address", "x", "--line", "BOOK:0:100"
    )

    assert result.exit_code == 1
    assert "Quantity must be at least 1" in result.output


def test_order_lifecycle(invoke: Invoke) -> None:
    place(invoke)

    paid = invoke("pay", "1", "--amount", "2800")
    shipped = invoke("ship", "1")
    shown = invoke("show", "1")

    assert paid.exit_code == 0, paid.output
    assert '"status": "paid"' in paid.output
    assert shipped.exit_code == 0, shipped.output
    assert '"tracking_number": "SBX-' in shipped.output
    assert '"status": "shipped"' in shown.output


def test_pay_with_wrong_amount(invoke: Invoke) -> None:
    place(invoke)

    result = invoke("pay", "1", "--amount", "10")

    assert result.exit_code == 1
    assert "does not match order total 2800" in result.output


def test_cancel_shipped_order(invoke: Invoke) -> None:
    place(invoke)
    invoke("pay", "1", "--amount", "2800")
    invoke("ship", "1")

    result = invoke("cancel", "1", "--reason", "too late")

    assert result.exit_code == 1
    assert "cannot move from 'shipped' to 'cancelled'" in result.output


def test_cancel_pending_order(invoke: Invoke) -> None:
    place(invoke)

    result = invoke("cancel", "1", "--reason", "changed my mind")

    assert result.exit_code == 0, result.output
    assert '"cancellation_reason": "changed my mind"' in result.output


def test_show_missing_order(invoke: Invoke) -> None:
    result = invoke("show", "99")

    assert result.exit_code == 1
    assert "Order with id 99 not found" in result.output


def test_show_negative_order_id(invoke: Invoke) -> None:
    result = invoke("show", "--", "-1")

    assert result.exit_code == 1
    assert "OrderId must be non-negative" in result.output
    assert "unexpected" not in result.output


def test_list_orders(invoke: Invoke) -> None:
    place(invoke)
    place(invoke)
    invoke("pay", "2", "--amount", "2800")

    everything = invoke("list")
    paid_only = invoke("list", "--status", "paid")

    assert everything.exit_code == 0, everything.output
    assert "1\tpending\t28.00 EUR\tada@example.com" in everything.output
    assert "page 1/1, 2 order(s)" in everything.output
    assert "2\tpaid\t28.00 EUR\tada@example.com" in paid_only.output
    assert "1\tpending" not in paid_only.output
    assert "page 1/1, 1 order(s)" in paid_only.output


def test_list_orders_empty(invoke: Invoke) -> None:
    result = invoke("list", "--status", "shipped")

    assert result.exit_code == 0
    assert "page 1/1, 0 order(s)" in result.output


def test_work_once_ships_paid_orders(invoke: Invoke) -> None:
    place(invoke)
    invoke("pay", "1", "--amount", "2800")

    result = invoke("work", "--once")

    assert result.exit_code == 0, result.output
    assert "Shipped 1 order(s)." in result.output
    assert '"status": "shipped"' in invoke("show", "1").output
