"""``keymarket quote`` — preview the fee/payout split for a price."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from keymarket.config import config
from keymarket.core.fee_policy import MAX_FEE_PERCENT, compute_split

console = Console()


def quote_cmd(
    price: int = typer.Argument(..., min=1, help="Listing price in the smallest unit."),
    fee: int = typer.Option(
        None,
        "--fee",
        "-f",
        min=0,
        max=MAX_FEE_PERCENT,
        help="Fee percentage (defaults to KEYMARKET_DEFAULT_FEE_PERCENT).",
    ),
) -> None:
    """Print the marketplace fee and seller payout for PRICE."""
    split = compute_split(price, config.default_fee_percent if fee is None else fee)

    table = Table(title="Fee Split")
    table.add_column("Price", justify="right")
    table.add_column("Fee %", justify="right")
    table.add_column("Fee", justify="right", style="yellow")
    table.add_column("Payout", justify="right", style="green")
    table.add_row(
        f"{split.price:,}", str(split.fee_percent), f"{split.fee:,}", f"{split.payout:,}"
    )
    console.print(table)
