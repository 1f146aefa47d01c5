"""``keymarket demo`` — run a scripted marketplace scenario.

Lists an asset, buys it from a funded account, reveals the key to the
buyer, shows that everyone else is refused, and prints the resulting
balances, seller profile and event journal.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keymarket.config import config
from keymarket.core.clock import BlockHeightClock
from keymarket.core.errors import MarketError
from keymarket.core.settlement import InMemoryRail
from keymarket.marketplace.marketplace import Marketplace

console = Console()


def demo_cmd(
    price: int = typer.Option(1_000_000, "--price", "-p", min=1, help="Listing price."),
    buyer_balance: int = typer.Option(
        2_000_000, "--balance", "-b", min=0, help="Opening balance of the buyer."
    ),
) -> None:
    """Run the list -> purchase -> reveal scenario against an in-memory rail."""
    admin, seller, buyer, stranger = config.admin_principal, "seller", "buyer", "stranger"
    rail = InMemoryRail({buyer: buyer_balance})
    clock = BlockHeightClock()
    market = Marketplace(admin=admin, rail=rail, clock=clock)

    console.print()
    console.print(
        Panel(
            "[bold]Keymarket Demo[/bold]\n\n"
            f"Seller lists a dataset for {price:,}; buyer pays "
            f"{market.get_fee()}% to the marketplace.",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    asset_id = market.create_listing(seller, price, "GPS dataset", "transport", "ABC")
    console.print(f"[bold green]Listed:[/bold green] asset {asset_id}")
    clock.advance()

    try:
        market.purchase(buyer, asset_id)
    except MarketError as exc:
        console.print(f"[bold red]Purchase failed ({exc.kind.name}):[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]Purchased:[/bold green] asset {asset_id} by {buyer}")

    console.print(f"[bold]Key for {buyer}:[/bold] {market.reveal_key_for(buyer, asset_id)}")
    for principal in (stranger, seller):
        try:
            market.reveal_key_for(principal, asset_id)
        except MarketError as exc:
            console.print(f"[dim]Key for {principal}: refused ({exc.kind.name})[/dim]")

    balances = Table(title="Balances")
    balances.add_column("Principal", style="cyan")
    balances.add_column("Balance", justify="right")
    for principal in (buyer, seller, admin):
        balances.add_row(principal, f"{rail.balance_of(principal):,}")
    console.print(balances)

    profile = market.get_profile(seller)
    if profile is not None:
        console.print(
            f"[bold]Seller profile:[/bold] sales={profile.total_sales} "
            f"reputation={profile.reputation_score} last_activity={profile.last_activity}"
        )
    console.print(f"[bold]Transactions:[/bold] {market.get_transaction_count()}")

    journal = Table(title="Event Journal")
    journal.add_column("#", justify="right")
    journal.add_column("Kind", style="cyan")
    journal.add_column("Principal")
    journal.add_column("Asset", justify="right")
    journal.add_column("Hash", style="dim")
    for event in market.events():
        journal.add_row(
            str(event.sequence),
            event.kind.value,
            event.principal,
            str(event.asset_id or ""),
            event.entry_hash[:16] + "...",
        )
    console.print(journal)
    console.print(f"Journal chain valid: {market.journal.verify_chain()}")
