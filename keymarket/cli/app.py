"""Main Typer application — imports and registers all CLI commands.

Entry point: ``keymarket`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from keymarket.cli.commands.demo import demo_cmd
from keymarket.cli.commands.quote import quote_cmd
from keymarket.config import config

app = typer.Typer(
    name="keymarket",
    help="Keymarket: credential marketplace ledger with fee-split settlement.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="demo", help="Run a scripted list/buy/reveal scenario.")(demo_cmd)
app.command(name="quote", help="Show how a price splits into fee and payout.")(quote_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Override KEYMARKET_LOG_LEVEL for this run."
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level or config.log_level)


def configure_logging(level: str) -> None:
    """Route ``keymarket`` loggers through a Rich handler at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
