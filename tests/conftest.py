"""Shared test fixtures for Keymarket."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from keymarket.config import MarketConfig
from keymarket.core.clock import BlockHeightClock
from keymarket.core.settlement import InMemoryRail
from keymarket.marketplace.marketplace import Marketplace

ADMIN = "admin"
SELLER = "alice"
BUYER = "bob"
OTHER = "carol"


@pytest.fixture
def market_config() -> MarketConfig:
    """Provide a config with the documented defaults, isolated from the environment."""
    return MarketConfig(
        _env_file=None,
        default_fee_percent=2,
        max_description_length=256,
        max_category_length=64,
        max_key_length=512,
    )


@pytest.fixture
def rail() -> InMemoryRail:
    """Provide a rail where the buyer and a third party are well funded."""
    return InMemoryRail({BUYER: 10_000_000, OTHER: 10_000_000})


@pytest.fixture
def clock() -> BlockHeightClock:
    """Provide a block-height clock starting at 100."""
    return BlockHeightClock(start=100)


@pytest.fixture
def market(
    rail: InMemoryRail, clock: BlockHeightClock, market_config: MarketConfig
) -> Marketplace:
    """Provide a fresh Marketplace administered by ADMIN."""
    return Marketplace(admin=ADMIN, rail=rail, clock=clock, config=market_config)


@pytest.fixture
def make_listing(market: Marketplace) -> Callable[..., int]:
    """Factory fixture: create a listing with sensible defaults, return its id."""

    def _factory(**overrides: Any) -> int:
        defaults: dict[str, Any] = {
            "owner": SELLER,
            "price": 1_000_000,
            "description": "GPS dataset",
            "category": "transport",
            "key": "ABC",
        }
        defaults.update(overrides)
        return market.create_listing(**defaults)

    return _factory
