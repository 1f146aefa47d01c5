"""Purchase, seller statistics and fee split records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PurchaseRecord(BaseModel):
    """Snapshot of a completed purchase, keyed by ``(buyer, asset_id)``.

    ``amount`` and ``seller`` are copied from the listing at purchase time and
    do not follow later price changes.
    """

    model_config = ConfigDict(frozen=True)

    buyer: str
    asset_id: int
    amount: int
    seller: str
    timestamp: int


class SellerProfile(BaseModel):
    """Aggregate statistics for a principal that has sold at least once."""

    model_config = ConfigDict(frozen=True)

    principal: str
    total_sales: int = 0
    reputation_score: int = 0
    last_activity: int = 0


class FeeSplit(BaseModel):
    """How a price divides between seller and marketplace.

    ``fee + payout == price``; the fee is floored, so any fractional remainder
    is never collected.
    """

    model_config = ConfigDict(frozen=True)

    price: int
    fee_percent: int
    fee: int
    payout: int
