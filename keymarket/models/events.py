"""Market event models — one entry per committed state change."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """Kinds of state change recorded in the event journal."""

    LISTING_CREATED = "listing_created"
    PRICE_UPDATED = "price_updated"
    LISTING_DEACTIVATED = "listing_deactivated"
    PURCHASE_COMPLETED = "purchase_completed"
    FEE_UPDATED = "fee_updated"


class MarketEvent(BaseModel):
    """A single entry in the append-only event journal.

    ``sequence``, ``previous_entry_hash`` and ``entry_hash`` are assigned by
    the journal when the entry is sealed.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: f"evt-{uuid.uuid4().hex[:12]}")
    kind: EventKind
    principal: str
    asset_id: int | None = None
    timestamp: int = 0
    details: dict[str, Any] = Field(default_factory=dict)
    sequence: int = 0
    previous_entry_hash: str = ""
    entry_hash: str = ""
