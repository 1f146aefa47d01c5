"""Keymarket data models — all Pydantic v2, all frozen (immutable)."""

from keymarket.models.errors import ErrorKind
from keymarket.models.events import EventKind, MarketEvent
from keymarket.models.listings import Credential, Listing
from keymarket.models.purchases import FeeSplit, PurchaseRecord, SellerProfile

__all__ = [
    # errors
    "ErrorKind",
    # listings
    "Listing",
    "Credential",
    # purchases
    "PurchaseRecord",
    "SellerProfile",
    "FeeSplit",
    # events
    "EventKind",
    "MarketEvent",
]
