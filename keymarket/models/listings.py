"""Listing and credential records owned by the Listing Store and Credential Vault."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Listing(BaseModel):
    """A single asset offered for sale.

    Listings are never removed.  ``active=False`` is a logical delete; the
    record (and its credential) stays addressable by ``asset_id`` forever.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: int
    owner: str
    price: int  # smallest currency unit
    description: str
    category: str
    active: bool = True
    created_at: int  # clock value at creation


class Credential(BaseModel):
    """Opaque access key released to buyers of ``asset_id``."""

    model_config = ConfigDict(frozen=True)

    asset_id: int
    key: str
