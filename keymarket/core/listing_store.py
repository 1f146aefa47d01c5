"""Listing Store — the asset catalog and its monotonic id allocator.

Ids start at 1, advance by exactly one per successful creation, and are
never reused, even after deactivation.  Listing state only moves forward::

    nonexistent -> active -> inactive

All mutating methods validate immediately and stage their writes into the
caller's ``WriteBuffer``; nothing changes until the buffer commits.
"""

from __future__ import annotations

import logging

from keymarket.core.errors import (
    AlreadyListedError,
    NotFoundError,
    UnauthorizedOwnerError,
)
from keymarket.core.validation import (
    require_asset_id,
    require_bounded_text,
    require_positive_price,
)
from keymarket.core.write_buffer import WriteBuffer
from keymarket.models.listings import Listing

logger = logging.getLogger(__name__)


class ListingStore:
    """Owns every ``Listing`` and the next-id counter.

    Parameters
    ----------
    max_description_length:
        Upper bound on ``description`` length in characters.
    max_category_length:
        Upper bound on ``category`` length in characters.
    """

    def __init__(
        self,
        *,
        max_description_length: int = 256,
        max_category_length: int = 64,
    ) -> None:
        self._max_description_length = max_description_length
        self._max_category_length = max_category_length
        self._listings: dict[int, Listing] = {}
        self._next_id = 1

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def next_id(self) -> int:
        """The id the next successful creation will receive."""
        return self._next_id

    def get(self, asset_id: int) -> Listing | None:
        """Return the listing for *asset_id*, or ``None``."""
        return self._listings.get(asset_id)

    def require_allocated(self, asset_id: int) -> int:
        """Raise ``InvalidInputError`` unless *asset_id* was previously allocated."""
        return require_asset_id(asset_id, self._next_id)

    def __len__(self) -> int:
        return len(self._listings)

    # ------------------------------------------------------------------
    # Staged writes
    # ------------------------------------------------------------------

    def create(
        self,
        buffer: WriteBuffer,
        owner: str,
        price: int,
        description: str,
        category: str,
        created_at: int,
    ) -> Listing:
        """Validate and stage a new active listing.

        Returns the listing as it will exist once *buffer* commits; its
        ``asset_id`` is the counter value read at call time.

        Raises
        ------
        InvalidPriceError
            If *price* is not positive.
        InvalidInputError
            If *description* or *category* is empty or too long.
        AlreadyListedError
            If the target id already denotes an active listing.
        """
        require_positive_price(price)
        require_bounded_text(
            description, self._max_description_length, field="description"
        )
        require_bounded_text(category, self._max_category_length, field="category")

        asset_id = self._next_id
        existing = self._listings.get(asset_id)
        if existing is not None and existing.active:
            raise AlreadyListedError(f"Asset {asset_id} is already listed.")

        listing = Listing(
            asset_id=asset_id,
            owner=owner,
            price=price,
            description=description,
            category=category,
            active=True,
            created_at=created_at,
        )

        def _apply() -> None:
            self._listings[asset_id] = listing
            self._next_id = asset_id + 1

        buffer.stage(f"listing {asset_id}: create", _apply)
        return listing

    def update_price(
        self, buffer: WriteBuffer, caller: str, asset_id: int, new_price: int
    ) -> Listing:
        """Stage a price change on a listing owned by *caller*.

        Raises
        ------
        InvalidInputError
            If *asset_id* was never allocated.
        UnauthorizedOwnerError
            If *caller* does not own the listing.
        InvalidPriceError
            If *new_price* is not positive.
        """
        listing = self._owned_listing(caller, asset_id)
        require_positive_price(new_price, field="new_price")
        return self._stage_replace(
            buffer, listing.model_copy(update={"price": new_price}), "update price"
        )

    def deactivate(self, buffer: WriteBuffer, caller: str, asset_id: int) -> Listing:
        """Stage the logical deletion of a listing owned by *caller*.

        Deactivating an already inactive listing is accepted and leaves it
        inactive.  There is no way back to active.
        """
        listing = self._owned_listing(caller, asset_id)
        return self._stage_replace(
            buffer, listing.model_copy(update={"active": False}), "deactivate"
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _owned_listing(self, caller: str, asset_id: int) -> Listing:
        self.require_allocated(asset_id)
        listing = self._listings.get(asset_id)
        if listing is None:
            raise NotFoundError(f"Asset {asset_id} has no listing.")
        if listing.owner != caller:
            logger.warning(
                "Rejected change to asset %d by non-owner %s.", asset_id, caller
            )
            raise UnauthorizedOwnerError(
                f"{caller!r} does not own asset {asset_id}."
            )
        return listing

    def _stage_replace(
        self, buffer: WriteBuffer, updated: Listing, action: str
    ) -> Listing:
        def _apply() -> None:
            self._listings[updated.asset_id] = updated

        buffer.stage(f"listing {updated.asset_id}: {action}", _apply)
        return updated
