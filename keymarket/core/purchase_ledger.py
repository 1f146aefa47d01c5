"""Purchase Ledger — payment split, purchase records, credential gate.

A purchase moves value through the external settlement rail in two
transfers (buyer -> seller for the payout, buyer -> administrator for the
fee).  Only after both succeed are the purchase record, the seller's
profile update and the transaction counter staged.  A failed transfer is
reported as ``InsufficientBalanceError`` and nothing is staged; the rail is
atomic per call, so there is nothing to roll back on this side.

Credential release is gated solely on a purchase record for the exact
``(buyer, asset_id)`` pair.  Owning the listing does not grant access.
"""

from __future__ import annotations

import logging

from keymarket.core.clock import Clock
from keymarket.core.credential_vault import CredentialVault
from keymarket.core.errors import (
    InsufficientBalanceError,
    NotFoundError,
    UnauthorizedAccessError,
)
from keymarket.core.fee_policy import FeePolicy
from keymarket.core.listing_store import ListingStore
from keymarket.core.reputation import ReputationTracker
from keymarket.core.settlement import SettlementRail, TransferError
from keymarket.core.write_buffer import WriteBuffer
from keymarket.models.purchases import FeeSplit, PurchaseRecord

logger = logging.getLogger(__name__)


class PurchaseLedger:
    """Owns ``PurchaseRecord`` entries and the global transaction counter.

    Parameters
    ----------
    listings:
        Catalog used to look up the asset being bought.
    vault:
        Credential store consulted by ``reveal_key_for``.
    reputation:
        Seller statistics updated on each successful purchase.
    fee_policy:
        Source of the current fee percentage and the fee recipient.
    rail:
        External value-transfer primitive.
    clock:
        Host time source used for purchase timestamps.
    """

    def __init__(
        self,
        listings: ListingStore,
        vault: CredentialVault,
        reputation: ReputationTracker,
        fee_policy: FeePolicy,
        rail: SettlementRail,
        clock: Clock,
    ) -> None:
        self._listings = listings
        self._vault = vault
        self._reputation = reputation
        self._fee_policy = fee_policy
        self._rail = rail
        self._clock = clock
        self._records: dict[tuple[str, int], PurchaseRecord] = {}
        self._transaction_count = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def transaction_count(self) -> int:
        return self._transaction_count

    def get_record(self, buyer: str, asset_id: int) -> PurchaseRecord | None:
        """Return the purchase snapshot for ``(buyer, asset_id)``, or ``None``."""
        return self._records.get((buyer, asset_id))

    # ------------------------------------------------------------------
    # Purchase
    # ------------------------------------------------------------------

    def purchase(
        self, buffer: WriteBuffer, buyer: str, asset_id: int
    ) -> tuple[PurchaseRecord, FeeSplit]:
        """Pay for *asset_id* and stage the resulting record.

        Returns the staged record together with the fee split that was paid.

        Raises
        ------
        NotFoundError
            If the listing does not exist or is inactive (indistinguishable).
        InvalidInputError
            If *asset_id* is outside the allocated range.
        UnauthorizedAccessError
            If *buyer* owns the listing.
        InsufficientBalanceError
            If either transfer is refused by the rail.
        """
        listing = self._listings.get(asset_id)
        if listing is None or not listing.active:
            raise NotFoundError(f"Asset {asset_id} is not available for purchase.")
        self._listings.require_allocated(asset_id)
        if buyer == listing.owner:
            logger.warning("Rejected self-purchase of asset %d by %s.", asset_id, buyer)
            raise UnauthorizedAccessError(
                f"{buyer!r} cannot purchase their own asset {asset_id}."
            )

        split = self._fee_policy.split(listing.price)
        self._pay(buyer, listing.owner, split.payout, asset_id)
        self._pay(buyer, self._fee_policy.admin, split.fee, asset_id)

        now = self._clock.now()
        record = PurchaseRecord(
            buyer=buyer,
            asset_id=asset_id,
            amount=listing.price,
            seller=listing.owner,
            timestamp=now,
        )

        def _apply() -> None:
            self._records[(buyer, asset_id)] = record
            self._transaction_count += 1

        buffer.stage(f"purchase {buyer}/{asset_id}: record", _apply)
        self._reputation.record_sale(buffer, listing.owner, now)
        return record, split

    def _pay(self, sender: str, recipient: str, amount: int, asset_id: int) -> None:
        try:
            self._rail.transfer(amount, sender, recipient)
        except TransferError as exc:
            logger.warning(
                "Transfer of %d from %s to %s for asset %d failed: %s",
                amount, sender, recipient, asset_id, exc,
            )
            raise InsufficientBalanceError(str(exc)) from exc

    # ------------------------------------------------------------------
    # Credential gate
    # ------------------------------------------------------------------

    def reveal_key_for(self, buyer: str, asset_id: int) -> str:
        """Return the credential for *asset_id* if *buyer* has purchased it.

        Raises
        ------
        InvalidInputError
            If *asset_id* is outside the allocated range.
        UnauthorizedAccessError
            If no purchase record exists for ``(buyer, asset_id)``.
        NotFoundError
            If the credential is missing.
        """
        self._listings.require_allocated(asset_id)
        if (buyer, asset_id) not in self._records:
            logger.warning(
                "Rejected credential access to asset %d by %s (no purchase).",
                asset_id, buyer,
            )
            raise UnauthorizedAccessError(
                f"{buyer!r} has not purchased asset {asset_id}."
            )
        key = self._vault.reveal(asset_id)
        if key is None:
            raise NotFoundError(f"No credential stored for asset {asset_id}.")
        return key
