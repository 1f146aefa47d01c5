"""Marketplace — the single state manager and public operation surface.

Every public method is one atomic call: it validates against the
components, performs any settlement transfers, stages its writes in a
``WriteBuffer`` and commits them only if nothing raised.  Callers get
either the success payload or exactly one ``MarketError``.

Component dependency order (leaves first)::

    FeePolicy, SettlementRail -> ListingStore -> CredentialVault
        -> PurchaseLedger -> ReputationTracker

The administrator is fixed at construction.  There is no teardown; a
``Marketplace`` lives as long as the process that owns it.
"""

from __future__ import annotations

import logging

from keymarket.config import MarketConfig
from keymarket.config import config as default_config
from keymarket.core.clock import BlockHeightClock, Clock
from keymarket.core.credential_vault import CredentialVault
from keymarket.core.event_journal import EventJournal
from keymarket.core.fee_policy import FeePolicy
from keymarket.core.listing_store import ListingStore
from keymarket.core.purchase_ledger import PurchaseLedger
from keymarket.core.reputation import ReputationTracker
from keymarket.core.settlement import SettlementRail
from keymarket.core.write_buffer import atomic
from keymarket.models.events import EventKind, MarketEvent
from keymarket.models.listings import Listing
from keymarket.models.purchases import SellerProfile

logger = logging.getLogger(__name__)


class Marketplace:
    """Credential marketplace with fee-split settlement.

    Parameters
    ----------
    admin:
        Marketplace administrator.  Receives every fee and is the only
        principal allowed to call ``set_fee``.  Immutable.
    rail:
        External settlement rail performing value transfers.
    clock:
        Host time source.  Defaults to a ``BlockHeightClock`` at 0.
    config:
        Text bounds and the initial fee.  Defaults to the env-driven
        module singleton.

    Examples
    --------
    >>> from keymarket.core.settlement import InMemoryRail
    >>> rail = InMemoryRail({"bob": 1_000_000})
    >>> mp = Marketplace(admin="admin", rail=rail)
    >>> mp.create_listing("alice", 1_000_000, "GPS dataset", "transport", "ABC")
    1
    >>> mp.purchase("bob", 1)
    >>> mp.reveal_key_for("bob", 1)
    'ABC'
    """

    def __init__(
        self,
        admin: str,
        rail: SettlementRail,
        clock: Clock | None = None,
        config: MarketConfig | None = None,
    ) -> None:
        cfg = config or default_config
        self._clock = clock or BlockHeightClock()
        self._fee_policy = FeePolicy(admin, cfg.default_fee_percent)
        self._listings = ListingStore(
            max_description_length=cfg.max_description_length,
            max_category_length=cfg.max_category_length,
        )
        self._vault = CredentialVault(max_key_length=cfg.max_key_length)
        self._reputation = ReputationTracker()
        self._ledger = PurchaseLedger(
            self._listings,
            self._vault,
            self._reputation,
            self._fee_policy,
            rail,
            self._clock,
        )
        self._journal = EventJournal()
        logger.info(
            "Marketplace initialised (admin=%s, fee=%d%%).",
            admin, self._fee_policy.get_fee(),
        )

    # -- Listings -----------------------------------------------------------

    def create_listing(
        self,
        owner: str,
        price: int,
        description: str,
        category: str,
        key: str,
    ) -> int:
        """List a new asset with its access key and return the new asset id.

        Raises
        ------
        InvalidPriceError
            If *price* is not positive.
        InvalidInputError
            If any text field is empty or over its bound.
        AlreadyListedError
            If the next id already denotes an active listing.
        """
        now = self._clock.now()
        with atomic() as buffer:
            listing = self._listings.create(
                buffer, owner, price, description, category, now
            )
            self._vault.store(buffer, listing.asset_id, key)
            self._journal.stage(
                buffer,
                MarketEvent(
                    kind=EventKind.LISTING_CREATED,
                    principal=owner,
                    asset_id=listing.asset_id,
                    timestamp=now,
                    details={"price": price, "category": category},
                ),
            )
        logger.info(
            "Listed asset %d by %s at %d (%s).",
            listing.asset_id, owner, price, category,
        )
        return listing.asset_id

    def update_price(self, caller: str, asset_id: int, new_price: int) -> None:
        """Change the price of a listing owned by *caller*.

        Existing purchase records keep the amount they paid.
        """
        with atomic() as buffer:
            before = self._listings.get(asset_id)
            self._listings.update_price(buffer, caller, asset_id, new_price)
            self._journal.stage(
                buffer,
                MarketEvent(
                    kind=EventKind.PRICE_UPDATED,
                    principal=caller,
                    asset_id=asset_id,
                    timestamp=self._clock.now(),
                    details={
                        "old_price": before.price if before else None,
                        "new_price": new_price,
                    },
                ),
            )
        logger.info("Asset %d repriced to %d by %s.", asset_id, new_price, caller)

    def deactivate(self, caller: str, asset_id: int) -> None:
        """Withdraw a listing owned by *caller* from sale.  Irreversible."""
        with atomic() as buffer:
            self._listings.deactivate(buffer, caller, asset_id)
            self._journal.stage(
                buffer,
                MarketEvent(
                    kind=EventKind.LISTING_DEACTIVATED,
                    principal=caller,
                    asset_id=asset_id,
                    timestamp=self._clock.now(),
                ),
            )
        logger.info("Asset %d deactivated by %s.", asset_id, caller)

    # -- Purchases ----------------------------------------------------------

    def purchase(self, buyer: str, asset_id: int) -> None:
        """Buy *asset_id*, paying the seller and the marketplace fee.

        Raises
        ------
        NotFoundError
            If the listing is missing or inactive.
        InvalidInputError
            If *asset_id* was never allocated.
        UnauthorizedAccessError
            If *buyer* is the listing owner.
        InsufficientBalanceError
            If the settlement rail refuses either transfer.
        """
        with atomic() as buffer:
            record, split = self._ledger.purchase(buffer, buyer, asset_id)
            self._journal.stage(
                buffer,
                MarketEvent(
                    kind=EventKind.PURCHASE_COMPLETED,
                    principal=buyer,
                    asset_id=asset_id,
                    timestamp=record.timestamp,
                    details={
                        "seller": record.seller,
                        "amount": record.amount,
                        "fee": split.fee,
                        "payout": split.payout,
                    },
                ),
            )
        logger.info(
            "Asset %d purchased by %s from %s for %d (fee %d).",
            asset_id, buyer, record.seller, record.amount, split.fee,
        )

    def reveal_key_for(self, buyer: str, asset_id: int) -> str:
        """Return the access key of *asset_id* to a principal who bought it."""
        return self._ledger.reveal_key_for(buyer, asset_id)

    # -- Fee policy ---------------------------------------------------------

    def set_fee(self, caller: str, new_fee: int) -> None:
        """Replace the fee percentage used by subsequent purchases (admin only)."""
        with atomic() as buffer:
            old_fee = self._fee_policy.get_fee()
            self._fee_policy.set_fee(buffer, caller, new_fee)
            self._journal.stage(
                buffer,
                MarketEvent(
                    kind=EventKind.FEE_UPDATED,
                    principal=caller,
                    timestamp=self._clock.now(),
                    details={"old_fee": old_fee, "new_fee": new_fee},
                ),
            )
        logger.info("Fee changed to %d%% by %s.", new_fee, caller)

    def get_fee(self) -> int:
        return self._fee_policy.get_fee()

    # -- Read-only accessors -------------------------------------------------

    def get_listing(self, asset_id: int) -> Listing | None:
        return self._listings.get(asset_id)

    def get_profile(self, principal: str) -> SellerProfile | None:
        return self._reputation.get(principal)

    def get_transaction_count(self) -> int:
        return self._ledger.transaction_count

    @property
    def admin(self) -> str:
        return self._fee_policy.admin

    @property
    def next_asset_id(self) -> int:
        return self._listings.next_id

    @property
    def ledger(self) -> PurchaseLedger:
        return self._ledger

    @property
    def journal(self) -> EventJournal:
        return self._journal

    def events(self, kind: EventKind | None = None) -> list[MarketEvent]:
        """Return committed events in order, optionally filtered by *kind*."""
        return self._journal.entries(kind)
