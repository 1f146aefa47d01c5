"""Reputation Tracker — per-seller aggregate statistics."""

from __future__ import annotations

from keymarket.core.write_buffer import WriteBuffer
from keymarket.models.purchases import SellerProfile


class ReputationTracker:
    """Owns ``SellerProfile`` records, created lazily on a seller's first sale.

    ``reputation_score`` is carried but never changed here.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, SellerProfile] = {}

    def get(self, principal: str) -> SellerProfile | None:
        """Return the profile for *principal*, or ``None`` if they never sold."""
        return self._profiles.get(principal)

    def record_sale(self, buffer: WriteBuffer, seller: str, at: int) -> None:
        """Stage one more sale for *seller* with last activity at *at*.

        The increment is computed when the buffer commits so that several
        staged sales in one buffer would each count.
        """

        def _apply() -> None:
            profile = self._profiles.get(seller) or SellerProfile(principal=seller)
            self._profiles[seller] = profile.model_copy(
                update={
                    "total_sales": profile.total_sales + 1,
                    "last_activity": at,
                }
            )

        buffer.stage(f"profile {seller}: record sale", _apply)
