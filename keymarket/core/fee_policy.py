"""Fee Policy — the single global fee percentage and its administrator."""

from __future__ import annotations

import logging

from keymarket.core.errors import InvalidPriceError, UnauthorizedOwnerError
from keymarket.core.write_buffer import WriteBuffer
from keymarket.models.purchases import FeeSplit

logger = logging.getLogger(__name__)

MAX_FEE_PERCENT = 100


def compute_split(price: int, fee_percent: int) -> FeeSplit:
    """Split *price* into marketplace fee and seller payout.

    The fee is floored, so the fractional remainder is never collected::

        >>> compute_split(999, 2)
        FeeSplit(price=999, fee_percent=2, fee=19, payout=980)
    """
    fee = price * fee_percent // 100
    return FeeSplit(price=price, fee_percent=fee_percent, fee=fee, payout=price - fee)


class FeePolicy:
    """Holds the fee percentage applied to every subsequent purchase.

    Parameters
    ----------
    admin:
        The marketplace administrator.  Captured once; only this principal
        may change the fee, and it also receives every fee transfer.
    fee_percent:
        Initial fee percentage, 0..100.
    """

    def __init__(self, admin: str, fee_percent: int = 2) -> None:
        if not 0 <= fee_percent <= MAX_FEE_PERCENT:
            raise InvalidPriceError(
                f"Fee must be between 0 and {MAX_FEE_PERCENT}, got {fee_percent}"
            )
        self._admin = admin
        self._fee_percent = fee_percent

    @property
    def admin(self) -> str:
        return self._admin

    def get_fee(self) -> int:
        """Return the current fee percentage."""
        return self._fee_percent

    def split(self, price: int) -> FeeSplit:
        """Split *price* using the current fee percentage."""
        return compute_split(price, self._fee_percent)

    def set_fee(self, buffer: WriteBuffer, caller: str, new_fee: int) -> int:
        """Stage a new fee percentage.

        Raises
        ------
        UnauthorizedOwnerError
            If *caller* is not the administrator (checked first, whatever
            the value).
        InvalidPriceError
            If *new_fee* is outside 0..100.
        """
        if caller != self._admin:
            logger.warning("Rejected fee change by non-administrator %s.", caller)
            raise UnauthorizedOwnerError(
                f"{caller!r} is not the marketplace administrator."
            )
        if (
            isinstance(new_fee, bool)
            or not isinstance(new_fee, int)
            or not 0 <= new_fee <= MAX_FEE_PERCENT
        ):
            raise InvalidPriceError(
                f"Fee must be between 0 and {MAX_FEE_PERCENT}, got {new_fee!r}"
            )

        def _apply() -> None:
            self._fee_percent = new_fee

        buffer.stage(f"fee: set {new_fee}%", _apply)
        return new_fee
