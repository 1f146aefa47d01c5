"""Settlement rail — the external value-transfer primitive.

The marketplace never moves value itself.  It calls
``rail.transfer(amount, sender, recipient)`` and treats a raised
``TransferError`` as terminal for the current call.  No retries, no
compensating transfers.

Defines the ``SettlementRail`` Protocol along with ``InMemoryRail``, a
deterministic balance book used by the CLI demo and the test suite.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class TransferError(RuntimeError):
    """Raised by a settlement rail when a transfer cannot be performed."""


@runtime_checkable
class SettlementRail(Protocol):
    """Protocol for value-transfer backends.

    Implementations must be atomic per call: a transfer either happens in
    full or raises ``TransferError`` and moves nothing.
    """

    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        ...


class Transfer(NamedTuple):
    amount: int
    sender: str
    recipient: str


class InMemoryRail:
    """Integer balance book satisfying ``SettlementRail``.

    Parameters
    ----------
    balances:
        Opening balances by principal.  Unknown principals start at zero.
    fail_on_call:
        1-based call numbers that must fail regardless of balance.  Lets
        tests fail the seller payout or the fee transfer on demand.

    Examples
    --------
    >>> rail = InMemoryRail({"alice": 100})
    >>> rail.transfer(40, "alice", "bob")
    >>> rail.balance_of("bob")
    40
    """

    def __init__(
        self,
        balances: dict[str, int] | None = None,
        *,
        fail_on_call: set[int] | None = None,
    ) -> None:
        self._balances: dict[str, int] = dict(balances or {})
        self._fail_on_call = set(fail_on_call or ())
        self._calls = 0
        self.transfers: list[Transfer] = []

    def transfer(self, amount: int, sender: str, recipient: str) -> None:
        self._calls += 1
        if self._calls in self._fail_on_call:
            raise TransferError(
                f"Transfer #{self._calls} of {amount} from {sender!r} "
                f"to {recipient!r} rejected by rail."
            )
        if amount < 0:
            raise TransferError(f"Amount must be non-negative, got {amount}")

        available = self._balances.get(sender, 0)
        if available < amount:
            raise TransferError(
                f"Insufficient balance: {sender!r} has {available}, needs {amount}"
            )

        # Zero amounts and self-transfers move nothing but still succeed
        if amount and sender != recipient:
            self._balances[sender] = available - amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
        self.transfers.append(Transfer(amount, sender, recipient))
        logger.debug("Transferred %d from %s to %s.", amount, sender, recipient)

    def balance_of(self, principal: str) -> int:
        """Return the current balance of *principal* (zero if unknown)."""
        return self._balances.get(principal, 0)

    def credit(self, principal: str, amount: int) -> None:
        """Mint *amount* into *principal*'s balance (test and demo funding)."""
        if amount < 0:
            raise ValueError(f"Credit must be non-negative, got {amount}")
        self._balances[principal] = self._balances.get(principal, 0) + amount

    @property
    def call_count(self) -> int:
        return self._calls

    def balances(self) -> dict[str, int]:
        """Return a snapshot of all balances."""
        return dict(self._balances)
