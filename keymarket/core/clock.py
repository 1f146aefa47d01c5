"""Host time source — an abstract, monotonic counter such as block height."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Any object with a ``now() -> int`` method satisfies this protocol."""

    def now(self) -> int:
        """Return the current counter value.  Never decreases."""
        ...


class BlockHeightClock:
    """Manually advanced counter.

    Suitable for tests and the CLI demo, where the host would otherwise
    supply the current block height.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"Clock start must be non-negative, got {start}")
        self._height = start

    def now(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward by *blocks* and return the new height."""
        if blocks < 0:
            raise ValueError(f"Clock cannot move backwards (blocks={blocks})")
        self._height += blocks
        return self._height
