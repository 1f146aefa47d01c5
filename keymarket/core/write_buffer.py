"""Staged writes — all-or-nothing commit for a single marketplace call.

Components validate first and *stage* their mutations here instead of
writing their maps directly.  ``atomic()`` applies the staged writes in
order only when the call body finishes without raising; on any exception
the buffer is discarded untouched and the exception propagates.

Usage::

    with atomic() as buffer:
        listings.create(buffer, ...)
        vault.store(buffer, ...)
    # both writes applied here, or neither

Staged writes must not raise: every check belongs before ``stage()``, and
an apply callable only assigns already-validated values.  Writes already
applied cannot be undone, so a write that does raise surfaces as
``CommitError`` naming how many writes landed before it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class BufferClosedError(RuntimeError):
    """Raised when staging into a buffer that was already committed or discarded."""


class CommitError(RuntimeError):
    """Raised when a staged write fails during commit.

    State is inconsistent at this point and the process should not carry on
    serving calls as if the commit succeeded.
    """

    def __init__(self, description: str, applied: int, total: int) -> None:
        self.description = description
        self.applied = applied
        self.total = total
        super().__init__(
            f"Staged write {description!r} failed after {applied} of "
            f"{total} write(s) were applied."
        )


class WriteBuffer:
    """Ordered list of pending writes."""

    def __init__(self) -> None:
        self._pending: list[tuple[str, Callable[[], None]]] = []
        self._closed = False

    def stage(self, description: str, apply: Callable[[], None]) -> None:
        """Queue *apply* to run at commit time."""
        if self._closed:
            raise BufferClosedError(
                f"Cannot stage {description!r}: buffer already closed."
            )
        self._pending.append((description, apply))

    def commit(self) -> int:
        """Apply every staged write in order.  Returns the number applied.

        Raises
        ------
        CommitError
            If a staged write raises.  Earlier writes stay applied.
        """
        if self._closed:
            raise BufferClosedError("Buffer already closed.")
        self._closed = True
        total = len(self._pending)
        for applied, (description, apply) in enumerate(self._pending):
            logger.debug("Applying staged write: %s", description)
            try:
                apply()
            except Exception as exc:
                logger.exception(
                    "Staged write %r failed after %d of %d applied.",
                    description, applied, total,
                )
                raise CommitError(description, applied, total) from exc
        return total

    def discard(self) -> None:
        """Drop every staged write without applying any of them."""
        if self._pending:
            logger.debug("Discarding %d staged write(s).", len(self._pending))
        self._pending.clear()
        self._closed = True

    @property
    def descriptions(self) -> list[str]:
        return [d for d, _ in self._pending]

    def __len__(self) -> int:
        return len(self._pending)


@contextmanager
def atomic() -> Iterator[WriteBuffer]:
    """Yield a fresh buffer; commit on clean exit, discard on exception."""
    buffer = WriteBuffer()
    try:
        yield buffer
    except BaseException:
        buffer.discard()
        raise
    buffer.commit()
