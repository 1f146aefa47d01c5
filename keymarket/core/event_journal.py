"""Append-only, hash-chained event journal (in memory).

Design:
- Append-only: ``append()`` is the only write; there is no update or delete.
- Hash-chained: each entry stores the ``entry_hash`` of its predecessor.
- Sequenced: entries are numbered from 1 in append order.

The marketplace stages journal appends in the same ``WriteBuffer`` as the
state change they describe, so a failed call leaves no event behind.
"""

from __future__ import annotations

from keymarket.core.hasher import compute_entry_hash
from keymarket.core.write_buffer import WriteBuffer
from keymarket.models.events import EventKind, MarketEvent


class JournalIntegrityError(RuntimeError):
    """Raised when the hash chain is broken."""


class EventJournal:
    """In-memory journal of sealed ``MarketEvent`` entries."""

    def __init__(self) -> None:
        self._entries: list[MarketEvent] = []

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(self, event: MarketEvent) -> MarketEvent:
        """Seal *event* onto the end of the chain and return the sealed copy."""
        previous_hash = self._entries[-1].entry_hash if self._entries else ""
        unsealed = event.model_copy(
            update={
                "sequence": len(self._entries) + 1,
                "previous_entry_hash": previous_hash,
                "entry_hash": "",
            }
        )
        sealed = unsealed.model_copy(
            update={"entry_hash": compute_entry_hash(unsealed.model_dump(mode="json"))}
        )
        self._entries.append(sealed)
        return sealed

    def stage(self, buffer: WriteBuffer, event: MarketEvent) -> None:
        """Queue *event* for appending when *buffer* commits."""
        buffer.stage(f"journal: {event.kind.value}", lambda: self.append(event))

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def entries(self, kind: EventKind | None = None) -> list[MarketEvent]:
        """Return deep copies of all entries in order, optionally filtered by *kind*.

        ``details`` is a plain dict, so sealed entries never leave the journal.
        """
        return [
            e.model_copy(deep=True)
            for e in self._entries
            if kind is None or e.kind == kind
        ]

    def latest(self) -> MarketEvent | None:
        return self._entries[-1].model_copy(deep=True) if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Chain verification
    # ------------------------------------------------------------------

    def verify_chain(self) -> bool:
        """Walk every entry, recomputing hashes and checking links.

        Returns True if the chain is valid, raises JournalIntegrityError otherwise.
        """
        prev_hash = ""
        for entry in self._entries:
            if entry.previous_entry_hash != prev_hash:
                raise JournalIntegrityError(
                    f"Chain broken at entry {entry.sequence}: "
                    f"expected previous_hash={prev_hash!r}, "
                    f"got {entry.previous_entry_hash!r}"
                )
            expected_hash = compute_entry_hash(entry.model_dump(mode="json"))
            if entry.entry_hash != expected_hash:
                raise JournalIntegrityError(
                    f"Tampered entry {entry.sequence}: "
                    f"expected hash={expected_hash!r}, got {entry.entry_hash!r}"
                )
            prev_hash = entry.entry_hash
        return True
