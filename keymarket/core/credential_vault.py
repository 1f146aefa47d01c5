"""Credential Vault — opaque access keys, indexed by asset id.

The vault has no notion of who may read a key.  The Purchase Ledger is the
only component that calls ``reveal`` on behalf of a principal, and it
checks the purchase record first.
"""

from __future__ import annotations

from keymarket.core.validation import require_bounded_text
from keymarket.core.write_buffer import WriteBuffer
from keymarket.models.listings import Credential


class CredentialVault:
    """Write-once store of ``Credential`` records."""

    def __init__(self, *, max_key_length: int = 512) -> None:
        self._max_key_length = max_key_length
        self._credentials: dict[int, Credential] = {}

    def validate(self, key: str) -> str:
        """Raise ``InvalidInputError`` unless *key* is non-empty and within bounds."""
        return require_bounded_text(key, self._max_key_length, field="key")

    def store(self, buffer: WriteBuffer, asset_id: int, key: str) -> Credential:
        """Stage the credential for *asset_id*.  Called only by listing creation."""
        self.validate(key)
        credential = Credential(asset_id=asset_id, key=key)

        def _apply() -> None:
            self._credentials[asset_id] = credential

        buffer.stage(f"credential {asset_id}: store", _apply)
        return credential

    def reveal(self, asset_id: int) -> str | None:
        """Return the raw key for *asset_id*, or ``None``.  No authorization."""
        credential = self._credentials.get(asset_id)
        return credential.key if credential is not None else None

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._credentials
