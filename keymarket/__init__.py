"""Keymarket: a transactional credential marketplace ledger.

Principals list assets for sale together with an opaque access key.
Purchases pay the seller and the marketplace fee through an injected
settlement rail, and only a paying buyer can retrieve the key afterwards.
Per-seller sales statistics and an append-only, hash-chained event
journal are kept as side effects of committed calls.
"""

__version__ = "0.1.0"
__description__ = (
    "Transactional marketplace ledger with fee-split settlement and gated credential release"
)

from keymarket.core.errors import MarketError
from keymarket.marketplace.marketplace import Marketplace
from keymarket.models.errors import ErrorKind

__all__ = ["Marketplace", "MarketError", "ErrorKind", "__version__"]
