"""Shared bounds checks for prices and bounded text fields."""

from __future__ import annotations

from keymarket.core.errors import InvalidInputError, InvalidPriceError


def require_positive_price(price: int, *, field: str = "price") -> int:
    """Return *price* if it is a positive integer, else raise ``InvalidPriceError``."""
    if isinstance(price, bool) or not isinstance(price, int) or price <= 0:
        raise InvalidPriceError(f"{field} must be a positive integer, got {price!r}")
    return price


def require_bounded_text(value: str, max_length: int, *, field: str) -> str:
    """Return *value* if it is a non-empty string of at most *max_length* characters."""
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"{field} must be a non-empty string")
    if len(value) > max_length:
        raise InvalidInputError(
            f"{field} is {len(value)} characters; maximum is {max_length}"
        )
    return value


def require_asset_id(asset_id: int, next_id: int) -> int:
    """Return *asset_id* if it was previously allocated (``1 <= id < next_id``)."""
    if (
        isinstance(asset_id, bool)
        or not isinstance(asset_id, int)
        or not 1 <= asset_id < next_id
    ):
        raise InvalidInputError(
            f"Asset id {asset_id!r} has not been allocated (next id is {next_id})"
        )
    return asset_id
