"""Marketplace exceptions — exactly one class per ``ErrorKind``.

Every public operation either returns its payload or raises one of these.
Callers that need the numeric code read ``exc.kind``.
"""

from __future__ import annotations

from keymarket.models.errors import ErrorKind


class MarketError(RuntimeError):
    """Base class for every failure reported by the marketplace."""

    kind: ErrorKind

    @property
    def code(self) -> int:
        return int(self.kind)


class UnauthorizedOwnerError(MarketError):
    """Caller is not the listing owner or the marketplace administrator."""

    kind = ErrorKind.UNAUTHORIZED_OWNER


class NotFoundError(MarketError):
    """Listing (or credential) is missing or inactive."""

    kind = ErrorKind.NOT_FOUND


class AlreadyListedError(MarketError):
    """The identifier being allocated already denotes an active listing."""

    kind = ErrorKind.ALREADY_LISTED


class InsufficientBalanceError(MarketError):
    """The settlement rail refused a transfer."""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class UnauthorizedAccessError(MarketError):
    """Self-purchase, or credential access without a purchase record."""

    kind = ErrorKind.UNAUTHORIZED_ACCESS


class InvalidPriceError(MarketError):
    """Price is not positive, or a fee is outside 0..100."""

    kind = ErrorKind.INVALID_PRICE


class InvalidInputError(MarketError):
    """Text out of bounds, or an asset id that was never allocated."""

    kind = ErrorKind.INVALID_INPUT


ERRORS_BY_KIND: dict[ErrorKind, type[MarketError]] = {
    cls.kind: cls
    for cls in (
        UnauthorizedOwnerError,
        NotFoundError,
        AlreadyListedError,
        InsufficientBalanceError,
        UnauthorizedAccessError,
        InvalidPriceError,
        InvalidInputError,
    )
}
