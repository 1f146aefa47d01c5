"""Error taxonomy — stable numeric codes returned to callers."""

from __future__ import annotations

from enum import IntEnum


class ErrorKind(IntEnum):
    """The seven failure kinds an operation can report.

    The numeric values are part of the public contract and must never be
    renumbered.
    """

    UNAUTHORIZED_OWNER = 100
    NOT_FOUND = 101
    ALREADY_LISTED = 102
    INSUFFICIENT_BALANCE = 103
    UNAUTHORIZED_ACCESS = 104
    INVALID_PRICE = 105
    INVALID_INPUT = 106
