"""Credential marketplace — listings, fee-split purchases, gated key release."""

from keymarket.marketplace.marketplace import Marketplace

__all__ = ["Marketplace"]
