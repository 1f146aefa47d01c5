"""Tests for the settlement rail protocol and InMemoryRail."""

from __future__ import annotations

import pytest

from keymarket.core.settlement import InMemoryRail, SettlementRail, Transfer, TransferError


class TestInMemoryRail:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryRail(), SettlementRail)

    def test_transfer_moves_balance(self):
        rail = InMemoryRail({"alice": 100})
        rail.transfer(40, "alice", "bob")
        assert rail.balance_of("alice") == 60
        assert rail.balance_of("bob") == 40
        assert rail.transfers == [Transfer(40, "alice", "bob")]

    def test_insufficient_balance(self):
        rail = InMemoryRail({"alice": 10})
        with pytest.raises(TransferError, match="Insufficient balance"):
            rail.transfer(11, "alice", "bob")
        assert rail.balance_of("alice") == 10
        assert rail.transfers == []

    def test_unknown_sender_has_zero(self):
        rail = InMemoryRail()
        with pytest.raises(TransferError):
            rail.transfer(1, "nobody", "bob")

    def test_negative_amount_rejected(self):
        rail = InMemoryRail({"alice": 10})
        with pytest.raises(TransferError):
            rail.transfer(-1, "alice", "bob")

    def test_zero_amount_succeeds(self):
        rail = InMemoryRail()
        rail.transfer(0, "alice", "bob")
        assert rail.balance_of("bob") == 0
        assert len(rail.transfers) == 1

    def test_self_transfer_is_noop(self):
        rail = InMemoryRail({"alice": 10})
        rail.transfer(5, "alice", "alice")
        assert rail.balance_of("alice") == 10

    def test_fail_on_call(self):
        rail = InMemoryRail({"alice": 100}, fail_on_call={2})
        rail.transfer(1, "alice", "bob")
        with pytest.raises(TransferError, match="#2"):
            rail.transfer(1, "alice", "bob")
        rail.transfer(1, "alice", "bob")
        assert rail.call_count == 3
        assert rail.balance_of("bob") == 2

    def test_credit(self):
        rail = InMemoryRail()
        rail.credit("alice", 50)
        assert rail.balances() == {"alice": 50}
        with pytest.raises(ValueError):
            rail.credit("alice", -1)
