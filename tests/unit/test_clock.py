"""Tests for the block-height clock."""

from __future__ import annotations

import pytest

from keymarket.core.clock import BlockHeightClock, Clock


class TestBlockHeightClock:
    def test_satisfies_protocol(self):
        assert isinstance(BlockHeightClock(), Clock)

    def test_starts_at_given_height(self):
        assert BlockHeightClock(start=7).now() == 7

    def test_advance(self):
        clock = BlockHeightClock()
        assert clock.advance() == 1
        assert clock.advance(5) == 6
        assert clock.now() == 6

    def test_cannot_go_backwards(self):
        clock = BlockHeightClock(start=3)
        with pytest.raises(ValueError):
            clock.advance(-1)
        with pytest.raises(ValueError):
            BlockHeightClock(start=-1)
