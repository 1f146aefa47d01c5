"""Tests for WriteBuffer and atomic() — all-or-nothing commits."""

from __future__ import annotations

import pytest

from keymarket.core.write_buffer import BufferClosedError, CommitError, WriteBuffer, atomic


class TestWriteBuffer:
    def test_nothing_applied_before_commit(self):
        state: list[int] = []
        buffer = WriteBuffer()
        buffer.stage("append 1", lambda: state.append(1))
        assert state == []
        assert len(buffer) == 1

    def test_commit_applies_in_order(self):
        state: list[int] = []
        buffer = WriteBuffer()
        buffer.stage("a", lambda: state.append(1))
        buffer.stage("b", lambda: state.append(2))
        assert buffer.commit() == 2
        assert state == [1, 2]

    def test_discard_applies_nothing(self):
        state: list[int] = []
        buffer = WriteBuffer()
        buffer.stage("a", lambda: state.append(1))
        buffer.discard()
        assert state == []
        assert len(buffer) == 0

    def test_cannot_stage_after_commit(self):
        buffer = WriteBuffer()
        buffer.commit()
        with pytest.raises(BufferClosedError):
            buffer.stage("late", lambda: None)

    def test_cannot_commit_twice(self):
        buffer = WriteBuffer()
        buffer.commit()
        with pytest.raises(BufferClosedError):
            buffer.commit()

    def test_descriptions(self):
        buffer = WriteBuffer()
        buffer.stage("first", lambda: None)
        buffer.stage("second", lambda: None)
        assert buffer.descriptions == ["first", "second"]


class TestAtomic:
    def test_commits_on_success(self):
        state: dict[str, int] = {}
        with atomic() as buffer:
            buffer.stage("set", lambda: state.update(x=1))
            assert state == {}
        assert state == {"x": 1}

    def test_discards_on_exception(self):
        state: dict[str, int] = {}
        with pytest.raises(ValueError):
            with atomic() as buffer:
                buffer.stage("set", lambda: state.update(x=1))
                raise ValueError("boom")
        assert state == {}

    def test_failing_write_reports_commit_error(self):
        state: list[int] = []

        def _fail() -> None:
            raise KeyError("boom")

        with pytest.raises(CommitError) as excinfo:
            with atomic() as buffer:
                buffer.stage("first", lambda: state.append(1))
                buffer.stage("broken", _fail)
                buffer.stage("third", lambda: state.append(3))
        err = excinfo.value
        assert (err.description, err.applied, err.total) == ("broken", 1, 3)
        assert isinstance(err.__cause__, KeyError)
        # Writes before the failure stay applied; later ones never run
        assert state == [1]
