"""Unit tests for the optimistic counter state machine."""
import pytest

from campusvibe.core.optimistic import CounterState, InvalidTransition, OptimisticCounter


@pytest.mark.unit
class TestOptimisticCounter:
    """Test counter transitions."""

    def test_starts_idle(self):
        counter = OptimisticCounter(5)
        assert counter.state is CounterState.IDLE
        assert counter.displayed == 5
        assert not counter.pending

    def test_begin_shows_delta_immediately(self):
        counter = OptimisticCounter(5)
        assert counter.begin() == 6
        assert counter.state is CounterState.PENDING
        assert counter.confirmed == 5

    def test_commit_folds_delta(self):
        counter = OptimisticCounter(5)
        counter.begin()
        assert counter.commit() == 6
        assert counter.state is CounterState.COMMITTED
        assert counter.confirmed == 6

    def test_commit_prefers_server_count(self):
        """Other users may have checked in meanwhile."""
        counter = OptimisticCounter(5)
        counter.begin()
        assert counter.commit(server_count=9) == 9

    def test_rollback_restores_confirmed(self):
        counter = OptimisticCounter(5)
        counter.begin()
        assert counter.rollback() == 5
        assert counter.state is CounterState.ROLLED_BACK

    def test_negative_delta(self):
        counter = OptimisticCounter(3)
        assert counter.begin(-1) == 2
        assert counter.rollback() == 3

    def test_begin_while_pending_raises(self):
        """A second tap cannot stack another delta."""
        counter = OptimisticCounter(5)
        counter.begin()
        with pytest.raises(InvalidTransition):
            counter.begin()
        assert counter.displayed == 6

    def test_commit_without_pending_raises(self):
        with pytest.raises(InvalidTransition):
            OptimisticCounter().commit()

    def test_rollback_without_pending_raises(self):
        with pytest.raises(InvalidTransition):
            OptimisticCounter().rollback()

    def test_begin_allowed_after_settling(self):
        counter = OptimisticCounter(0)
        counter.begin()
        counter.rollback()
        assert counter.begin() == 1
        counter.commit()
        assert counter.begin() == 2

    def test_sync_ignored_while_pending(self):
        counter = OptimisticCounter(5)
        counter.begin()
        assert counter.sync(20) == 6
        counter.commit()
        assert counter.sync(20) == 20
