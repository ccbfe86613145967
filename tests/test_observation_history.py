"""Tests for observation_history.py"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from twinbot.services.observation_history import ObservationHistory, Sample


def make_sample(tick, x=0.0, y=0.0, energy=100.0, heading=0.0):
    return Sample(x=x, y=y, energy=energy, tick=tick, heading=heading)


class TestRecord:
    """Tests for inserting samples."""

    def test_first_sample_accepted(self):
        """Test that an empty history accepts any sample."""
        history = ObservationHistory(capacity=4)
        assert history.record(make_sample(5)) is True
        assert history.latest().tick == 5
        assert len(history) == 1

    def test_newest_sample_at_front(self):
        """Test most-recent-first ordering."""
        history = ObservationHistory(capacity=4)
        for tick in (1, 2, 3):
            history.record(make_sample(tick))
        assert [s.tick for s in history.samples()] == [3, 2, 1]
        assert history.previous().tick == 2

    def test_duplicate_tick_rejected(self):
        """Test that replaying the head tick is a no-op."""
        history = ObservationHistory(capacity=4)
        history.record(make_sample(7, x=10))
        before = history.samples()

        assert history.record(make_sample(7, x=99)) is False
        assert history.samples() == before

    def test_older_tick_rejected(self):
        """Test that out-of-order samples do not mutate the history."""
        history = ObservationHistory(capacity=4)
        history.record(make_sample(3))
        history.record(make_sample(8))
        before = history.samples()

        assert history.record(make_sample(5)) is False
        assert history.samples() == before


class TestCapacity:
    """Tests for bounded size and eviction."""

    def test_never_exceeds_capacity(self):
        """Test that the oldest samples are evicted."""
        history = ObservationHistory(capacity=8)
        for tick in range(20):
            history.record(make_sample(tick))
            assert len(history) <= 8

        ticks = [s.tick for s in history.samples()]
        assert ticks == list(range(19, 11, -1))

    def test_monotonic_under_mixed_input(self):
        """Test ordering survives stale and duplicate inserts."""
        history = ObservationHistory(capacity=5)
        for tick in [1, 4, 2, 4, 9, 3, 10, 10, 12, 11, 15]:
            history.record(make_sample(tick))

        ticks = [s.tick for s in history.samples()]
        assert ticks == sorted(ticks, reverse=True)
        assert len(set(ticks)) == len(ticks)
        assert ticks[0] == 15

    def test_invalid_capacity(self):
        """Test that a zero capacity is refused."""
        with pytest.raises(ValueError):
            ObservationHistory(capacity=0)


class TestEmptyHistory:
    """Tests for the empty case."""

    def test_no_latest(self):
        history = ObservationHistory()
        assert history.latest() is None
        assert history.previous() is None
        assert history.is_empty

    def test_no_age(self):
        history = ObservationHistory()
        assert history.age(42) is None

    def test_age_counts_ticks(self):
        history = ObservationHistory()
        history.record(make_sample(30))
        assert history.age(42) == 12


class TestSample:
    """Tests for the sample value type."""

    def test_negative_energy_rejected(self):
        with pytest.raises(ValueError):
            make_sample(1, energy=-1.0)

    def test_heading_optional(self):
        sample = Sample(x=1.0, y=2.0, energy=50.0, tick=3)
        assert sample.heading is None
        assert sample.position.as_tuple() == (1.0, 2.0)
