"""Tests for RunStats class."""

import time

from photoprep.run_stats import RunStats


class TestRunStats:
    """Tests for RunStats class."""

    def test_default_values(self):
        """Test default initialization."""
        stats = RunStats()

        assert stats.total_to_process == 0
        assert stats.processed == 0
        assert stats.removed == 0
        assert stats.bytes_written == 0

    def test_remaining_count(self):
        """Test remaining count calculation."""
        stats = RunStats(total_to_process=10, processed=4)

        assert stats.remaining_count == 6

    def test_elapsed_seconds(self):
        """Test elapsed time calculation."""
        stats = RunStats(start_time=time.time() - 5)

        assert 4.9 < stats.elapsed_seconds < 6

    def test_rate_per_minute(self):
        """Test processing rate calculation."""
        stats = RunStats(processed=30, start_time=time.time() - 60)

        assert 29 < stats.rate_per_minute < 31

    def test_rate_zero_elapsed(self):
        """Test rate with a start time in the future."""
        stats = RunStats(processed=5, start_time=time.time() + 100)

        assert stats.rate_per_minute == 0.0
