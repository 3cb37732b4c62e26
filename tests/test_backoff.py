"""
Tests for the polling backoff helper.
"""

import pytest

from pushclient.services.utils.backoff import Backoff


class TestBackoff:
    def test_grows_until_capped(self):
        backoff = Backoff(base_delay=1.0, factor=2.0, max_delay=5.0, jitter=0)

        delays = [backoff.next_delay() for _ in range(5)]

        assert delays == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_reset_restarts_sequence(self):
        backoff = Backoff(base_delay=1.0, factor=2.0, max_delay=8.0, jitter=0)
        backoff.next_delay()
        backoff.next_delay()

        backoff.reset()

        assert backoff.next_delay() == 1.0

    def test_jitter_stays_within_bounds(self):
        backoff = Backoff(base_delay=10.0, factor=1.0, max_delay=10.0, jitter=0.1)

        for _ in range(20):
            assert backoff.next_delay() == pytest.approx(10.0, abs=1.0)

    def test_counts_failures_until_reset(self):
        backoff = Backoff(base_delay=1.0, jitter=0)
        backoff.next_delay()
        backoff.next_delay()

        assert backoff.failures == 2

        backoff.reset()

        assert backoff.failures == 0

    def test_long_outage_stays_at_cap(self):
        backoff = Backoff(base_delay=1.0, factor=1.8, max_delay=30.0, jitter=0)

        delays = [backoff.next_delay() for _ in range(200)]

        assert delays[-1] == 30.0
