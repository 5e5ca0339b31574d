"""
POS Core Time — Clock, Id Provider and Expiry Helper Tests
"""

from datetime import date, datetime, timezone

import pytest

from core.time import (
    FixedClock,
    SequentialIdProvider,
    SystemClock,
    days_until_expiry,
    expires_within,
    is_expired,
    today_utc,
)

NOW = datetime(2023, 10, 25, 12, 0, 0, tzinfo=timezone.utc)


class TestClocks:
    def test_system_clock_is_utc(self):
        assert SystemClock().now_utc().tzinfo is timezone.utc

    def test_fixed_clock_requires_tz(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2023, 10, 25))

    def test_fixed_clock_advance(self):
        clock = FixedClock(NOW)
        clock.advance(days=2, hours=1)
        assert clock.now_utc() == datetime(2023, 10, 27, 13, 0, 0, tzinfo=timezone.utc)
        assert today_utc(clock) == date(2023, 10, 27)


class TestSequentialIdProvider:
    def test_order_ids_embed_millis_and_sequence(self):
        ids = SequentialIdProvider()
        millis = int(NOW.timestamp() * 1000)
        assert ids.new_order_id(NOW) == f"TXN-{millis}-0001"
        assert ids.new_order_id(NOW) == f"TXN-{millis}-0002"

    def test_entry_ids(self):
        ids = SequentialIdProvider(entry_prefix="JRN")
        assert ids.new_entry_id("TXN-1", 1) == "JRN-TXN-1-1"
        assert ids.new_entry_id("TXN-1", 2) == "JRN-TXN-1-2"

    def test_same_instant_never_collides(self):
        ids = SequentialIdProvider()
        generated = {ids.new_order_id(NOW) for _ in range(100)}
        assert len(generated) == 100


class TestExpiryHelpers:
    TODAY = date(2023, 10, 25)

    def test_days_until_expiry(self):
        assert days_until_expiry(date(2023, 11, 1), self.TODAY) == 7
        assert days_until_expiry(date(2023, 10, 20), self.TODAY) == -5

    def test_is_expired(self):
        assert is_expired(date(2023, 10, 24), self.TODAY)
        assert not is_expired(self.TODAY, self.TODAY)

    def test_expires_within(self):
        assert expires_within(date(2023, 11, 1), self.TODAY, 7)
        assert not expires_within(date(2023, 11, 2), self.TODAY, 7)
        assert expires_within(date(2023, 10, 1), self.TODAY, 0)

    def test_expires_within_rejects_negative_window(self):
        with pytest.raises(ValueError):
            expires_within(self.TODAY, self.TODAY, -1)
