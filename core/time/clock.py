"""
POS Core Time — Explicit Clock Protocol
=========================================
Doctrine: NO datetime.now() inside engine logic.
The checkout stamps every SalesOrder and JournalEntry with a time
taken from an injected Clock, so tests can pin it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a fixed timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2023, 10, 25, tzinfo=timezone.utc))
        clock.advance(days=1)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, **delta) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(**delta)


def today_utc(clock: Clock) -> date:
    return clock.now_utc().date()
