"""
POS Core Time — Public API
============================
Explicit clock, id provider and expiry helpers.
Doctrine: NO datetime.now() in engine logic.
"""

from core.time.clock import Clock, FixedClock, SystemClock, today_utc
from core.time.ids import IdProvider, SequentialIdProvider
from core.time.temporal import days_until_expiry, expires_within, is_expired

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "today_utc",
    "IdProvider",
    "SequentialIdProvider",
    "days_until_expiry",
    "expires_within",
    "is_expired",
]
