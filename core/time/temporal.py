"""
POS Core Time — Expiry Helpers
================================
Pure functions for shelf-life arithmetic.
All functions take an explicit `today`; none reads a clock.
"""

from __future__ import annotations

from datetime import date


def days_until_expiry(expiry_date: date, today: date) -> int:
    """Whole days left before expiry. Negative once expired."""
    return (expiry_date - today).days


def is_expired(expiry_date: date, today: date) -> bool:
    return expiry_date < today


def expires_within(expiry_date: date, today: date, days: int) -> bool:
    """True when the batch expires in `days` days or fewer (expired included)."""
    if days < 0:
        raise ValueError(f"days cannot be negative, got {days}.")
    return days_until_expiry(expiry_date, today) <= days
