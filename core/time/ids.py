"""
POS Core Time — Identifier Provider
=====================================
Order and journal-entry identifiers are injected, never generated
inline, so a replayed checkout can reproduce its ids.

Format:
    order:  TXN-<epoch millis>-<sequence>
    entry:  JE-<order id>-1 (revenue), JE-<order id>-2 (COGS)
"""

from __future__ import annotations

import itertools
import threading
from datetime import datetime
from typing import Protocol


class IdProvider(Protocol):
    def new_order_id(self, at: datetime) -> str:
        ...  # pragma: no cover

    def new_entry_id(self, order_id: str, position: int) -> str:
        ...  # pragma: no cover


class SequentialIdProvider:
    """Timestamp + process-local sequence. Thread-safe."""

    def __init__(self, order_prefix: str = "TXN", entry_prefix: str = "JE") -> None:
        self._order_prefix = order_prefix
        self._entry_prefix = entry_prefix
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    def new_order_id(self, at: datetime) -> str:
        with self._lock:
            seq = next(self._sequence)
        millis = int(at.timestamp() * 1000)
        return f"{self._order_prefix}-{millis}-{seq:04d}"

    def new_entry_id(self, order_id: str, position: int) -> str:
        return f"{self._entry_prefix}-{order_id}-{position}"
