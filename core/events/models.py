"""
POS Event Bus — Event Envelope
================================
A committed fact handed to subscribers after the checkout has
already swapped state in. Subscribers read it; they cannot undo it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class PosEvent:
    event_type: str
    event_id: str
    occurred_at: datetime
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def source_engine(self) -> str:
        return self.event_type.split(".")[0]
