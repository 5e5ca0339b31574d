"""
POS Event Bus — Public API
============================
The checkout commits first. The bus tells the rest of the world after.
"""

from core.events.bus import (
    DispatchReport,
    EventBus,
    SubscriberFailure,
    validate_event_type,
)
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
)
from core.events.models import PosEvent

__all__ = [
    "EventBus",
    "DispatchReport",
    "SubscriberFailure",
    "validate_event_type",
    "PosEvent",
    "EventBusError",
    "InvalidEventTypeFormat",
    "DuplicateSubscriberError",
]
