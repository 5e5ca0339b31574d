"""
POS Event Bus — In-Process Publish/Subscribe
===============================================
The checkout commits first; the bus tells the rest of the process after.

Publishing:
1. Subscribers for the event type run in registration order
2. A subscriber that raises is logged and recorded in the report
3. The remaining subscribers still run
4. publish() never raises and never undoes the committed sale

Forecast refreshes and dashboards hang off this bus, so a slow or
broken observer can never fail a checkout.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, List, Tuple

from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
)
from core.events.models import PosEvent

logger = logging.getLogger("pos.events")

EventHandler = Callable[[PosEvent], object]

# engine.domain.action[.version]
_EVENT_TYPE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z0-9_]+){2,}$")


def validate_event_type(event_type: str) -> None:
    if not isinstance(event_type, str) or not _EVENT_TYPE.match(event_type):
        raise InvalidEventTypeFormat(str(event_type or ""))


# ══════════════════════════════════════════════════════════════
# DISPATCH REPORT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SubscriberFailure:
    subscriber_name: str
    handler_name: str
    error_type: str
    error: str


@dataclass(frozen=True)
class DispatchReport:
    """What happened when one event was published."""
    event_type: str
    event_id: str
    notified: Tuple[str, ...] = ()
    failures: Tuple[SubscriberFailure, ...] = ()

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def all_delivered(self) -> bool:
        return not self.failures


# ══════════════════════════════════════════════════════════════
# BUS
# ══════════════════════════════════════════════════════════════

class EventBus:
    """Thread-safe, in-memory map of event type → named handlers."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Tuple[EventHandler, str]]] = {}
        self._lock = Lock()

    def subscribe(self, event_type: str, handler: EventHandler, subscriber_name: str) -> None:
        """
        Raises:
            InvalidEventTypeFormat:   not engine.domain.action
            DuplicateSubscriberError: same handler already on this type
            EventBusError:            handler not callable
        """
        validate_event_type(event_type)
        if not callable(handler):
            raise EventBusError(f"Handler must be callable, got {type(handler)}.")

        with self._lock:
            registered = self._handlers.setdefault(event_type, [])
            if any(existing is handler for existing, _ in registered):
                raise DuplicateSubscriberError(event_type, subscriber_name)
            registered.append((handler, subscriber_name))
        logger.info(f"Subscribed {subscriber_name} to {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> bool:
        with self._lock:
            registered = self._handlers.get(event_type, [])
            kept = [(h, n) for h, n in registered if h is not handler]
            removed = len(kept) != len(registered)
            self._handlers[event_type] = kept
        return removed

    def subscribers(self, event_type: str) -> Tuple[str, ...]:
        """Subscriber names for a type, in registration order."""
        with self._lock:
            return tuple(name for _, name in self._handlers.get(event_type, []))

    def publish(self, event: PosEvent) -> DispatchReport:
        with self._lock:
            handlers = list(self._handlers.get(event.event_type, []))

        notified: List[str] = []
        failures: List[SubscriberFailure] = []
        for handler, name in handlers:
            try:
                handler(event)
            except Exception as exc:
                failures.append(SubscriberFailure(
                    subscriber_name=name,
                    handler_name=getattr(handler, "__qualname__", repr(handler)),
                    error_type=type(exc).__name__,
                    error=str(exc),
                ))
                logger.error(
                    f"Subscriber {name} failed on {event.event_type} "
                    f"({event.event_id}): {exc}",
                    exc_info=True,
                )
            else:
                notified.append(name)

        if handlers:
            logger.debug(
                f"Published {event.event_type} ({event.event_id}): "
                f"{len(notified)} notified, {len(failures)} failed"
            )
        return DispatchReport(
            event_type=event.event_type,
            event_id=event.event_id,
            notified=tuple(notified),
            failures=tuple(failures),
        )
