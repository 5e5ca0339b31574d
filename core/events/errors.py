"""
POS Event Bus — Errors
========================
Raised at subscription time only; publishing never raises.
"""


class EventBusError(Exception):
    pass


class InvalidEventTypeFormat(EventBusError):
    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Event type '{event_type}' is not of the form "
            f"engine.domain.action (lowercase, dot separated)."
        )


class DuplicateSubscriberError(EventBusError):
    def __init__(self, event_type: str, subscriber_name: str):
        self.event_type = event_type
        self.subscriber_name = subscriber_name
        super().__init__(
            f"{subscriber_name} already subscribed this handler to '{event_type}'."
        )
