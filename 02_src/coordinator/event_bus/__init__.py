"""EventBus module."""

from .event_bus import (
    Event,
    ITypedEventTarget,
    LogListener,
    StatusListener,
    TypedEventBus,
)

__all__ = [
    "Event",
    "ITypedEventTarget",
    "LogListener",
    "StatusListener",
    "TypedEventBus",
]
