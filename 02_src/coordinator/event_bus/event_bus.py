"""Typed EventBus for log and status events."""

import asyncio
import inspect
from threading import RLock
from typing import Any, Callable, Literal, Protocol, Union, overload

from ..errors import InvalidArgumentError
from ..logging_config import get_logger
from ..models import EventKind, LogEvent, StatusEvent

logger = get_logger(__name__)


Event = Union[LogEvent, StatusEvent]
LogListener = Callable[[LogEvent], Any]
StatusListener = Callable[[StatusEvent], Any]
EventListener = Callable[[Any], Any]


class ITypedEventTarget(Protocol):
    """Event source restricted to `log` and `status` events."""

    @overload
    def add_event_listener(
        self, kind: Literal[EventKind.LOG, "log"], listener: LogListener | None
    ) -> None: ...

    @overload
    def add_event_listener(
        self,
        kind: Literal[EventKind.STATUS, "status"],
        listener: StatusListener | None,
    ) -> None: ...

    def add_event_listener(self, kind, listener) -> None:
        """Register a listener for one event kind."""
        ...

    @overload
    def remove_event_listener(
        self, kind: Literal[EventKind.LOG, "log"], listener: LogListener | None
    ) -> None: ...

    @overload
    def remove_event_listener(
        self,
        kind: Literal[EventKind.STATUS, "status"],
        listener: StatusListener | None,
    ) -> None: ...

    def remove_event_listener(self, kind, listener) -> None:
        """Remove a previously registered listener."""
        ...

    def dispatch_event(self, event: Event) -> bool:
        """Synchronously invoke every listener registered for the event's kind."""
        ...


class _Registration:
    """A listener slot; deactivated on removal so in-flight dispatches skip it."""

    __slots__ = ("listener", "active")

    def __init__(self, listener: EventListener):
        self.listener = listener
        self.active = True


def _resolve_kind(kind: EventKind | str) -> EventKind:
    try:
        return EventKind(kind)
    except ValueError:
        raise InvalidArgumentError(f"Unknown event kind: {kind!r}") from None


class TypedEventBus:
    """In-memory pub/sub for LogEvents and StatusEvents."""

    def __init__(self):
        self._lock = RLock()
        self._registrations: dict[EventKind, list[_Registration]] = {
            EventKind.LOG: [],
            EventKind.STATUS: [],
        }
        self._pending: set[asyncio.Task] = set()

    @overload
    def add_event_listener(
        self, kind: Literal[EventKind.LOG, "log"], listener: LogListener | None
    ) -> None: ...

    @overload
    def add_event_listener(
        self,
        kind: Literal[EventKind.STATUS, "status"],
        listener: StatusListener | None,
    ) -> None: ...

    def add_event_listener(self, kind, listener) -> None:
        """Register a listener. Re-registering the same listener is a no-op."""
        kind = _resolve_kind(kind)
        if listener is None:
            return

        with self._lock:
            registrations = self._registrations[kind]
            if any(r.listener == listener for r in registrations):
                return
            registrations.append(_Registration(listener))

    @overload
    def remove_event_listener(
        self, kind: Literal[EventKind.LOG, "log"], listener: LogListener | None
    ) -> None: ...

    @overload
    def remove_event_listener(
        self,
        kind: Literal[EventKind.STATUS, "status"],
        listener: StatusListener | None,
    ) -> None: ...

    def remove_event_listener(self, kind, listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        kind = _resolve_kind(kind)
        if listener is None:
            return

        with self._lock:
            registrations = self._registrations[kind]
            for i, registration in enumerate(registrations):
                if registration.listener == listener:
                    registration.active = False
                    del registrations[i]
                    return

    def dispatch_event(self, event: Event) -> bool:
        """Invoke listeners for the event's kind in registration order."""
        kind = _resolve_kind(getattr(event, "kind", None))

        # Snapshot: listeners added during this dispatch wait for the next one
        with self._lock:
            snapshot = list(self._registrations[kind])

        for registration in snapshot:
            if not registration.active:
                continue
            try:
                result = registration.listener(event)
            except Exception:
                logger.exception(
                    "Error in %s listener %r", kind.value, registration.listener
                )
                continue

            if inspect.isawaitable(result):
                self._schedule(kind, registration.listener, result)

        return True

    def listener_count(self, kind: EventKind | str) -> int:
        """Number of listeners currently registered for a kind."""
        kind = _resolve_kind(kind)
        with self._lock:
            return len(self._registrations[kind])

    async def drain(self) -> None:
        """Wait for asynchronous listener work scheduled by dispatches."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _schedule(self, kind: EventKind, listener: EventListener, awaitable) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "Dropping async %s listener %r: no running event loop",
                kind.value,
                listener,
            )
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        task = asyncio.ensure_future(awaitable, loop=loop)
        self._pending.add(task)

        def _done(finished: asyncio.Future) -> None:
            self._pending.discard(finished)
            if finished.cancelled():
                return
            error = finished.exception()
            if error is not None:
                logger.error(
                    "Error in async %s listener %r",
                    kind.value,
                    listener,
                    exc_info=error,
                )

        task.add_done_callback(_done)
