"""Logger that turns log calls into LogEvents on a coordinator."""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from ..models import CoordinatorLog, LogEvent, LogSeverity
from .base import Logger


class ILogEventTarget(Protocol):
    """Anything LogEvents can be dispatched on."""

    def dispatch_event(self, event: LogEvent) -> bool: ...


class CoordinatorLogger(Logger):
    """Dispatches every log call as a distributable LogEvent.

    Bound to one resource id for its lifetime (None means the record
    concerns the coordinator itself).
    """

    def __init__(self, resource_id: str | None, coordinator: ILogEventTarget):
        self._resource_id = resource_id
        self._coordinator = coordinator

    @property
    def resource_id(self) -> str | None:
        return self._resource_id

    def log(
        self,
        severity: LogSeverity | str,
        area: str,
        message: str,
        object: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        effective_context = dict(context or {})
        if effective_context.get("timestamp") is None:
            effective_context["timestamp"] = datetime.now(timezone.utc)

        self._coordinator.dispatch_event(
            LogEvent(
                self._resource_id,
                CoordinatorLog(
                    severity=LogSeverity(severity),
                    area=area,
                    message=message,
                    object=object,
                    context=effective_context,
                ),
                should_distribute=True,
            )
        )
