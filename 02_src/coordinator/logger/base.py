"""Generic structured logger capability."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ..models import LogSeverity


class Logger(ABC):
    """Anything that accepts structured log calls.

    Implementations only provide `log`; scoping and the per-severity
    helpers are shared.
    """

    @abstractmethod
    def log(
        self,
        severity: LogSeverity | str,
        area: str,
        message: str,
        object: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Emit one structured log record."""

    def create_scope(self, prefix: str, resource_id: str | None = None) -> "Logger":
        """Return a logger that prefixes areas and tags records with a resource id."""
        return ScopedLogger(self, prefix, resource_id)

    def debug(self, area: str, message: str, object: Any = None, context=None) -> None:
        self.log(LogSeverity.DEBUG, area, message, object, context)

    def info(self, area: str, message: str, object: Any = None, context=None) -> None:
        self.log(LogSeverity.INFO, area, message, object, context)

    def warn(self, area: str, message: str, object: Any = None, context=None) -> None:
        self.log(LogSeverity.WARN, area, message, object, context)

    def error(self, area: str, message: str, object: Any = None, context=None) -> None:
        self.log(LogSeverity.ERROR, area, message, object, context)


def join_area(prefix: str, area: str) -> str:
    """Join a scope prefix and an area, skipping empty parts."""
    return ".".join(part for part in (prefix, area) if part)


class ScopedLogger(Logger):
    """Logger bound to an area prefix and, optionally, a resource id."""

    def __init__(self, parent: Logger, prefix: str, resource_id: str | None = None):
        self._parent = parent
        self._prefix = prefix
        self._resource_id = resource_id

    @property
    def prefix(self) -> str:
        return self._prefix

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
        scoped_context = dict(context or {})
        if self._resource_id is not None:
            scoped_context.setdefault("resource_id", self._resource_id)

        self._parent.log(
            severity,
            join_area(self._prefix, area),
            message,
            object,
            scoped_context,
        )
