"""API routers."""

from . import health, logs, status

__all__ = ["health", "logs", "status"]
