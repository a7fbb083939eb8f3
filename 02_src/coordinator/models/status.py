"""Service status models."""

from dataclasses import dataclass
from datetime import datetime

from .events import ServiceStatus


@dataclass
class ServiceStatusRecord:
    """Stored status of one service on one resource."""

    resource_id: str
    service: str
    status: ServiceStatus
    updated_at: datetime
