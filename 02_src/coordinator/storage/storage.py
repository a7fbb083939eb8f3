"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import (
    CoordinatorLog,
    LogEntry,
    LogSeverity,
    ServiceStatus,
    ServiceStatusRecord,
)


def _to_db_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _from_db_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value).astimezone(timezone.utc)


class IStorage(Protocol):
    """Persistent storage for service statuses and distributed logs (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Service statuses
    async def save_service_status(
        self, resource_id: str, service: str, status: ServiceStatus
    ) -> None:
        """Insert or replace the status of a service."""
        ...

    async def get_service_status(
        self, resource_id: str, service: str
    ) -> ServiceStatus | None:
        """Get the status of a service, None if never recorded."""
        ...

    async def list_service_statuses(
        self, resource_id: str | None = None
    ) -> list[ServiceStatusRecord]:
        """List recorded statuses, optionally for one resource."""
        ...

    # Log records
    async def save_log_record(
        self, resource_id: str | None, log: CoordinatorLog
    ) -> LogEntry:
        """Save a log record."""
        ...

    async def get_log_records(
        self,
        resource_id: str | None = None,
        after: datetime | None = None,
        severity: LogSeverity | None = None,
        limit: int = 100,
    ) -> list[LogEntry]:
        """Get log records with optional filters (newest first)."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def db_path(self) -> str | Path:
        return self._db_path

    async def init(self) -> None:
        """Initialize database and create tables."""
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = await aiosqlite.connect(self._db_path)

        # Read and execute schema
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # Service statuses
    async def save_service_status(
        self, resource_id: str, service: str, status: ServiceStatus
    ) -> None:
        """Insert or replace the status of a service."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute(
            """
            INSERT OR REPLACE INTO service_statuses
            (resource_id, service, status, updated_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                resource_id,
                service,
                ServiceStatus(status).value,
                _to_db_timestamp(datetime.now(timezone.utc)),
            ),
        )
        await self._conn.commit()

    async def get_service_status(
        self, resource_id: str, service: str
    ) -> ServiceStatus | None:
        """Get the status of a service, None if never recorded."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT status
            FROM service_statuses
            WHERE resource_id = ? AND service = ?
            """,
            (resource_id, service),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return ServiceStatus(row[0])

    async def list_service_statuses(
        self, resource_id: str | None = None
    ) -> list[ServiceStatusRecord]:
        """List recorded statuses, optionally for one resource."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        if resource_id is not None:
            cursor = await self._conn.execute(
                """
                SELECT resource_id, service, status, updated_at
                FROM service_statuses
                WHERE resource_id = ?
                ORDER BY resource_id, service
                """,
                (resource_id,),
            )
        else:
            cursor = await self._conn.execute(
                """
                SELECT resource_id, service, status, updated_at
                FROM service_statuses
                ORDER BY resource_id, service
                """
            )

        rows = await cursor.fetchall()

        return [
            ServiceStatusRecord(
                resource_id=row[0],
                service=row[1],
                status=ServiceStatus(row[2]),
                updated_at=_from_db_timestamp(row[3]),
            )
            for row in rows
        ]

    # Log records
    async def save_log_record(
        self, resource_id: str | None, log: CoordinatorLog
    ) -> LogEntry:
        """Save a log record."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        timestamp = log.timestamp
        if not isinstance(timestamp, datetime):
            timestamp = datetime.now(timezone.utc)

        entry = LogEntry(
            id=str(uuid.uuid4()),
            resource_id=resource_id,
            log=log,
            timestamp=timestamp,
        )

        await self._conn.execute(
            """
            INSERT INTO log_records
            (id, resource_id, severity, area, message, object, context, timestamp)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.id,
                resource_id,
                log.severity.value,
                log.area,
                log.message,
                json.dumps(log.object, default=str) if log.object is not None else None,
                json.dumps(dict(log.context), default=str),
                _to_db_timestamp(timestamp),
            ),
        )
        await self._conn.commit()
        return entry

    async def get_log_records(
        self,
        resource_id: str | None = None,
        after: datetime | None = None,
        severity: LogSeverity | None = None,
        limit: int = 100,
    ) -> list[LogEntry]:
        """Get log records with optional filters (newest first)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        # Build query dynamically
        conditions = []
        params = []

        if resource_id is not None:
            conditions.append("resource_id = ?")
            params.append(resource_id)
        if after:
            conditions.append("timestamp > ?")
            params.append(_to_db_timestamp(after))
        if severity:
            conditions.append("severity = ?")
            params.append(LogSeverity(severity).value)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, resource_id, severity, area, message, object, context, timestamp
            FROM log_records
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()

        entries = []
        for row in rows:
            timestamp = _from_db_timestamp(row[7])
            context = json.loads(row[6])
            context["timestamp"] = timestamp
            entries.append(
                LogEntry(
                    id=row[0],
                    resource_id=row[1],
                    log=CoordinatorLog(
                        severity=LogSeverity(row[2]),
                        area=row[3],
                        message=row[4],
                        object=json.loads(row[5]) if row[5] is not None else None,
                        context=context,
                    ),
                    timestamp=timestamp,
                )
            )

        return entries

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        tables = [
            "service_statuses",
            "log_records",
        ]

        for table in tables:
            await self._conn.execute(f"DELETE FROM {table}")

        await self._conn.commit()
