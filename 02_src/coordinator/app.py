"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .config import Settings
from .logging_config import get_logger
from .recorder import LogRecorder
from .sqlite import SqliteCoordinator
from .storage import IStorage, Storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Clear stored statuses and logs."""
        ...

    @property
    def storage(self) -> IStorage: ...

    @property
    def coordinator(self) -> SqliteCoordinator: ...

    @property
    def settings(self) -> Settings: ...


class Application:
    """Coordinator service bootstrap."""

    def __init__(self, db_path: str | None = None, settings: Settings | None = None):
        self._settings = settings or Settings.from_env()
        if db_path is not None:
            self._settings.db_path = db_path

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._coordinator: SqliteCoordinator | None = None
        self._recorder: LogRecorder | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting coordinator service")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._settings.db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Coordinator (depends on Storage)
        self._coordinator = SqliteCoordinator(
            self._storage,
            url=self._settings.url,
            poll_interval=self._settings.poll_interval,
            max_poll_interval=self._settings.max_poll_interval,
        )
        logger.info("Coordinator initialized at %s", self._coordinator.url)

        # 3. LogRecorder (depends on Coordinator + Storage)
        self._recorder = LogRecorder(self._coordinator, self._storage)
        await self._recorder.start()
        logger.info("LogRecorder started")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._recorder:
            await self._recorder.stop()
        if self._coordinator:
            # Let pending log writes finish before the connection closes
            await self._coordinator.event_bus.drain()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Clear stored statuses and logs."""
        if self._coordinator:
            await self._coordinator.event_bus.drain()
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def coordinator(self) -> SqliteCoordinator:
        """Get coordinator instance."""
        if not self._coordinator:
            raise RuntimeError("Application not started")
        return self._coordinator

    @property
    def recorder(self) -> LogRecorder:
        """Get log recorder instance."""
        if not self._recorder:
            raise RuntimeError("Application not started")
        return self._recorder
