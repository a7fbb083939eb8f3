"""Tests for SqliteCoordinator."""

import asyncio

import pytest

from coordinator.errors import BackendUnavailableError
from coordinator.models import ServiceStatus
from coordinator.sqlite import SqliteCoordinator
from coordinator.storage import Storage


class TestSqliteCoordinatorIdentity:
    """Tests for url."""

    def test_default_url(self, sqlite_coordinator):
        """Test that the url names the database."""
        assert sqlite_coordinator.url == "sqlite:///:memory:"

    def test_explicit_url(self, storage):
        """Test that an explicit url wins."""
        coordinator = SqliteCoordinator(storage, url="http://node-1:8000")
        assert coordinator.url == "http://node-1:8000"


class TestSqliteCoordinatorBackend:
    """Tests for backend failures."""

    async def test_set_fails_when_storage_unavailable(self):
        """Test that storage failures surface as BackendUnavailableError."""
        coordinator = SqliteCoordinator(Storage(":memory:"))
        events = []
        coordinator.add_event_listener("status", events.append)

        with pytest.raises(BackendUnavailableError) as exc_info:
            await coordinator.set_service_status("node-1", "worker", "running")

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert events == []

    async def test_get_fails_when_storage_unavailable(self):
        """Test that reads surface storage failures."""
        coordinator = SqliteCoordinator(Storage(":memory:"))
        with pytest.raises(BackendUnavailableError):
            await coordinator.get_service_status("node-1", "worker")

    async def test_wait_fails_when_storage_unavailable(self):
        """Test that waits surface storage failures and clean up."""
        coordinator = SqliteCoordinator(Storage(":memory:"))
        with pytest.raises(BackendUnavailableError):
            await coordinator.wait_for_service_status("node-1", "worker", "running")
        assert coordinator.event_bus.listener_count("status") == 0

    async def test_set_fails_after_close(self, storage, sqlite_coordinator):
        """Test that a closed database is reported as unavailable."""
        await storage.close()
        with pytest.raises(BackendUnavailableError):
            await sqlite_coordinator.set_service_status("node-1", "worker", "stopped")


class TestSqliteCoordinatorPolling:
    """Tests for changes written outside this coordinator."""

    async def test_wait_sees_direct_storage_write(self, storage, sqlite_coordinator):
        """Test that polling picks up writes that dispatched no event."""
        waiter = asyncio.create_task(
            sqlite_coordinator.wait_for_service_status("node-1", "worker", "running")
        )
        await asyncio.sleep(0.05)
        assert not waiter.done()

        await storage.save_service_status("node-1", "worker", ServiceStatus.RUNNING)
        await asyncio.wait_for(waiter, timeout=2)
        assert sqlite_coordinator.event_bus.listener_count("status") == 0

    async def test_two_coordinators_share_database(self, tmp_path):
        """Test coordinators in different 'processes' sharing one file."""
        db_path = tmp_path / "shared.db"
        storage_a = Storage(db_path)
        storage_b = Storage(db_path)
        await storage_a.init()
        await storage_b.init()
        try:
            node_a = SqliteCoordinator(storage_a, poll_interval=0.01, max_poll_interval=0.05)
            node_b = SqliteCoordinator(storage_b, poll_interval=0.01, max_poll_interval=0.05)

            waiter = asyncio.create_task(
                node_a.wait_for_service_status("node-1", "worker", "running")
            )
            await asyncio.sleep(0.05)
            assert not waiter.done()

            await node_b.set_service_status("node-1", "worker", "running")
            await asyncio.wait_for(waiter, timeout=2)

            assert await node_a.get_service_status("node-1", "worker") == "running"
        finally:
            await storage_a.close()
            await storage_b.close()
