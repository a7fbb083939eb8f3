"""Tests for Application."""

import pytest

from coordinator.app import Application
from coordinator.config import PROJECT_ROOT, Settings, resolve_db_path


def make_settings(**overrides):
    values = dict(
        db_path=":memory:",
        url=None,
        poll_interval=0.01,
        max_poll_interval=0.05,
        wait_timeout=1.0,
        api_host="localhost",
        api_port=8000,
    )
    values.update(overrides)
    return Settings(**values)


class TestApplicationStart:
    """Tests for Application.start()."""

    async def test_start_initializes_components(self):
        """Test that start initializes all components."""
        app = Application(settings=make_settings())
        await app.start()

        # Check all components are initialized
        assert app._storage is not None
        assert app._coordinator is not None
        assert app._recorder is not None

        # Coordinator and recorder share Storage
        assert app.coordinator.storage is app.storage
        assert app.coordinator.event_bus.listener_count("log") == 1

        await app.stop()

    async def test_settings_reach_coordinator(self):
        """Test that url and polling settings are applied."""
        app = Application(settings=make_settings(url="http://node-1:8000"))
        await app.start()

        assert app.coordinator.url == "http://node-1:8000"
        assert app.coordinator._poll_interval == 0.01

        await app.stop()

    async def test_db_path_overrides_settings(self, tmp_path):
        """Test that an explicit db_path wins over settings."""
        db_path = tmp_path / "app.db"
        app = Application(db_path=str(db_path), settings=make_settings())
        await app.start()
        await app.coordinator.set_service_status("node-1", "worker", "running")
        await app.stop()

        assert db_path.exists()

    def test_properties_before_start(self):
        """Test that components are unavailable before start."""
        app = Application(settings=make_settings())
        with pytest.raises(RuntimeError, match="Application not started"):
            app.storage
        with pytest.raises(RuntimeError, match="Application not started"):
            app.coordinator
        with pytest.raises(RuntimeError, match="Application not started"):
            app.recorder


class TestApplicationLifecycle:
    """Tests for stop() and reset()."""

    async def test_stop_closes_storage(self, application):
        """Test that stop unsubscribes the recorder and closes Storage."""
        await application.stop()

        assert application.storage._conn is None
        assert application.coordinator.event_bus.listener_count("log") == 0

    async def test_stop_flushes_pending_logs(self, tmp_path):
        """Test that logs dispatched right before stop are still written."""
        db_path = tmp_path / "app.db"
        app = Application(settings=make_settings(db_path=str(db_path)))
        await app.start()
        app.coordinator.create_logger("node-1").info("shutdown", "bye")
        await app.stop()

        reopened = Application(settings=make_settings(db_path=str(db_path)))
        await reopened.start()
        records = await reopened.storage.get_log_records()
        await reopened.stop()

        assert [r.log.message for r in records] == ["bye"]

    async def test_reset_clears_data(self, application):
        """Test that reset clears statuses and logs."""
        await application.coordinator.set_service_status("node-1", "worker", "running")
        application.coordinator.create_logger("node-1").info("boot", "started")

        await application.reset()

        assert await application.coordinator.get_service_status("node-1", "worker") is None
        assert await application.storage.get_log_records() == []


class TestConfig:
    """Tests for configuration helpers."""

    def test_resolve_db_path(self, tmp_path):
        """Test memory, relative and absolute database paths."""
        assert resolve_db_path(":memory:") == ":memory:"
        assert resolve_db_path("data/x.db") == PROJECT_ROOT / "data/x.db"
        assert resolve_db_path(tmp_path / "x.db") == tmp_path / "x.db"

    def test_settings_from_env(self, monkeypatch):
        """Test reading settings from environment variables."""
        monkeypatch.setenv("DATABASE_URL", ":memory:")
        monkeypatch.setenv("COORDINATOR_URL", "http://node-1:9000")
        monkeypatch.setenv("COORDINATOR_POLL_INTERVAL", "0.25")
        monkeypatch.setenv("API_PORT", "9000")

        settings = Settings.from_env()

        assert settings.db_path == ":memory:"
        assert settings.url == "http://node-1:9000"
        assert settings.poll_interval == 0.25
        assert settings.api_port == 9000
        assert settings.wait_timeout == 30.0

    def test_settings_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for name in ["DATABASE_URL", "COORDINATOR_URL", "API_HOST", "API_PORT"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.url is None
        assert settings.api_host == "localhost"
        assert settings.api_port == 8000
