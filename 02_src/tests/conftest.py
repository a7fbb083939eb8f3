"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from coordinator.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def event_bus():
    """Create an empty TypedEventBus."""
    from coordinator.event_bus import TypedEventBus

    return TypedEventBus()


@pytest.fixture
def memory_coordinator():
    """Create InMemoryCoordinator."""
    from coordinator.memory import InMemoryCoordinator

    return InMemoryCoordinator(url="memory://test")


@pytest.fixture
def sqlite_coordinator(storage):
    """Create SqliteCoordinator over in-memory storage with fast polling."""
    from coordinator.sqlite import SqliteCoordinator

    return SqliteCoordinator(storage, poll_interval=0.01, max_poll_interval=0.05)


@pytest_asyncio.fixture
async def application():
    """Create and start Application on an in-memory database."""
    from coordinator.app import Application
    from coordinator.config import Settings

    settings = Settings(
        db_path=":memory:",
        url="http://coordinator.test",
        poll_interval=0.01,
        max_poll_interval=0.05,
        wait_timeout=1.0,
        api_host="localhost",
        api_port=8000,
    )
    app = Application(settings=settings)
    await app.start()
    yield app
    await app.stop()


@pytest_asyncio.fixture
async def http_client(application):
    """httpx client wired in-process to the FastAPI app."""
    from coordinator.api import create_fastapi_app

    fastapi_app = create_fastapi_app(application)
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://coordinator.test"
    ) as client:
        yield client


@pytest_asyncio.fixture
async def remote_coordinator(http_client):
    """RemoteCoordinator talking to the in-process service."""
    from coordinator.remote import RemoteCoordinator

    rc = RemoteCoordinator(
        "http://coordinator.test", client=http_client, wait_timeout=0.2
    )
    yield rc
    await rc.aclose()


@pytest_asyncio.fixture(params=["memory", "sqlite", "remote"])
async def any_coordinator(request):
    """Every concrete coordinator, each honouring the same contract."""
    from coordinator.api import create_fastapi_app
    from coordinator.app import Application
    from coordinator.config import Settings
    from coordinator.memory import InMemoryCoordinator
    from coordinator.remote import RemoteCoordinator
    from coordinator.sqlite import SqliteCoordinator
    from coordinator.storage import Storage

    if request.param == "memory":
        yield InMemoryCoordinator(url="memory://test")

    elif request.param == "sqlite":
        st = Storage(":memory:")
        await st.init()
        yield SqliteCoordinator(st, poll_interval=0.01, max_poll_interval=0.05)
        await st.close()

    else:
        settings = Settings(
            db_path=":memory:",
            url="http://coordinator.test",
            poll_interval=0.01,
            max_poll_interval=0.05,
            wait_timeout=1.0,
            api_host="localhost",
            api_port=8000,
        )
        app = Application(settings=settings)
        await app.start()
        transport = httpx.ASGITransport(app=create_fastapi_app(app))
        async with httpx.AsyncClient(
            transport=transport, base_url="http://coordinator.test"
        ) as client:
            rc = RemoteCoordinator(
                "http://coordinator.test", client=client, wait_timeout=0.2
            )
            yield rc
            await rc.aclose()
        await app.stop()
