"""Service test fixtures: deterministic directory + FastAPI test client.

Invariants:
    - Every test gets a fresh DirectoryService on a FixedClock (Monday 12:00 UTC)
    - get_directory dependency overridden; module singleton patched for readiness probe

Design Decisions:
    - httpx ASGITransport does not run the lifespan, so no seed file or logging setup
      happens in tests
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

import trustmap.services.directory_service as directory_module
from trustmap.core.clock import FixedClock
from trustmap.core.guide_catalog import GuideCatalog
from trustmap.core.records import Guide
from trustmap.main import app
from trustmap.services.directory_service import DirectoryService, get_directory


@pytest.fixture
def service_clock():
    return FixedClock(datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def directory(service_clock):
    guides = GuideCatalog([
        Guide(id="guide-1", category="food", title="Where to eat", content="..."),
        Guide(id="guide-2", category="nature", title="Trails"),
    ])
    return DirectoryService(clock=service_clock, timezone="UTC", guides=guides)


@pytest.fixture
async def client(directory):
    """FastAPI test client bound to the fixture directory."""
    app.dependency_overrides[get_directory] = lambda: directory

    original = directory_module.directory
    directory_module.directory = directory

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    directory_module.directory = original
