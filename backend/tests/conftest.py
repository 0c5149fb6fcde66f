"""Root conftest: shared test configuration and core fixtures."""

import os
from datetime import datetime, timezone

import pytest

# Ensure tests never pick up a developer's seed file or zone
os.environ.setdefault("SEED_PATH", "")
os.environ.setdefault("LOCAL_TIMEZONE", "UTC")

from trustmap.core.clock import FixedClock  # noqa: E402
from trustmap.core.entity_store import EntityStore  # noqa: E402
from trustmap.core.signal_ledger import SignalLedger  # noqa: E402


@pytest.fixture
def clock():
    """Fixed at Monday 2026-03-02 12:00 UTC."""
    return FixedClock(datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    return EntityStore(clock)


@pytest.fixture
def ledger(store, clock):
    return SignalLedger(store, clock)
