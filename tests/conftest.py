"""Shared fixtures: in-memory store, fixed clock, throwaway sqlite database."""

from datetime import datetime

import pytest

from core.clock import FixedClock
from core.database import Database
from core.errors import StoreUnavailableError
from core.key_value_store import InMemoryKeyValueStore
from core.services.rating_service import RatingService
from core.services.time_range_service import TimeRangeService
from policy.risk_gate import RiskGate
from policy.time_window_policy import TimeWindowPolicy


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store whose reads can be made to fail while writes still work."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_reads = False

    def get(self, key):
        if self.fail_reads:
            raise StoreUnavailableError(f"Cannot read {key!r}")
        return super().get(key)


# 2024-03-15 is a Friday (day 6 with Sunday = 1)
FRIDAY = datetime(2024, 3, 15)


def at(hour: int, minute: int = 0, day: datetime = FRIDAY) -> datetime:
    return day.replace(hour=hour, minute=minute)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return FixedClock(at(12, 0))


@pytest.fixture
def policy(clock):
    return TimeWindowPolicy(clock)


@pytest.fixture
def time_range_service(store):
    return TimeRangeService(store)


@pytest.fixture
def rating_service(store):
    return RatingService(store)


@pytest.fixture
def gate(rating_service, time_range_service, policy):
    return RiskGate(rating_service, time_range_service, policy)


@pytest.fixture
def db(tmp_path):
    database = Database(tmp_path / "test.db")
    yield database
    database.close()
