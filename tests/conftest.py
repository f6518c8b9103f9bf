"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Union
from fastapi.testclient import TestClient
from fincalc_gateway.api.main import create_app
from fincalc_gateway.domain.models import Debt, RateObservation
from fincalc_gateway.infrastructure.rate_cache import RateCache


class FakeClock:
    """Controllable clock for cache expiry tests"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeRateSource:
    """Rate source returning canned values, or raising canned exceptions, per series"""

    def __init__(self, values: Dict[str, Union[float, Exception]]):
        self.values = values
        self.calls: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def get_latest_observation(self, series_id: str) -> RateObservation:
        self.calls.append(series_id)
        value = self.values[series_id]
        if isinstance(value, Exception):
            raise value
        return RateObservation(series_id=series_id, value=value, fetched_at=datetime.now(timezone.utc))


LIVE_RATES = {
    "DPRIME": 7.5,
    "MORTGAGE30US": 6.89,
    "MORTGAGE15US": 6.03,
}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 6, 2, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_rate_source():
    return FakeRateSource


@pytest.fixture
def rate_source() -> FakeRateSource:
    return FakeRateSource(dict(LIVE_RATES))


@pytest.fixture
def failing_rate_source() -> FakeRateSource:
    """Provider failing before any per-series handling (e.g. total network failure)"""
    return FakeRateSource({series: RuntimeError("network down") for series in LIVE_RATES})


@pytest.fixture
def rate_cache(rate_source: FakeRateSource, clock: FakeClock) -> RateCache:
    return RateCache(rate_source, clock=clock)


@pytest.fixture
def client(rate_cache: RateCache) -> TestClient:
    """Create FastAPI test client with a fake rate provider"""
    app = create_app(rate_cache=rate_cache)
    return TestClient(app)


@pytest.fixture
def failing_client(failing_rate_source: FakeRateSource, clock: FakeClock) -> TestClient:
    app = create_app(rate_cache=RateCache(failing_rate_source, clock=clock))
    return TestClient(app)


@pytest.fixture
def seeded_debts() -> list[Debt]:
    """The two example credit cards the consolidation calculator starts with"""
    return [
        Debt(id="card1", name="Credit Card 1", balance=8000, interest_rate=22.99, monthly_payment=250, annual_fee=95),
        Debt(id="card2", name="Credit Card 2", balance=4500, interest_rate=21.24, monthly_payment=150, annual_fee=0),
    ]
