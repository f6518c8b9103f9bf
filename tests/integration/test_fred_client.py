"""Integration tests for the FRED client against the mock FRED server"""

import httpx
import pytest
from fastapi.testclient import TestClient
from fincalc_gateway.api.main import create_app
from fincalc_gateway.domain.exceptions import RateSourceError
from fincalc_gateway.infrastructure.clients.fred import FredClient
from fincalc_gateway.infrastructure.rate_cache import RateCache
from mock_servers.fred_server.main import app as mock_fred_app


@pytest.fixture
def fred_client() -> FredClient:
    return FredClient(
        base_url="http://mock-fred",
        api_key="test-key",
        timeout=1.0,
        transport=httpx.ASGITransport(app=mock_fred_app),
    )


async def test_get_latest_observation(fred_client: FredClient):
    observation = await fred_client.get_latest_observation("DPRIME")

    assert observation.series_id == "DPRIME"
    assert observation.value == 7.5


@pytest.mark.parametrize("series_id", ["EMPTYSERIES", "MISSINGVALUE", "NOSUCHSERIES"])
async def test_unusable_series_raises(fred_client: FredClient, series_id: str):
    """Test empty observations, '.' values and HTTP errors"""
    with pytest.raises(RateSourceError):
        await fred_client.get_latest_observation(series_id)


async def test_missing_api_key_raises():
    client = FredClient(
        base_url="http://mock-fred",
        api_key="",
        transport=httpx.ASGITransport(app=mock_fred_app),
    )

    with pytest.raises(RateSourceError, match="400"):
        await client.get_latest_observation("DPRIME")


async def test_timeout_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("provider hung", request=request)

    client = FredClient(base_url="http://mock-fred", api_key="k", timeout=0.5, transport=httpx.MockTransport(handler))

    with pytest.raises(RateSourceError, match="timeout"):
        await client.get_latest_observation("DPRIME")


async def test_sends_latest_observation_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"observations": [{"date": "2025-06-02", "value": "7.50"}]})

    client = FredClient(base_url="http://mock-fred", api_key="k", transport=httpx.MockTransport(handler))
    await client.get_latest_observation("MORTGAGE30US")

    assert seen == {
        "series_id": "MORTGAGE30US",
        "api_key": "k",
        "file_type": "json",
        "limit": "1",
        "sort_order": "desc",
    }


async def test_rate_cache_over_mock_server(fred_client: FredClient):
    """Test the cache refreshes end to end through the client"""
    cached = await RateCache(fred_client).get_rates()

    assert cached.rates.prime_rate == 7.5
    assert cached.rates.mortgage30 == 6.89
    assert cached.rates.mortgage15 == 6.03
    assert cached.error is None


async def test_rate_cache_over_unreachable_provider():
    """Test connection errors fall back per series without a refresh error"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = FredClient(base_url="http://mock-fred", api_key="k", transport=httpx.MockTransport(handler))
    cached = await RateCache(client).get_rates()

    assert (cached.rates.prime_rate, cached.rates.mortgage30, cached.rates.mortgage15) == (8.5, 7.6, 7.1)
    assert cached.error is None
    assert sorted(cached.fallback_series) == ["DPRIME", "MORTGAGE15US", "MORTGAGE30US"]
    assert not cached.is_live("DPRIME")


def test_auto_loan_priced_statically_when_provider_unreachable():
    """Test an outage behind per-series fallbacks is reported as static pricing"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fred_client = FredClient(base_url="http://mock-fred", api_key="k", transport=httpx.MockTransport(handler))
    client = TestClient(create_app(rate_cache=RateCache(fred_client)))

    response = client.post(
        "/v1/calculators/auto-loan",
        json={"vehicle_price": 35_000, "down_payment": 7_000, "loan_term_years": 5, "credit_score": 704},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["rate_source"] == "static"
    assert data["quote"]["interest_rate"] == pytest.approx(8.4)
    assert data["rates_error"]
