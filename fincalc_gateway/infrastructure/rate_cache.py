"""24-hour market rate cache in front of the FRED rate provider"""

import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol
from fincalc_gateway.config import settings
from fincalc_gateway.domain.exceptions import RateSourceError
from fincalc_gateway.domain.models import CachedRates, MarketRates, RateObservation
from fincalc_gateway.infrastructure.observability.logging import log_rate_refresh
from fincalc_gateway.infrastructure.observability.metrics import (
    rate_cache_requests_counter,
    rate_fallback_counter,
    rate_fetch_failures_counter,
    rate_refresh_histogram,
)

logger = logging.getLogger(__name__)

PRIME_RATE_SERIES = "DPRIME"
MORTGAGE30_SERIES = "MORTGAGE30US"
MORTGAGE15_SERIES = "MORTGAGE15US"

FALLBACK_PRIME_RATE = 8.5
FALLBACK_MORTGAGE30 = 7.6
FALLBACK_MORTGAGE15 = 7.1

SERIES_FALLBACKS = {
    PRIME_RATE_SERIES: FALLBACK_PRIME_RATE,
    MORTGAGE30_SERIES: FALLBACK_MORTGAGE30,
    MORTGAGE15_SERIES: FALLBACK_MORTGAGE15,
}

FALLBACK_ERROR = "Using fallback rates - FRED API unavailable"


class RateSource(Protocol):
    async def get_latest_observation(self, series_id: str) -> RateObservation:
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fallback_rates() -> MarketRates:
    return MarketRates(
        prime_rate=FALLBACK_PRIME_RATE,
        mortgage30=FALLBACK_MORTGAGE30,
        mortgage15=FALLBACK_MORTGAGE15,
    )


class RateCache:
    """
    Holds the last fetched market rates for a fixed time-to-live.

    States: empty -> fresh -> stale -> fresh (refetch). A failed refresh still
    lands in fresh, holding fallback values. No lock is taken around the slot;
    concurrent refreshes race and the last writer wins.
    """

    def __init__(
        self,
        source: RateSource,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.source = source
        self.ttl = ttl or timedelta(hours=settings.rate_cache_ttl_hours)
        self.clock = clock
        self._cached: Optional[CachedRates] = None

    @property
    def cached(self) -> Optional[CachedRates]:
        return self._cached

    def invalidate(self) -> None:
        self._cached = None

    async def get_rates(self) -> CachedRates:
        """Serve cached rates while valid, otherwise refresh first"""
        now = self.clock()

        if self._cached is not None and self._cached.is_valid(now):
            rate_cache_requests_counter.labels(result="hit").inc()
            return self._cached

        rate_cache_requests_counter.labels(result="miss").inc()
        return await self.refresh(now)

    async def refresh(self, now: datetime | None = None) -> CachedRates:
        """
        Fetch all series concurrently and replace the cached record.

        Each series falls back to its own constant on failure and is listed in
        fallback_series. If the refresh itself fails, the full fallback set is
        cached with an error message.
        """
        now = now or self.clock()
        start_time = time.time()

        try:
            with rate_refresh_histogram.time():
                fetched = await asyncio.gather(*(self._fetch_rate(series_id) for series_id in SERIES_FALLBACKS))

            values = {}
            fallback_series = []
            for (series_id, fallback), value in zip(SERIES_FALLBACKS.items(), fetched):
                if value is None:
                    fallback_series.append(series_id)
                    value = fallback
                values[series_id] = value

            cached = CachedRates(
                rates=MarketRates(
                    prime_rate=values[PRIME_RATE_SERIES],
                    mortgage30=values[MORTGAGE30_SERIES],
                    mortgage15=values[MORTGAGE15_SERIES],
                ),
                last_updated=now,
                expires_at=now + self.ttl,
                fallback_series=fallback_series,
            )

        except Exception as e:
            logger.error(f"Error fetching rates from FRED: {e}")
            rate_fallback_counter.inc()
            cached = CachedRates(
                rates=fallback_rates(),
                last_updated=now,
                expires_at=now + self.ttl,
                error=FALLBACK_ERROR,
                fallback_series=list(SERIES_FALLBACKS),
            )

        self._cached = cached

        duration_ms = (time.time() - start_time) * 1000
        log_rate_refresh(
            cached.rates.prime_rate,
            cached.rates.mortgage30,
            cached.rates.mortgage15,
            duration_ms,
            cached.error,
            cached.fallback_series,
        )
        return cached

    async def _fetch_rate(self, series_id: str) -> Optional[float]:
        """Latest value of one series, None when the provider fails"""
        try:
            observation = await self.source.get_latest_observation(series_id)
            return observation.value
        except RateSourceError as e:
            rate_fetch_failures_counter.labels(series=series_id).inc()
            logger.warning(f"Error fetching FRED rate for {series_id}: {e}", extra={"series_id": series_id})
            return None
