"""FRED API HTTP client for fetching the latest observation of a rate series"""

import math
import httpx
from datetime import datetime, timezone
from fincalc_gateway.domain.models import RateObservation
from fincalc_gateway.domain.exceptions import RateSourceError
from fincalc_gateway.config import settings


class FredClient:
    """Client for the St. Louis Fed economic data API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.fred_api_base
        self.api_key = api_key if api_key is not None else settings.fred_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_latest_observation(self, series_id: str) -> RateObservation:
        """
        Fetch the most recent observation for a series (e.g. DPRIME).

        Raises:
            RateSourceError: On timeout, transport or HTTP errors, empty or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/fred/series/observations",
                    params={
                        "series_id": series_id,
                        "api_key": self.api_key,
                        "file_type": "json",
                        "limit": 1,
                        "sort_order": "desc",
                    },
                )
                response.raise_for_status()
                data = response.json()

                observations = data.get("observations") or []
                if not observations:
                    raise RateSourceError(f"No rate data available for {series_id}")

                # FRED reports missing values as "."
                value = float(observations[0]["value"])
                if not math.isfinite(value):
                    raise ValueError(f"non-finite value {value}")

                return RateObservation(
                    series_id=series_id,
                    value=value,
                    fetched_at=datetime.now(timezone.utc),
                )

            except httpx.TimeoutException as e:
                raise RateSourceError(f"FRED API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise RateSourceError(f"FRED API request failed: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise RateSourceError(f"FRED API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise RateSourceError(f"Invalid observation data for {series_id}: {e}") from e
