"""GET /api/rates - Cached market rates proxy"""

from fastapi import APIRouter, Depends

from fincalc_gateway.api.v1.schemas import RatesResponse, RatesSchema
from fincalc_gateway.api.dependencies import get_rate_cache
from fincalc_gateway.infrastructure.rate_cache import RateCache

router = APIRouter()


@router.get("/rates", response_model=RatesResponse, response_model_exclude_none=True)
async def get_rates(rate_cache: RateCache = Depends(get_rate_cache)):
    """
    Return prime and mortgage rates, refreshed from FRED at most once per 24 hours.

    Always 200: provider failures are reported through the `error` field
    alongside fallback rates.
    """
    cached = await rate_cache.get_rates()

    return RatesResponse(
        rates=RatesSchema(
            prime_rate=cached.rates.prime_rate,
            mortgage30=cached.rates.mortgage30,
            mortgage15=cached.rates.mortgage15,
        ),
        last_updated=cached.last_updated,
        expires_at=cached.expires_at,
        error=cached.error,
    )
