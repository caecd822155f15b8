"""Market rates router — the cached snapshot, never a live fetch."""

from fastapi import APIRouter, Depends

from apps.api.core.auth import require_api_key
from apps.api.deps import get_rate_provider
from apps.api.domains.market.schemas import MarketRatesOut
from packages.market_rates import RateProvider

router = APIRouter(tags=["market"], dependencies=[Depends(require_api_key)])


@router.get("/market-rates", response_model=MarketRatesOut)
async def get_market_rates(provider: RateProvider = Depends(get_rate_provider)):
    return MarketRatesOut(**provider.current().to_dict())
