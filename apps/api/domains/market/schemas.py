"""Pydantic schemas for the market domain."""

from datetime import datetime

from pydantic import BaseModel, Field


class MarketRatesOut(BaseModel):
    """Current prices; ``fetched_at`` is null while the fallback is in use."""

    usd_vnd: float
    gold_usd: float = Field(..., description="USD per troy ounce")
    silver_usd: float = Field(..., description="USD per troy ounce")
    vn_sjc: float = Field(..., description="VND per chỉ of SJC gold")
    vn_silver: float = Field(..., description="VND per lượng, estimated")
    btc_vnd: float
    gold_diff: float
    silver_diff: float
    fetched_at: datetime | None = None
    stale_sources: list[str] = Field(default_factory=list)
