"""
Market rate snapshot - one consistent set of prices.

Units:
    usd_vnd     VND per 1 USD
    gold_usd    USD per troy ounce of gold (world spot)
    silver_usd  USD per troy ounce of silver (world spot)
    vn_sjc      VND per chỉ of SJC gold (1 lượng = 10 chỉ)
    vn_silver   VND per lượng of silver, estimated from world spot
    btc_vnd     VND per 1 BTC

World prices are compared with local ones per lượng (tael), using
OUNCE_TO_TAEL troy ounces per lượng.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional

from packages.ledger_parser.models import Currency

OUNCE_TO_TAEL = 1.20565
# Local silver trades above converted world spot
VN_SILVER_PREMIUM = 1.05
CHI_PER_TAEL = 10

# Snapshot field holding the VND price of one unit of each savings currency
LOCAL_RATE_FIELDS: Dict[str, str] = {
    Currency.USD.value: "usd_vnd",
    Currency.GOLD.value: "vn_sjc",
    Currency.BTC.value: "btc_vnd",
}


def estimate_vn_silver(silver_usd: float, usd_vnd: float) -> float:
    """Estimated local silver price per lượng from the world spot price."""
    return silver_usd * usd_vnd * OUNCE_TO_TAEL * VN_SILVER_PREMIUM


@dataclass(frozen=True)
class RateSnapshot:
    usd_vnd: float
    gold_usd: float
    silver_usd: float
    vn_sjc: float
    vn_silver: float
    btc_vnd: float
    fetched_at: Optional[datetime] = None
    stale_sources: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def world_gold_vnd(self) -> float:
        """World gold price converted to VND per lượng."""
        return self.gold_usd * self.usd_vnd * OUNCE_TO_TAEL

    @property
    def world_silver_vnd(self) -> float:
        """World silver price converted to VND per lượng."""
        return self.silver_usd * self.usd_vnd * OUNCE_TO_TAEL

    @property
    def sjc_per_tael(self) -> float:
        return self.vn_sjc * CHI_PER_TAEL

    @property
    def gold_diff(self) -> float:
        """Local SJC minus converted world gold, per lượng. Positive: VN is dearer."""
        return self.sjc_per_tael - self.world_gold_vnd

    @property
    def silver_diff(self) -> float:
        return self.vn_silver - self.world_silver_vnd

    def rate_for(self, currency: str) -> float:
        """VND value of one unit of ``currency``; 1.0 for VND or unknown units."""
        key = getattr(currency, "value", currency)
        name = LOCAL_RATE_FIELDS.get(str(key).upper())
        if name is None:
            return 1.0
        return getattr(self, name)

    def to_local(self, amount: float, currency: str) -> float:
        """Convert ``amount`` of ``currency`` into VND at this snapshot."""
        return amount * self.rate_for(currency)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["stale_sources"] = sorted(self.stale_sources)
        data["gold_diff"] = self.gold_diff
        data["silver_diff"] = self.silver_diff
        return data


# Used until the first successful fetch
FALLBACK_RATES = RateSnapshot(
    usd_vnd=25_400,
    gold_usd=2_700,
    silver_usd=32,
    vn_sjc=8_500_000,
    vn_silver=1_000_000,
    btc_vnd=2_500_000_000,
)
