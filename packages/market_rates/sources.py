"""External market-data sources.

Every source fills exactly one snapshot field and fails on its own: a
broken or slow feed leaves that field at its previous value while the
others still update.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

import httpx

from .snapshot import RateSnapshot, estimate_vn_silver

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

# CoinGecko rejects requests that do not look like a browser
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"


@dataclass(frozen=True)
class RateSource:
    """One HTTP feed and how to read its value out of the JSON payload."""

    target: str
    url: str
    extract: Callable[[Any], float]
    headers: Dict[str, str] = field(default_factory=dict)


def _usd_vnd(payload: Any) -> float:
    return payload["rates"]["VND"]


def _spot_price(payload: Any) -> float:
    return payload["price"]


def _sjc_per_chi(payload: Any) -> float:
    # Quoted per lượng
    return payload["sell"] / 10


def _btc_vnd(payload: Any) -> float:
    return payload["bitcoin"]["vnd"]


DEFAULT_SOURCES: Sequence[RateSource] = (
    RateSource("usd_vnd", "https://open.er-api.com/v6/latest/USD", _usd_vnd),
    RateSource("gold_usd", "https://api.gold-api.com/price/XAU", _spot_price),
    RateSource("silver_usd", "https://api.gold-api.com/price/XAG", _spot_price),
    RateSource("vn_sjc", "https://www.vang.today/api/prices?type=SJL1L10", _sjc_per_chi),
    RateSource(
        "btc_vnd",
        "https://api.coingecko.com/api/v3/simple/price?ids=bitcoin&vs_currencies=vnd",
        _btc_vnd,
        headers={"User-Agent": BROWSER_USER_AGENT},
    ),
)


async def fetch_source(
    client: httpx.AsyncClient,
    source: RateSource,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Optional[float]:
    """Fetch a single value, or None if the source is down, slow or malformed."""
    try:
        response = await asyncio.wait_for(
            client.get(source.url, headers=source.headers, timeout=timeout),
            timeout=timeout,
        )
        response.raise_for_status()
        value = float(source.extract(response.json()))
    except asyncio.TimeoutError:
        logger.warning("Rate source %s timed out after %.1fs", source.target, timeout)
        return None
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning("Rate source %s failed: %s", source.target, e)
        return None

    if not value > 0:
        logger.warning("Rate source %s returned non-positive value %s", source.target, value)
        return None
    return value


async def fetch_snapshot(
    client: httpx.AsyncClient,
    previous: RateSnapshot,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    sources: Iterable[RateSource] = DEFAULT_SOURCES,
    now: Optional[datetime] = None,
) -> RateSnapshot:
    """
    Fetch all sources concurrently and build the next snapshot.

    Fields whose source failed keep the value from ``previous`` and are
    listed in ``stale_sources`` of the result.
    """
    sources = list(sources)
    values = await asyncio.gather(*(fetch_source(client, s, timeout) for s in sources))

    updates: Dict[str, Any] = {}
    stale = set()
    for source, value in zip(sources, values):
        if value is None:
            stale.add(source.target)
        else:
            updates[source.target] = value

    if "silver_usd" in updates:
        usd_vnd = updates.get("usd_vnd", previous.usd_vnd)
        updates["vn_silver"] = estimate_vn_silver(updates["silver_usd"], usd_vnd)

    if updates:
        updates["fetched_at"] = now or datetime.now(timezone.utc)

    return replace(previous, stale_sources=frozenset(stale), **updates)
