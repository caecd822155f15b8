"""
Market Rates

USD, gold, silver and Bitcoin prices for valuing savings.
"""

__version__ = "1.0.0"

from .provider import RateProvider
from .snapshot import FALLBACK_RATES, OUNCE_TO_TAEL, RateSnapshot, estimate_vn_silver
from .sources import DEFAULT_SOURCES, RateSource, fetch_snapshot, fetch_source

__all__ = [
    "DEFAULT_SOURCES",
    "FALLBACK_RATES",
    "OUNCE_TO_TAEL",
    "RateProvider",
    "RateSnapshot",
    "RateSource",
    "estimate_vn_silver",
    "fetch_snapshot",
    "fetch_source",
]
