"""
Reporting

Period summaries of stored transactions and their chat rendering.
"""

__version__ = "1.0.0"

from .aggregator import aggregate
from .formatting import (
    BULLETIN_FAILED_MESSAGE,
    BULLETIN_QUEUED_MESSAGE,
    HELP_MESSAGE,
    REPORT_FAILED_MESSAGES,
    SAVE_FAILED_MESSAGE,
    format_asset_qty,
    format_gold_price,
    format_market_bulletin,
    format_report_message,
    format_report_section,
    format_saved_message,
    format_silver_price,
    format_usd,
    format_vnd,
)
from .models import AssetDetail, PeriodReport, StoredTransaction
from .periods import ReportPeriod, period_start

__all__ = [
    "AssetDetail",
    "BULLETIN_FAILED_MESSAGE",
    "BULLETIN_QUEUED_MESSAGE",
    "HELP_MESSAGE",
    "PeriodReport",
    "REPORT_FAILED_MESSAGES",
    "ReportPeriod",
    "SAVE_FAILED_MESSAGE",
    "StoredTransaction",
    "aggregate",
    "format_asset_qty",
    "format_gold_price",
    "format_market_bulletin",
    "format_report_message",
    "format_report_section",
    "format_saved_message",
    "format_silver_price",
    "format_usd",
    "format_vnd",
    "period_start",
]
