"""
Period report aggregation.

Amounts of income, expense and savings are summed as stored (VND at the
rate of the day they were recorded). Savings held in a foreign unit are
also accumulated by quantity and valued at the snapshot passed in, so the
asset section moves with the market while ``total_savings_vnd`` does not.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Union

from packages.ledger_parser.models import LOCAL_CURRENCY, TransactionKind
from packages.market_rates.snapshot import RateSnapshot

from .models import AssetDetail, PeriodReport, StoredTransaction

logger = logging.getLogger(__name__)


def aggregate(
    transactions: Iterable[StoredTransaction],
    start_date: Union[date, datetime],
    rates: RateSnapshot,
    period: str,
) -> PeriodReport:
    """
    Summarize ``transactions`` into a PeriodReport in one pass.

    Args:
        transactions: Stored transactions already filtered to the period
        start_date: First instant of the period
        rates: Snapshot used to value foreign-unit savings
        period: Label carried into the report ("week" or "month")

    Returns:
        PeriodReport with totals, expense per category and asset valuations
    """
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    report = PeriodReport(period=getattr(period, "value", period), start_date=start_date)

    for tx in transactions:
        if tx.type == TransactionKind.INCOME.value:
            report.total_income += tx.amount
        elif tx.type == TransactionKind.EXPENSE.value:
            report.total_expense += tx.amount
            report.expense_by_category[tx.category] = (
                report.expense_by_category.get(tx.category, 0.0) + tx.amount
            )
        elif tx.type == TransactionKind.SAVING.value:
            report.total_savings_vnd += tx.amount
            if tx.currency != LOCAL_CURRENCY.value:
                asset = report.assets.setdefault(tx.currency, AssetDetail())
                asset.quantity += tx.original_amount
                asset.rate = rates.rate_for(tx.currency)
                asset.current_vnd = asset.quantity * asset.rate
        else:
            logger.debug("Skipping transaction %s with unknown type %r", tx.id, tx.type)

    report.total_assets_vnd = sum(a.current_vnd for a in report.assets.values())
    report.balance = report.total_income - report.total_expense - report.total_savings_vnd
    return report
