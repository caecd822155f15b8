"""Report service — load a period's transactions and aggregate them."""

from datetime import datetime, tzinfo

import structlog

from apps.api.domains.transactions.repository import TransactionRepository
from packages.market_rates.snapshot import RateSnapshot
from packages.reporting import PeriodReport, ReportPeriod, aggregate, period_start

logger = structlog.get_logger()


def generate_report(
    repository: TransactionRepository,
    rates: RateSnapshot,
    user_id: str,
    period: ReportPeriod,
    tz: tzinfo,
    now: datetime | None = None,
) -> PeriodReport:
    """Build the ``period`` report for ``user_id`` as of ``now`` in ``tz``.

    Raises PersistenceError if the transactions cannot be loaded.
    """
    now = now.astimezone(tz) if now else datetime.now(tz)
    start = period_start(period, now)
    transactions = repository.fetch_by_user_and_period_start(user_id, start)
    report = aggregate(transactions, start, rates, period)
    logger.info(
        "report_generated",
        user_id=user_id,
        period=report.period,
        start_date=report.start_date.isoformat(),
        transactions=len(transactions),
    )
    return report
