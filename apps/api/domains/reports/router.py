"""Reports router — weekly and monthly summaries."""

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query

from apps.api.core.auth import require_api_key
from apps.api.deps import get_local_timezone, get_rate_provider, get_repository
from apps.api.domains.reports.schemas import ReportOut
from apps.api.domains.reports.service import generate_report
from apps.api.domains.transactions.repository import TransactionRepository
from packages.market_rates import RateProvider
from packages.reporting import ReportPeriod

router = APIRouter(tags=["reports"], dependencies=[Depends(require_api_key)])


@router.get("/report", response_model=ReportOut)
def get_report(
    user_id: str = Query(..., min_length=1),
    period: ReportPeriod = Query(...),
    repository: TransactionRepository = Depends(get_repository),
    provider: RateProvider = Depends(get_rate_provider),
    tz: ZoneInfo = Depends(get_local_timezone),
):
    """Totals since the start of the current week (Monday) or month.

    An unknown ``period`` is rejected with 422.
    """
    report = generate_report(repository, provider.current(), user_id, period, tz)
    return ReportOut.from_report(report)
