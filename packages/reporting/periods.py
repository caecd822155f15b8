"""Report period boundaries.

Both periods are half-open ranges ``[start, now)`` whose start is local
midnight in the timezone of ``now``.
"""

from datetime import datetime, timedelta
from enum import Enum


class ReportPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"


def period_start(period: ReportPeriod, now: datetime) -> datetime:
    """
    Start of the current ``period`` relative to ``now``.

    Week starts on Monday (ISO); a Sunday belongs to the week that began
    six days earlier. Month starts on the 1st.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if ReportPeriod(period) is ReportPeriod.WEEK:
        return midnight - timedelta(days=now.isoweekday() - 1)
    return midnight.replace(day=1)
