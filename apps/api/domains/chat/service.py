"""Chat service — turn one incoming message into reply texts.

Commands are matched case-insensitively anywhere in the message, in this
order: "báo cáo" (week + month report), "giá vàng", "giá bạc". A message
that is exactly "/test_noti" queues the market bulletin now. Anything
else is parsed as transactions.
"""

import unicodedata
from datetime import datetime, tzinfo

import structlog

from apps.api.core.errors import PersistenceError
from apps.api.domains.reports.service import generate_report
from apps.api.domains.transactions.repository import TransactionRepository
from apps.api.domains.transactions.service import record_parsed
from packages.ledger_parser import parse_transaction_text
from packages.market_rates.snapshot import RateSnapshot
from packages.reporting import (
    BULLETIN_FAILED_MESSAGE,
    BULLETIN_QUEUED_MESSAGE,
    HELP_MESSAGE,
    REPORT_FAILED_MESSAGES,
    SAVE_FAILED_MESSAGE,
    ReportPeriod,
    format_gold_price,
    format_report_message,
    format_saved_message,
    format_silver_price,
)

logger = structlog.get_logger()

REPORT_COMMAND = "báo cáo"
GOLD_COMMAND = "giá vàng"
SILVER_COMMAND = "giá bạc"
BULLETIN_COMMAND = "/test_noti"


def handle_message(
    user_id: str,
    text: str,
    repository: TransactionRepository,
    rates: RateSnapshot,
    tz: tzinfo,
    now: datetime | None = None,
) -> list[str]:
    """Replies to send back to ``user_id``, in order."""
    logger.info("chat_message_received", user_id=user_id, length=len(text))
    lowered = unicodedata.normalize("NFC", text).lower()

    if REPORT_COMMAND in lowered:
        return [_report_reply(repository, rates, user_id, tz, now)]
    if GOLD_COMMAND in lowered:
        return [format_gold_price(rates)]
    if SILVER_COMMAND in lowered:
        return [format_silver_price(rates)]
    if lowered.strip() == BULLETIN_COMMAND:
        return [_bulletin_reply(user_id)]

    parsed = parse_transaction_text(text)
    if not parsed:
        return [HELP_MESSAGE]

    replies = []
    saved = []
    for tx in parsed:
        try:
            record_parsed(repository, rates, user_id, tx)
        except PersistenceError:
            replies.append(SAVE_FAILED_MESSAGE)
            continue
        saved.append(tx)

    if saved:
        replies.append(format_saved_message(saved))
    return replies


def _report_reply(repository, rates, user_id, tz, now) -> str:
    reports = {}
    for period in (ReportPeriod.WEEK, ReportPeriod.MONTH):
        try:
            reports[period] = generate_report(repository, rates, user_id, period, tz, now=now)
        except PersistenceError:
            logger.warning("chat_report_failed", user_id=user_id, period=period.value)
            return REPORT_FAILED_MESSAGES[period.value]
    return format_report_message(reports[ReportPeriod.WEEK], reports[ReportPeriod.MONTH])


def queue_bulletin() -> None:
    """Queue one market bulletin on the Celery broker."""
    from apps.api.celery_app import celery_app  # noqa: F401  binds shared tasks to the broker
    from apps.api.tasks.bulletin_tasks import send_market_bulletin

    send_market_bulletin.delay()


def _bulletin_reply(user_id: str) -> str:
    try:
        queue_bulletin()
    except Exception as e:
        logger.error("bulletin_queue_failed", user_id=user_id, error=str(e))
        return BULLETIN_FAILED_MESSAGE
    logger.info("bulletin_queued", user_id=user_id)
    return BULLETIN_QUEUED_MESSAGE
