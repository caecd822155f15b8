"""Celery task for the scheduled market bulletin.

Runs on the beat schedule (BULLETIN_HOURS, local time): fetches fresh
rates, renders the bulletin and sends it to every known user whose id is
a Telegram chat id.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, Iterable, Optional
from zoneinfo import ZoneInfo

from celery import shared_task

from apps.api.core.errors import PersistenceError
from apps.api.tasks.telegram import TelegramNotifier
from packages.market_rates import RateProvider, RateSnapshot
from packages.reporting import format_market_bulletin

logger = logging.getLogger(__name__)


def _chat_ids(user_ids: Iterable[str]) -> list[int]:
    """User ids that parse as integers; others are not Telegram chats."""
    chat_ids = []
    for user_id in user_ids:
        try:
            chat_ids.append(int(user_id))
        except (TypeError, ValueError):
            logger.debug(f"Skipping non-numeric user id {user_id!r}")
    return chat_ids


def fetch_fresh_rates(timeout: float) -> RateSnapshot:
    """One refresh cycle outside the API process; falls back per source."""
    return asyncio.run(RateProvider(timeout=timeout).refresh())


def broadcast_bulletin(
    rates: RateSnapshot,
    user_ids: Iterable[str],
    notifier: TelegramNotifier,
    hour: int,
) -> int:
    """Send the bulletin to every chat id. Returns how many were delivered."""
    text = format_market_bulletin(rates, hour=hour)
    delivered = 0
    for chat_id in _chat_ids(user_ids):
        if notifier.send(chat_id, text):
            delivered += 1
    return delivered


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_market_bulletin(self, hour: Optional[int] = None) -> Dict:
    """Fetch rates, list users and push the market bulletin to each of them."""
    from apps.api.core.auth import get_app_settings, get_service_client
    from apps.api.domains.transactions.repository import TransactionRepository

    settings = get_app_settings()
    if hour is None:
        hour = datetime.now(ZoneInfo(settings.TIMEZONE)).hour

    rates = fetch_fresh_rates(settings.RATE_SOURCE_TIMEOUT_SECONDS)
    repository = TransactionRepository(get_service_client(), table=settings.TRANSACTIONS_TABLE)
    try:
        user_ids = repository.list_distinct_user_ids()
    except PersistenceError as e:
        logger.error(f"Bulletin aborted, user list unavailable: {e}")
        raise self.retry(exc=e)

    with TelegramNotifier(settings.TELEGRAM_TOKEN) as notifier:
        delivered = broadcast_bulletin(rates, user_ids, notifier, hour)

    logger.info(f"Market bulletin delivered to {delivered} of {len(user_ids)} users")
    return {"delivered": delivered, "users": len(user_ids), "hour": hour}
