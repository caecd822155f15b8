"""Long-running asyncio tasks started by the app lifespan.

- rate refresh: keeps the RateProvider snapshot fresh
- keep-alive: pings a peer URL so free-tier hosts do not put it to sleep
"""

import asyncio
from typing import Callable, Optional

import httpx
import structlog

from apps.api.core.config import Settings
from packages.market_rates import RateProvider

logger = structlog.get_logger()

KEEPALIVE_TIMEOUT_SECONDS = 10


async def ping_once(client: httpx.AsyncClient, url: str) -> Optional[int]:
    """GET ``url`` once; returns the status code, or None if the request failed."""
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        logger.warning("keepalive_failed", url=url, error=str(e))
        return None
    logger.info("keepalive_ok", url=url, status=response.status_code)
    return response.status_code


async def keep_alive(
    url: str,
    interval_seconds: float,
    client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
) -> None:
    """Ping ``url`` every ``interval_seconds`` until cancelled."""
    if not url:
        logger.info("keepalive_disabled")
        return

    factory = client_factory or (lambda: httpx.AsyncClient(timeout=KEEPALIVE_TIMEOUT_SECONDS))
    logger.info("keepalive_started", url=url, interval_s=interval_seconds)
    async with factory() as client:
        while True:
            await asyncio.sleep(interval_seconds)
            await ping_once(client, url)


def start_background_tasks(provider: RateProvider, settings: Settings) -> list[asyncio.Task]:
    """Schedule the refresh and keep-alive loops on the running event loop."""
    tasks = [
        asyncio.create_task(
            provider.run_periodic(settings.RATE_REFRESH_SECONDS), name="rate-refresh"
        ),
    ]
    if settings.KEEPALIVE_URL:
        tasks.append(
            asyncio.create_task(
                keep_alive(settings.KEEPALIVE_URL, settings.KEEPALIVE_INTERVAL_SECONDS),
                name="keep-alive",
            )
        )
    return tasks


async def stop_background_tasks(tasks: list[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
