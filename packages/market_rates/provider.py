"""Process-wide market rate cache.

Readers call ``current()`` and never wait on the network. A single
background loop calls ``refresh()``, which builds a new immutable snapshot
and swaps it in under a lock, so a reader sees either the old snapshot or
the new one, never a mix.
"""

import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

import httpx

from .snapshot import FALLBACK_RATES, RateSnapshot
from .sources import DEFAULT_SOURCES, DEFAULT_TIMEOUT_SECONDS, RateSource, fetch_snapshot

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_SECONDS = 600


class RateProvider:
    """Owns the current RateSnapshot and keeps it fresh."""

    def __init__(
        self,
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
        sources: Sequence[RateSource] = DEFAULT_SOURCES,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        fallback: RateSnapshot = FALLBACK_RATES,
    ):
        self.timeout = timeout
        self.sources = sources
        self._client_factory = client_factory or (lambda: httpx.AsyncClient(timeout=timeout))
        self._snapshot = fallback
        self._lock = threading.Lock()
        self._refresh_lock = asyncio.Lock()

    def current(self) -> RateSnapshot:
        """Latest published snapshot, or the fallback if nothing was fetched yet."""
        with self._lock:
            return self._snapshot

    def publish(self, snapshot: RateSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def age_seconds(self, now: Optional[datetime] = None) -> Optional[float]:
        """Seconds since the current snapshot was fetched; None for the fallback."""
        fetched_at = self.current().fetched_at
        if fetched_at is None:
            return None
        now = now or datetime.now(timezone.utc)
        return (now - fetched_at).total_seconds()

    async def refresh(self) -> RateSnapshot:
        """Fetch every source once and publish the resulting snapshot."""
        async with self._refresh_lock:
            previous = self.current()
            async with self._client_factory() as client:
                snapshot = await fetch_snapshot(client, previous, self.timeout, self.sources)
            self.publish(snapshot)

        if snapshot.stale_sources:
            logger.warning(
                "Rates refreshed with stale sources: %s", ", ".join(sorted(snapshot.stale_sources))
            )
        else:
            logger.info("Rates refreshed (USD/VND %.0f)", snapshot.usd_vnd)
        return snapshot

    async def run_periodic(self, interval_seconds: float = DEFAULT_REFRESH_SECONDS) -> None:
        """Refresh immediately, then every ``interval_seconds`` until cancelled."""
        while True:
            try:
                await self.refresh()
            except Exception as e:
                logger.error(f"Rate refresh failed: {e}")
            await asyncio.sleep(interval_seconds)
